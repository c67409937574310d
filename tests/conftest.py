"""Pytest fixtures for helpdesk tests.

Points DATABASE_URL at a throwaway SQLite file before the app is imported,
builds a fresh app (and so a fresh session store) per test, and backs the
object store with a boto3 S3 client wrapped in a botocore Stubber.
"""

import os

os.environ["DATABASE_URL"] = os.getenv("TEST_DATABASE_URL", "sqlite:///./test_helpdesk.db")

import boto3
import pytest
from botocore.config import Config
from botocore.stub import Stubber
from fastapi.testclient import TestClient

import helpdesk.database as database
from helpdesk.main import create_app
from helpdesk.models import Base, UserModel
from helpdesk.storage import S3ObjectStore


TEST_BUCKET = "helpdesk-test-attachments"

engine = database.engine
TestingSessionLocal = database.SessionLocal


@pytest.fixture(autouse=True)
def setup_database():
    """Create tables before each test and drop them after to ensure isolation."""
    Base.metadata.create_all(bind=engine)
    try:
        yield
    finally:
        # Drop all tables to start clean for next test
        Base.metadata.drop_all(bind=engine)


@pytest.fixture()
def db_session():
    """Provide a SQLAlchemy session for direct DB access in tests."""
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()


def _override_get_db():
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture()
def s3_stub():
    """Stubbed S3 client; queue responses with `s3_stub.add_response(...)`."""
    s3 = boto3.client(
        "s3",
        region_name="us-east-1",
        aws_access_key_id="testing",
        aws_secret_access_key="testing",
        config=Config(signature_version="s3v4"),
    )
    with Stubber(s3) as stubber:
        yield stubber


@pytest.fixture()
def app(s3_stub):
    application = create_app(object_store=S3ObjectStore(s3_stub.client, TEST_BUCKET))
    application.dependency_overrides[database.get_db] = _override_get_db
    return application


@pytest.fixture()
def client(app):
    """FastAPI test client; entering it runs the lifespan (tables + demo users)."""
    with TestClient(app) as c:
        yield c


# Helper: create a user directly in DB for tests
@pytest.fixture()
def create_user(db_session):
    def _create_user(user_type: str = "client", email: str | None = None, password: str = "secret123"):
        email = email or f"{user_type}-{os.urandom(4).hex()}@acme.io"
        user = UserModel(email=email, password=password, user_type=user_type)
        db_session.add(user)
        db_session.commit()
        db_session.refresh(user)
        return user

    return _create_user


@pytest.fixture()
def auth_headers(client, create_user):
    """Return a helper that creates a user, logs in and returns (headers, user)."""
    def _auth_headers(user_type: str = "client", email: str | None = None, password: str = "secret123"):
        user = create_user(user_type=user_type, email=email, password=password)
        resp = client.post("/login", json={"email": user.email, "password": password})
        assert resp.status_code == 200
        token = resp.json()["token"]
        return {"Authorization": token}, user

    return _auth_headers
