from sqlalchemy import inspect

from helpdesk import database as app_db
from helpdesk.models import MessageModel, TicketModel, UserModel
from helpdesk.seed import DEMO_PASSWORD, seed_demo_users


def test_init_db_creates_tables():
    engine = app_db.engine

    # Ensure clean state
    app_db.Base.metadata.drop_all(bind=engine)
    app_db.init_db(bind=engine)

    tables = inspect(engine).get_table_names()
    assert {"users", "tickets", "messages"} <= set(tables)

    columns = {c["name"] for c in inspect(engine).get_columns("tickets")}
    assert columns == {"id", "email", "subject", "description", "status", "attachment_url", "closed_by", "created_at"}


def test_seed_is_idempotent(db_session):
    assert seed_demo_users(db_session) == 2
    assert seed_demo_users(db_session) == 0

    users = {u.email: u for u in db_session.query(UserModel).all()}
    assert users["client@demo.com"].user_type == "client"
    assert users["agent@demo.com"].user_type == "agent"
    assert users["agent@demo.com"].password == DEMO_PASSWORD


def test_app_startup_seeds_demo_users(client, db_session):
    emails = {u.email for u in db_session.query(UserModel).all()}
    assert {"client@demo.com", "agent@demo.com"} <= emails


def test_deleting_a_ticket_removes_its_messages(db_session):
    ticket = TicketModel(email="c@acme.io", subject="S", description="D")
    db_session.add(ticket)
    db_session.commit()
    db_session.add_all([
        MessageModel(ticket_id=ticket.id, sender_email="c@acme.io", message="one"),
        MessageModel(ticket_id=ticket.id, sender_email="c@acme.io", message="two"),
    ])
    db_session.commit()
    assert db_session.query(MessageModel).count() == 2

    db_session.delete(ticket)
    db_session.commit()
    assert db_session.query(MessageModel).count() == 0


def test_new_ticket_defaults(db_session):
    ticket = TicketModel(email="c@acme.io", subject="S", description="D")
    db_session.add(ticket)
    db_session.commit()
    db_session.refresh(ticket)

    assert ticket.status == "open"
    assert ticket.closed_by is None
    assert ticket.created_at is not None
