"""Authentication helpers: credential verification, session issue and the token dependency."""

from __future__ import annotations

import logging
from typing import Optional

from fastapi import Depends, Request
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session as DBSession

from helpdesk import models
from helpdesk.errors import InvalidCredentials, Unauthenticated, UpstreamFailure
from helpdesk.sessions import Session, SessionStore, mint_token

logger = logging.getLogger(__name__)

BEARER_PREFIX = "bearer "


def get_session_store(request: Request) -> SessionStore:
    """Return the session store owned by the running application."""
    return request.app.state.sessions


def verify_credentials(db: DBSession, email: str, password: str) -> Optional[models.UserModel]:
    try:
        return (
            db.query(models.UserModel)
            .filter(models.UserModel.email == email, models.UserModel.password == password)
            .first()
        )
    except SQLAlchemyError:
        logger.exception("Credential lookup failed for %s", email)
        raise UpstreamFailure()


def authenticate(db: DBSession, store: SessionStore, email: str, password: str) -> Session:
    """Verify `email`/`password` and register a new session for the user.

    Unknown email and wrong password raise the same `InvalidCredentials` so the
    response never reveals which accounts exist.
    """
    user = verify_credentials(db, email, password)
    if user is None:
        logger.info("Login failed for %s", email)
        raise InvalidCredentials()

    try:
        role = user.role
    except ValueError:
        logger.error("User %s has unknown user_type %r", user.email, user.user_type)
        raise UpstreamFailure()

    session = Session(token=mint_token(user.email), user_id=user.id, email=user.email, role=role)
    store.put(session)
    logger.info("User logged in: %s (%s)", session.email, session.role.value)
    return session


def extract_token(authorization: Optional[str]) -> Optional[str]:
    """Return the opaque token carried verbatim in the Authorization header.

    A `Bearer ` scheme prefix is accepted and stripped.
    """
    if not authorization:
        return None
    token = authorization.strip()
    if token.lower().startswith(BEARER_PREFIX):
        token = token[len(BEARER_PREFIX):].strip()
    return token or None


def get_current_session(request: Request, store: SessionStore = Depends(get_session_store)) -> Session:
    """Dependency that returns the caller's session or raises 401."""
    session = store.resolve(extract_token(request.headers.get("Authorization")))
    if session is None:
        logger.debug("Rejected request to %s: missing or unknown token", request.url.path)
        raise Unauthenticated()
    return session


__all__ = [
    "get_session_store",
    "verify_credentials",
    "authenticate",
    "extract_token",
    "get_current_session",
]
