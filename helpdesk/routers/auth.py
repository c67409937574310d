"""Authentication API routes: login."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from helpdesk import schemas
from helpdesk.auth import authenticate, get_session_store
from helpdesk.database import get_db
from helpdesk.sessions import SessionStore

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Authentication"])


@router.post("/login", response_model=schemas.LoginResponse)
def login(
    credentials: schemas.LoginRequest,
    db: Session = Depends(get_db),
    store: SessionStore = Depends(get_session_store),
) -> schemas.LoginResponse:
    """Check email and password and return the user with a fresh session token."""
    session = authenticate(db, store, credentials.email, credentials.password)
    return schemas.LoginResponse(
        id=session.user_id,
        email=session.email,
        user_type=session.role,
        token=session.token,
    )
