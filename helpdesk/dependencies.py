"""Role and ownership rules applied to every ticket and message operation.

Provides:
- require_client (FastAPI dependency, raises 403 for agents)
- can_access_ticket (boolean check)
- require_ticket_access (raises 403 when access denied)
- scope_ticket_query (restricts a ticket query to what the caller may see)

Rules:
- Agents can read, close and reply to every ticket but cannot create one
- Clients can create tickets and only touch tickets whose owner email is their own
"""

from __future__ import annotations

import logging

from fastapi import Depends
from sqlalchemy.orm import Query

from helpdesk import models
from helpdesk.auth import get_current_session
from helpdesk.errors import PermissionDenied
from helpdesk.sessions import Session

logger = logging.getLogger(__name__)


def ensure_client(session: Session) -> Session:
    if not session.is_client:
        logger.debug("ensure_client: denied for %s", session.email)
        raise PermissionDenied("Only clients can create tickets")
    return session


def require_client(session: Session = Depends(get_current_session)) -> Session:
    """Dependency that ensures the current caller is a client."""
    return ensure_client(session)


def can_access_ticket(session: Session, ticket: models.TicketModel) -> bool:
    """Return True if `session` may read or act on `ticket`."""
    if session.is_agent:
        return True
    if session.is_client:
        return ticket.email == session.email
    return False


def require_ticket_access(session: Session, ticket: models.TicketModel) -> Session:
    """Raise 403 if the caller cannot access the ticket, otherwise return the session."""
    if not can_access_ticket(session, ticket):
        logger.debug("require_ticket_access: denied for ticket=%s user=%s", ticket.id, session.email)
        raise PermissionDenied()
    return session


def scope_ticket_query(query: Query, session: Session) -> Query:
    """Filter a `TicketModel` query down to the tickets the caller may see."""
    if session.is_agent:
        return query
    return query.filter(models.TicketModel.email == session.email)


__all__ = [
    "ensure_client",
    "require_client",
    "can_access_ticket",
    "require_ticket_access",
    "scope_ticket_query",
]
