"""Ticket lifecycle: create, list, fetch and close tickets on behalf of a caller.

Every function takes the caller's resolved `Session` and applies the rules in
`helpdesk.dependencies` before touching a row. Database errors are logged with
the operation and ticket id and surface as `UpstreamFailure`.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import List, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session as DBSession

from helpdesk import models
from helpdesk.database import safe_rollback
from helpdesk.dependencies import ensure_client, require_ticket_access, scope_ticket_query
from helpdesk.errors import NotFound, UpstreamFailure, ValidationError
from helpdesk.sessions import Session

logger = logging.getLogger(__name__)


def _upstream(db: DBSession, operation: str, ticket_id: Optional[int] = None) -> UpstreamFailure:
    logger.exception("Database error during %s (ticket=%s)", operation, ticket_id)
    safe_rollback(db)
    return UpstreamFailure()


def list_tickets(db: DBSession, caller: Session) -> List[models.TicketModel]:
    """Agents see every ticket, clients only their own; newest first."""
    try:
        query = scope_ticket_query(db.query(models.TicketModel), caller)
        return query.order_by(models.TicketModel.created_at.desc(), models.TicketModel.id.desc()).all()
    except SQLAlchemyError:
        raise _upstream(db, "list_tickets")


def create_ticket(
    db: DBSession,
    caller: Session,
    subject: str,
    description: str,
    attachment_url: Optional[str] = None,
) -> models.TicketModel:
    """Open a new ticket owned by the calling client.

    The owner is always the caller; `attachment_url` is stored as given.
    """
    ensure_client(caller)

    if not (subject or "").strip() or not (description or "").strip():
        raise ValidationError("Missing required fields")

    ticket = models.TicketModel(
        email=caller.email,
        subject=subject,
        description=description,
        status=models.TicketStatus.OPEN.value,
        attachment_url=attachment_url or None,
        closed_by=None,
        created_at=datetime.now(timezone.utc),
    )
    try:
        db.add(ticket)
        db.commit()
        db.refresh(ticket)
    except SQLAlchemyError:
        raise _upstream(db, "create_ticket")

    logger.info("Ticket #%d created by %s", ticket.id, ticket.email)
    return ticket


def get_ticket(db: DBSession, caller: Session, ticket_id: int) -> models.TicketModel:
    """Fetch one ticket.

    For clients the owner filter is part of the query, so another client's
    ticket is indistinguishable from a missing one.
    """
    try:
        query = scope_ticket_query(db.query(models.TicketModel), caller)
        ticket = query.filter(models.TicketModel.id == ticket_id).first()
    except SQLAlchemyError:
        raise _upstream(db, "get_ticket", ticket_id)
    if ticket is None:
        raise NotFound()
    return ticket


def load_ticket(db: DBSession, ticket_id: int) -> models.TicketModel:
    """Fetch a ticket by id without any caller scoping; raises `NotFound`."""
    try:
        ticket = db.query(models.TicketModel).filter(models.TicketModel.id == ticket_id).first()
    except SQLAlchemyError:
        raise _upstream(db, "load_ticket", ticket_id)
    if ticket is None:
        raise NotFound()
    return ticket


def close_ticket(db: DBSession, caller: Session, ticket_id: int) -> models.TicketModel:
    """Mark a ticket closed and record who closed it.

    Closing an already closed ticket is allowed and records the new closer.
    """
    ticket = load_ticket(db, ticket_id)
    require_ticket_access(caller, ticket)

    ticket.status = models.TicketStatus.CLOSED.value
    ticket.closed_by = caller.email
    try:
        db.commit()
        db.refresh(ticket)
    except SQLAlchemyError:
        raise _upstream(db, "close_ticket", ticket_id)

    logger.info("Ticket #%d closed by %s", ticket.id, caller.email)
    return ticket


__all__ = ["list_tickets", "create_ticket", "get_ticket", "load_ticket", "close_ticket"]
