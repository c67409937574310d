"""Message threads on tickets.

The parent ticket is loaded and authorized first; a client reaching another
client's ticket gets a 403, an unknown id a 404. Replies are accepted whatever
the ticket status.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import List

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session as DBSession

from helpdesk import models
from helpdesk.database import safe_rollback
from helpdesk.dependencies import require_ticket_access
from helpdesk.errors import UpstreamFailure, ValidationError
from helpdesk.services.tickets import load_ticket
from helpdesk.sessions import Session

logger = logging.getLogger(__name__)


def _authorized_ticket(db: DBSession, caller: Session, ticket_id: int) -> models.TicketModel:
    ticket = load_ticket(db, ticket_id)
    require_ticket_access(caller, ticket)
    return ticket


def list_messages(db: DBSession, caller: Session, ticket_id: int) -> List[models.MessageModel]:
    """Return the ticket's thread, oldest first."""
    _authorized_ticket(db, caller, ticket_id)
    try:
        return (
            db.query(models.MessageModel)
            .filter(models.MessageModel.ticket_id == ticket_id)
            .order_by(models.MessageModel.created_at.asc(), models.MessageModel.id.asc())
            .all()
        )
    except SQLAlchemyError:
        logger.exception("Database error listing messages for ticket #%d", ticket_id)
        safe_rollback(db)
        raise UpstreamFailure()


def append_message(db: DBSession, caller: Session, ticket_id: int, body: str) -> models.MessageModel:
    """Add a reply from the caller to the ticket's thread."""
    _authorized_ticket(db, caller, ticket_id)

    if not (body or "").strip():
        raise ValidationError("Message cannot be empty")

    msg = models.MessageModel(
        ticket_id=ticket_id,
        sender_email=caller.email,
        message=body,
        created_at=datetime.now(timezone.utc),
    )
    try:
        db.add(msg)
        db.commit()
        db.refresh(msg)
    except SQLAlchemyError:
        logger.exception("Database error adding message to ticket #%d", ticket_id)
        safe_rollback(db)
        raise UpstreamFailure()

    logger.info("Message added to ticket #%d by %s", ticket_id, caller.email)
    return msg


__all__ = ["list_messages", "append_message"]
