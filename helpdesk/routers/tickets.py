"""Ticket routes: list, create, fetch and close."""

from __future__ import annotations

import logging
from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from helpdesk import schemas
from helpdesk.auth import get_current_session
from helpdesk.database import get_db
from helpdesk.dependencies import require_client
from helpdesk.services import tickets as ticket_service
from helpdesk.sessions import Session as CallerSession

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/tickets", tags=["Tickets"])


@router.get("", response_model=List[schemas.TicketResponse])
def list_tickets(
    caller: CallerSession = Depends(get_current_session),
    db: Session = Depends(get_db),
) -> List[schemas.TicketResponse]:
    """List tickets visible to the caller, newest first."""
    tickets = ticket_service.list_tickets(db, caller)
    return [schemas.TicketResponse.model_validate(t) for t in tickets]


@router.post("", response_model=schemas.TicketResponse, status_code=status.HTTP_201_CREATED)
def create_ticket(
    payload: schemas.TicketCreate,
    caller: CallerSession = Depends(require_client),
    db: Session = Depends(get_db),
) -> schemas.TicketResponse:
    """Open a ticket owned by the calling client."""
    ticket = ticket_service.create_ticket(
        db,
        caller,
        subject=payload.subject,
        description=payload.description,
        attachment_url=payload.attachment_url,
    )
    return schemas.TicketResponse.model_validate(ticket)


@router.get("/{ticket_id}", response_model=schemas.TicketResponse)
def get_ticket(
    ticket_id: int,
    caller: CallerSession = Depends(get_current_session),
    db: Session = Depends(get_db),
) -> schemas.TicketResponse:
    """Return a single ticket if the caller may see it, 404 otherwise."""
    return schemas.TicketResponse.model_validate(ticket_service.get_ticket(db, caller, ticket_id))


@router.post("/{ticket_id}/close", response_model=schemas.CloseTicketResponse)
def close_ticket(
    ticket_id: int,
    caller: CallerSession = Depends(get_current_session),
    db: Session = Depends(get_db),
) -> schemas.CloseTicketResponse:
    ticket_service.close_ticket(db, caller, ticket_id)
    return schemas.CloseTicketResponse()
