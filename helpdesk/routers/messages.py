"""Message routes: read and append to a ticket's thread.

Implements:
- GET  /tickets/{ticket_id}/messages  -> list messages, oldest first (auth + access rules)
- POST /tickets/{ticket_id}/messages  -> add a reply as the caller (auth + access rules)
"""

from __future__ import annotations

import logging
from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from helpdesk import schemas
from helpdesk.auth import get_current_session
from helpdesk.database import get_db
from helpdesk.services import messages as message_service
from helpdesk.sessions import Session as CallerSession

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/tickets/{ticket_id}/messages", tags=["Messages"])


@router.get("", response_model=List[schemas.MessageResponse])
def list_messages(
    ticket_id: int,
    caller: CallerSession = Depends(get_current_session),
    db: Session = Depends(get_db),
) -> List[schemas.MessageResponse]:
    messages = message_service.list_messages(db, caller, ticket_id)
    return [schemas.MessageResponse.model_validate(m) for m in messages]


@router.post("", response_model=schemas.MessageResponse, status_code=status.HTTP_201_CREATED)
def create_message(
    ticket_id: int,
    payload: schemas.MessageCreate,
    caller: CallerSession = Depends(get_current_session),
    db: Session = Depends(get_db),
) -> schemas.MessageResponse:
    """Reply on a ticket. The sender is always the authenticated caller."""
    msg = message_service.append_message(db, caller, ticket_id, payload.message)
    return schemas.MessageResponse.model_validate(msg)
