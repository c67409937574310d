"""Pydantic schemas for the helpdesk API.

Request bodies and response shapes for login, tickets, messages and uploads.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from helpdesk.models import Role, TicketStatus


# ----------------------------- Auth ----------------------------------
class LoginRequest(BaseModel):
    # Matched byte for byte against the stored address, so no normalisation here
    email: str
    password: str


class LoginResponse(BaseModel):
    id: int
    email: str
    user_type: Role
    token: str


# ----------------------------- Tickets -------------------------------
class TicketCreate(BaseModel):
    # Blank values are rejected by the service with a 400, not here with a 422
    subject: str = Field("", max_length=200)
    description: str = ""
    attachment_url: Optional[str] = None


class TicketResponse(BaseModel):
    id: int
    email: str
    subject: str
    description: str
    status: TicketStatus
    attachment_url: Optional[str] = None
    closed_by: Optional[str] = None
    created_at: datetime

    model_config = {"from_attributes": True}


class CloseTicketResponse(BaseModel):
    message: str = "Ticket closed successfully"


# ----------------------------- Messages ------------------------------
class MessageCreate(BaseModel):
    message: str = ""


class MessageResponse(BaseModel):
    id: int
    ticket_id: int
    sender_email: str
    message: str
    created_at: datetime

    model_config = {"from_attributes": True}


# ----------------------------- Uploads -------------------------------
class UploadResponse(BaseModel):
    url: str


# ----------------------------- System --------------------------------
class HealthResponse(BaseModel):
    status: str = "healthy"


__all__ = [
    "LoginRequest",
    "LoginResponse",
    "TicketCreate",
    "TicketResponse",
    "CloseTicketResponse",
    "MessageCreate",
    "MessageResponse",
    "UploadResponse",
    "HealthResponse",
]
