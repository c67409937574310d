"""SQLAlchemy models for the helpdesk service.

Models implemented:
- UserModel (seeded out of band, read only here)
- TicketModel
- MessageModel

Uses SQLAlchemy 2.0 typing (Mapped, mapped_column) and the declarative Base from `helpdesk.database`.
"""

from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum as PyEnum
from typing import List, Optional

from sqlalchemy import DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from helpdesk.database import Base


class Role(str, PyEnum):
    CLIENT = "client"
    AGENT = "agent"


class TicketStatus(str, PyEnum):
    OPEN = "open"
    CLOSED = "closed"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class UserModel(Base):
    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    email: Mapped[str] = mapped_column(String(255), unique=True, index=True, nullable=False)
    password: Mapped[str] = mapped_column(String(255), nullable=False)
    user_type: Mapped[str] = mapped_column(String(50), nullable=False)

    @property
    def role(self) -> Role:
        return Role(self.user_type)

    def __repr__(self) -> str:  # pragma: no cover - convenience only
        return f"<User id={self.id} email={self.email} type={self.user_type}>"


class TicketModel(Base):
    __tablename__ = "tickets"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True, autoincrement=True)
    email: Mapped[str] = mapped_column(String(255), index=True, nullable=False)
    subject: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    status: Mapped[str] = mapped_column(String(50), default=TicketStatus.OPEN.value, nullable=False)
    attachment_url: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    closed_by: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_utcnow, index=True)

    messages: Mapped[List["MessageModel"]] = relationship(
        "MessageModel",
        back_populates="ticket",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    def __repr__(self) -> str:
        return f"<Ticket id={self.id} subject={self.subject} status={self.status}>"


class MessageModel(Base):
    __tablename__ = "messages"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True, autoincrement=True)
    ticket_id: Mapped[int] = mapped_column(Integer, ForeignKey("tickets.id", ondelete="CASCADE"), index=True, nullable=False)
    sender_email: Mapped[str] = mapped_column(String(255), nullable=False)
    message: Mapped[str] = mapped_column(Text, nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_utcnow)

    ticket = relationship("TicketModel", back_populates="messages")

    def __repr__(self) -> str:
        return f"<Message id={self.id} ticket_id={self.ticket_id} sender={self.sender_email}>"


__all__ = [
    "Role",
    "TicketStatus",
    "UserModel",
    "TicketModel",
    "MessageModel",
]
