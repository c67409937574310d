"""In-process session store mapping bearer tokens to authenticated identities.

Sessions live only for the lifetime of the process: nothing is persisted and
tokens do not expire. One `SessionStore` is created per application instance
(see `helpdesk.main.create_app`) and shared by every request thread.
"""

from __future__ import annotations

import threading
import time
import uuid
from dataclasses import dataclass
from typing import Dict, Optional

from helpdesk.models import Role


@dataclass(frozen=True)
class Session:
    """Snapshot of the user a token was issued to."""

    token: str
    user_id: int
    email: str
    role: Role

    @property
    def is_agent(self) -> bool:
        return self.role is Role.AGENT

    @property
    def is_client(self) -> bool:
        return self.role is Role.CLIENT


def mint_token(email: str) -> str:
    """Build a unique opaque token from the email, the current time and a short random suffix."""
    return f"{email}-{int(time.time())}-{uuid.uuid4().hex[:8]}"


class SessionStore:
    """Thread-safe token -> Session mapping."""

    def __init__(self) -> None:
        self._sessions: Dict[str, Session] = {}
        self._lock = threading.Lock()

    def put(self, session: Session) -> None:
        with self._lock:
            self._sessions[session.token] = session

    def resolve(self, token: Optional[str]) -> Optional[Session]:
        if not token:
            return None
        with self._lock:
            return self._sessions.get(token)

    def __len__(self) -> int:
        with self._lock:
            return len(self._sessions)

    def __contains__(self, token: object) -> bool:
        with self._lock:
            return token in self._sessions


__all__ = ["Session", "SessionStore", "mint_token"]
