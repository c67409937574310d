"""Seed utilities for creating the demo accounts.

Contains `seed_demo_users`, called on startup and reusable from scripts/tests.
"""
from __future__ import annotations

import logging

from sqlalchemy.orm import Session

from helpdesk import models

logger = logging.getLogger(__name__)

DEMO_PASSWORD = "password123"
DEMO_USERS = [
    ("client@demo.com", models.Role.CLIENT),
    ("agent@demo.com", models.Role.AGENT),
]


def seed_demo_users(db: Session) -> int:
    """Insert the demo client and agent when their emails are not taken. Returns how many were created.

    Idempotent: existing rows are never touched.
    """
    created = 0
    for email, role in DEMO_USERS:
        exists = db.query(models.UserModel).filter(models.UserModel.email == email).first()
        if exists:
            continue
        db.add(models.UserModel(email=email, password=DEMO_PASSWORD, user_type=role.value))
        created += 1
    db.commit()
    if created:
        logger.info("Seeded %d demo user(s)", created)
    return created


__all__ = ["DEMO_PASSWORD", "DEMO_USERS", "seed_demo_users"]
