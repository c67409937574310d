"""Attachment ingestion: store an uploaded file and return a time-limited URL for it.

The URL is embedded verbatim in the ticket the client creates next. The upload
and the ticket are not linked transactionally; a file whose ticket is never
created simply stays in the bucket.
"""

from __future__ import annotations

import logging
import os
import time
import uuid
from typing import Optional

from helpdesk.errors import ValidationError
from helpdesk.sessions import Session
from helpdesk.storage import S3ObjectStore

logger = logging.getLogger(__name__)

MAX_ATTACHMENT_BYTES = 5 * 1024 * 1024
PRESIGNED_URL_TTL_SECONDS = 7 * 24 * 60 * 60
KEY_PREFIX = "attachments/"


def attachment_key(caller: Session, filename: Optional[str]) -> str:
    ext = os.path.splitext(os.path.basename(filename or ""))[1]
    return f"{KEY_PREFIX}{caller.email}-{int(time.time())}-{uuid.uuid4().hex[:8]}{ext}"


def check_size(size: int) -> None:
    if size > MAX_ATTACHMENT_BYTES:
        raise ValidationError("File too large")


def ingest_attachment(
    store: S3ObjectStore,
    caller: Session,
    data: bytes,
    filename: Optional[str],
    content_type: Optional[str] = None,
) -> str:
    """Write `data` to the object store and return a presigned URL valid for 7 days."""
    check_size(len(data))

    key = attachment_key(caller, filename)
    store.put(key, data, content_type=content_type)
    url = store.presign(key, PRESIGNED_URL_TTL_SECONDS)

    logger.info("File uploaded: %s (%d bytes)", key, len(data))
    return url


__all__ = ["MAX_ATTACHMENT_BYTES", "PRESIGNED_URL_TTL_SECONDS", "attachment_key", "check_size", "ingest_attachment"]
