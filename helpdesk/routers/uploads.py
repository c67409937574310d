"""Upload route: push a ticket attachment to object storage and return its URL."""

from __future__ import annotations

import logging
from typing import Optional

from fastapi import APIRouter, Depends, File, UploadFile

from helpdesk import schemas
from helpdesk.auth import get_current_session
from helpdesk.errors import ValidationError
from helpdesk.services.attachments import MAX_ATTACHMENT_BYTES, check_size, ingest_attachment
from helpdesk.sessions import Session as CallerSession
from helpdesk.storage import S3ObjectStore, get_object_store

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Attachments"])


@router.post("/upload", response_model=schemas.UploadResponse)
def upload(
    file: Optional[UploadFile] = File(None),
    caller: CallerSession = Depends(get_current_session),
    store: S3ObjectStore = Depends(get_object_store),
) -> schemas.UploadResponse:
    """Accept a multipart `file` of at most 5 MiB and return a 7-day download URL."""
    if file is None:
        raise ValidationError("Failed to get file")

    if file.size is not None:
        check_size(file.size)
    # read one byte past the ceiling so oversized bodies are caught without loading them whole
    data = file.file.read(MAX_ATTACHMENT_BYTES + 1)
    check_size(len(data))

    url = ingest_attachment(store, caller, data, file.filename, content_type=file.content_type)
    return schemas.UploadResponse(url=url)
