"""Object storage for ticket attachments, backed by Amazon S3 through boto3.

Configuration comes from the environment:
- S3_BUCKET_NAME: bucket receiving attachments
- AWS_REGION: region for the S3 client (credentials follow the usual boto3 chain)
"""

from __future__ import annotations

import logging
import os
from typing import Any, Optional

import boto3
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError
from fastapi import Request

from helpdesk.errors import UpstreamFailure

logger = logging.getLogger(__name__)

S3_BUCKET_NAME = os.getenv("S3_BUCKET_NAME", "")
AWS_REGION = os.getenv("AWS_REGION") or None


class S3ObjectStore:
    """Put bytes under a key and hand out presigned GET URLs for them."""

    def __init__(self, client: Any, bucket: str):
        self.client = client
        self.bucket = bucket

    @classmethod
    def from_env(cls) -> "S3ObjectStore":
        client = boto3.client("s3", region_name=AWS_REGION, config=Config(signature_version="s3v4"))
        logger.info("S3 client initialized (bucket=%s region=%s)", S3_BUCKET_NAME or "<unset>", AWS_REGION or "<default>")
        return cls(client, S3_BUCKET_NAME)

    def put(self, key: str, data: bytes, content_type: Optional[str] = None) -> None:
        params = {"Bucket": self.bucket, "Key": key, "Body": data}
        if content_type:
            params["ContentType"] = content_type
        try:
            self.client.put_object(**params)
        except (ClientError, BotoCoreError) as exc:
            logger.error("S3 upload error for %s: %s", key, exc)
            raise UpstreamFailure("Failed to upload file")

    def presign(self, key: str, expires_in: int) -> str:
        try:
            return self.client.generate_presigned_url(
                "get_object",
                Params={"Bucket": self.bucket, "Key": key},
                ExpiresIn=expires_in,
            )
        except (ClientError, BotoCoreError) as exc:
            logger.error("Presign error for %s: %s", key, exc)
            raise UpstreamFailure("Failed to generate URL")


def get_object_store(request: Request) -> S3ObjectStore:
    """Return the application's object store, building the S3 client on first use."""
    store = getattr(request.app.state, "object_store", None)
    if store is None:
        store = S3ObjectStore.from_env()
        request.app.state.object_store = store
    return store


__all__ = ["S3ObjectStore", "get_object_store"]
