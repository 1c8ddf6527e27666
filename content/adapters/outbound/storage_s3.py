from __future__ import annotations

from typing import Optional

import boto3
from botocore.config import Config

from app.core.config import settings
from content.ports.outbound.storage_port import StoragePort


def _client():
    return boto3.client(
        "s3",
        region_name=settings.s3_region,
        endpoint_url=settings.s3_endpoint_url,
        aws_access_key_id=settings.s3_access_key_id,
        aws_secret_access_key=settings.s3_secret_access_key,
        config=Config(
            connect_timeout=settings.storage_timeout_seconds,
            read_timeout=settings.storage_timeout_seconds,
            retries={"max_attempts": 1},
        ),
    )


class S3StorageAdapter(StoragePort):
    """
    Stores objects in one bucket and hands back their public URL.
    Uses the synchronous boto3 client; the image service calls it from a worker thread.
    """

    def __init__(self, client=None, bucket: Optional[str] = None):
        self.client = client or _client()
        self.bucket = bucket or settings.s3_bucket

    def public_url(self, key: str) -> str:
        if settings.s3_public_base_url:
            return f"{settings.s3_public_base_url.rstrip('/')}/{key}"
        return f"https://{self.bucket}.s3.{settings.s3_region}.amazonaws.com/{key}"

    def upload(self, key: str, data: bytes, content_type: str | None = None) -> str:
        extra = {"ContentType": content_type} if content_type else {}
        self.client.put_object(Bucket=self.bucket, Key=key, Body=data, **extra)
        return self.public_url(key)

    def delete(self, key: str) -> None:
        self.client.delete_object(Bucket=self.bucket, Key=key)
