"""S3 / LocalStack storage for task attachments.

Uses the synchronous boto3 client, run in a worker thread so uploads do not
block the event loop.
"""

import asyncio
import logging
import uuid
from datetime import datetime, timezone
from pathlib import PurePath
from typing import Any, BinaryIO

import boto3
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError

from taskstation.config import Settings
from taskstation.storage.base import FileStorage

logger = logging.getLogger(__name__)


class S3FileStorage(FileStorage):
    """Store attachments in an S3-compatible bucket.

    Usage::

        storage = S3FileStorage(
            bucket_name="task-station-files",
            service_url="http://localhost:4566",  # LocalStack
        )
        url = await storage.upload(stream, "report.pdf", "application/pdf")
    """

    def __init__(
        self,
        bucket_name: str,
        service_url: str,
        *,
        region_name: str = "us-east-1",
        access_key_id: str | None = None,
        secret_access_key: str | None = None,
        force_path_style: bool = True,
        client: Any = None,
    ) -> None:
        self.bucket_name = bucket_name
        self.service_url = service_url.rstrip("/")
        self._region_name = region_name
        self._access_key_id = access_key_id
        self._secret_access_key = secret_access_key
        self._force_path_style = force_path_style
        self._client = client

    @classmethod
    def from_settings(cls, settings: Settings) -> "S3FileStorage":
        """Build the storage from application settings."""
        return cls(
            bucket_name=settings.s3_bucket_name,
            service_url=settings.s3_service_url,
            region_name=settings.s3_region,
            access_key_id=settings.s3_access_key_id,
            secret_access_key=settings.s3_secret_access_key,
            force_path_style=settings.s3_force_path_style,
        )

    def _get_client(self) -> Any:
        if self._client is None:
            kwargs: dict[str, Any] = {
                "endpoint_url": self.service_url,
                "region_name": self._region_name,
            }
            if self._access_key_id:
                kwargs["aws_access_key_id"] = self._access_key_id
            if self._secret_access_key:
                kwargs["aws_secret_access_key"] = self._secret_access_key
            if self._force_path_style:
                kwargs["config"] = Config(s3={"addressing_style": "path"})
            self._client = boto3.client("s3", **kwargs)
        return self._client

    @staticmethod
    def object_key(file_name: str, now: datetime | None = None) -> str:
        """Build a unique key such as ``2026/10/19/<uuid>.pdf``."""
        now = now or datetime.now(timezone.utc)
        return f"{now:%Y/%m/%d}/{uuid.uuid4()}{PurePath(file_name).suffix}"

    def _ensure_bucket(self) -> None:
        kwargs: dict[str, Any] = {"Bucket": self.bucket_name}
        if self._region_name != "us-east-1":
            kwargs["CreateBucketConfiguration"] = {"LocationConstraint": self._region_name}
        try:
            self._get_client().create_bucket(**kwargs)
        except (BotoCoreError, ClientError) as exc:
            logger.warning(
                "Could not ensure S3 bucket '%s' exists, it may already exist: %s",
                self.bucket_name,
                exc,
            )

    def _put(self, stream: BinaryIO, key: str, content_type: str) -> None:
        self._get_client().upload_fileobj(
            stream,
            self.bucket_name,
            key,
            ExtraArgs={"ContentType": content_type, "ACL": "public-read"},
        )

    async def upload(self, stream: BinaryIO, file_name: str, content_type: str) -> str:
        await asyncio.to_thread(self._ensure_bucket)

        key = self.object_key(file_name)
        await asyncio.to_thread(self._put, stream, key, content_type)

        url = f"{self.service_url}/{self.bucket_name}/{key}"
        logger.info("File uploaded to S3: %s", url)
        return url
