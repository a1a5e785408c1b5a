"""
Storage proxy over an S3-compatible bucket.

Every user supplied filename is confined to ``<base_path>/`` on the way in and
the prefix is stripped again from keys coming back from the store. Each call
builds its own client and runs the blocking boto3 request in a worker thread.
"""

from __future__ import annotations

import asyncio
from datetime import datetime, timezone
from typing import Any, Callable, List, Optional, Tuple, TypeVar

from storage_gateway.domain.entities import FileInfo
from storage_gateway.domain.exceptions import StorageConfigError, StorageError
from storage_gateway.infra.config.logging_config import get_logger
from storage_gateway.infra.storage.client import ClientFactory

log = get_logger("storage")

DEFAULT_CONTENT_TYPE = "application/octet-stream"

T = TypeVar("T")


def format_timestamp(value: Any) -> str:
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            value = value.astimezone(timezone.utc)
            return value.strftime("%Y-%m-%dT%H:%M:%SZ")
        return value.isoformat()
    if value is None:
        return "Unknown"
    return str(value)


class ObjectStorage:
    def __init__(
        self,
        bucket: Optional[str],
        client_factory: ClientFactory,
        base_path: str = "content/md",
    ) -> None:
        self.bucket = bucket
        self.base_path = base_path.strip("/")
        self._client_factory = client_factory

    def full_path(self, filename: str) -> str:
        return f"{self.base_path}/{filename}"

    def strip_base_path(self, key: str) -> str:
        prefix = f"{self.base_path}/"
        if key.startswith(prefix):
            return key[len(prefix):]
        return key

    def _bucket(self) -> str:
        if not self.bucket:
            raise StorageConfigError(["R2_BUCKET_NAME"])
        return self.bucket

    async def _run(self, operation: str, key: str, call: Callable[[Any, str], T]) -> T:
        def work() -> T:
            bucket = self._bucket()
            return call(self._client_factory(), bucket)

        try:
            return await asyncio.to_thread(work)
        except StorageError as e:
            log.error("storage.failed", operation=operation, key=key, error=e.message)
            raise
        except Exception as e:
            log.exception("storage.failed", operation=operation, key=key, error=str(e))
            raise StorageError(str(e)) from e

    async def list_files(
        self, prefix: Optional[str] = None, limit: Optional[int] = None
    ) -> List[FileInfo]:
        """Fetch a single page of objects under the namespace.

        ``limit`` is passed through as MaxKeys, so it truncates, it does not
        paginate.
        """
        full_prefix = self.full_path(prefix) if prefix is not None else f"{self.base_path}/"

        def call(client: Any, bucket: str) -> dict:
            params = {"Bucket": bucket, "Prefix": full_prefix}
            if limit is not None:
                params["MaxKeys"] = limit
            return client.list_objects_v2(**params)

        response = await self._run("list", full_prefix, call)
        return [
            FileInfo(
                name=self.strip_base_path(obj.get("Key", "")),
                size=int(obj.get("Size") or 0),
                last_modified=format_timestamp(obj.get("LastModified")),
            )
            for obj in response.get("Contents", [])
        ]

    async def upload(self, filename: str, data: bytes, content_type: str) -> None:
        key = self.full_path(filename)

        def call(client: Any, bucket: str) -> None:
            client.put_object(Bucket=bucket, Key=key, Body=data, ContentType=content_type)

        await self._run("upload", key, call)

    async def download(self, filename: str) -> Tuple[bytes, str]:
        key = self.full_path(filename)

        def call(client: Any, bucket: str) -> Tuple[bytes, str]:
            response = client.get_object(Bucket=bucket, Key=key)
            body = response["Body"]
            try:
                data = body.read()
            finally:
                body.close()
            return data, response.get("ContentType") or DEFAULT_CONTENT_TYPE

        return await self._run("download", key, call)

    async def delete(self, filename: str) -> None:
        key = self.full_path(filename)

        def call(client: Any, bucket: str) -> None:
            client.delete_object(Bucket=bucket, Key=key)

        await self._run("delete", key, call)
