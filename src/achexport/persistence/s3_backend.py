"""S3 storage backend for generated NACHA and export files."""

from __future__ import annotations

import logging

import boto3
from botocore.exceptions import ClientError

from achexport.core.exceptions import ExportStoreError

logger = logging.getLogger(__name__)


class S3FileStore:
    """Production IFileStore backed by S3.

    NACHA files contain account numbers: objects are written with SSE and
    their bodies are never logged. ``metadata`` (batch and company ids) is
    stored as S3 user metadata so files can be traced without opening them.
    """

    def __init__(self, bucket: str, region: str = "us-east-1",
                 endpoint_url: str | None = None) -> None:
        self._bucket = bucket
        kwargs: dict = {"region_name": region}
        if endpoint_url:
            kwargs["endpoint_url"] = endpoint_url
        self._client = boto3.client("s3", **kwargs)

    def read(self, path: str) -> bytes:
        try:
            obj = self._client.get_object(Bucket=self._bucket, Key=path)
        except ClientError as exc:
            code = exc.response.get("Error", {}).get("Code", "")
            raise ExportStoreError(f"S3 read failed for {path!r} ({code}): {exc}") from exc
        return obj["Body"].read()

    def write(self, path: str, data: bytes, content_type: str = "application/octet-stream",
              metadata: dict[str, str] | None = None) -> str:
        try:
            self._client.put_object(
                Bucket=self._bucket,
                Key=path,
                Body=data,
                ContentType=content_type,
                ServerSideEncryption="AES256",
                Metadata=metadata or {},
            )
        except ClientError as exc:
            raise ExportStoreError(f"S3 write failed for {path!r}: {exc}") from exc
        logger.info("Stored %s (%d bytes)", path, len(data),
                    extra={"bucket": self._bucket, **(metadata or {})})
        return path

    def list_files(self, prefix: str) -> list[str]:
        paginator = self._client.get_paginator("list_objects_v2")
        try:
            return [
                obj["Key"]
                for page in paginator.paginate(Bucket=self._bucket, Prefix=prefix)
                for obj in page.get("Contents", [])
            ]
        except ClientError as exc:
            raise ExportStoreError(f"S3 list failed for prefix={prefix!r}: {exc}") from exc
