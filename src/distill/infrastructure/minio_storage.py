"""MinIO implementation of the StorageGateway interface."""

from datetime import timedelta
from typing import BinaryIO

from minio import Minio

from distill.domain.models import StorageReference
from distill.exceptions import UploadError
from distill.infrastructure.interfaces import StorageGateway
from distill.logging import setup_logging

logger = setup_logging()

DEFAULT_REGION = "us-east-1"


class MinioStorageGateway(StorageGateway):
    """Handles object storage operations against any S3-compatible endpoint."""

    def __init__(
        self,
        client: Minio,
        presign_expiry: timedelta = timedelta(hours=1),
        region: str | None = None,
    ):
        self._client = client
        self._presign_expiry = presign_expiry
        self._region = region

    def upload(
        self,
        bucket_name: str,
        object_name: str,
        data: BinaryIO,
        size: int,
        content_type: str,
    ) -> StorageReference:
        region = self.resolve_region(bucket_name)
        try:
            self._client.put_object(
                bucket_name=bucket_name,
                object_name=object_name,
                data=data,
                length=size,
                content_type=content_type,
            )
        except Exception as e:
            logger.exception(
                "Object storage upload failed",
                extra={"bucket_name": bucket_name, "object_name": object_name},
            )
            raise UploadError(bucket_name, object_name, e) from e

        logger.info(
            "File uploaded to object storage",
            extra={
                "bucket_name": bucket_name,
                "object_name": object_name,
                "region": region,
                "size": size,
            },
        )
        return StorageReference(
            bucket_name=bucket_name, object_name=object_name, region=region
        )

    def resolve_region(self, bucket_name: str) -> str:
        if self._region:
            return self._region
        try:
            # minio only exposes the bucket location lookup through _get_region
            location = self._client._get_region(bucket_name)
        except Exception as e:
            logger.exception(
                "Bucket region lookup failed", extra={"bucket_name": bucket_name}
            )
            raise UploadError(bucket_name, "", e) from e
        return location or DEFAULT_REGION

    def ensure_bucket_exists(self, bucket_name: str) -> None:
        try:
            exists = self._client.bucket_exists(bucket_name)
        except Exception as e:
            logger.exception("Bucket check failed", extra={"bucket_name": bucket_name})
            raise UploadError(bucket_name, "", e) from e

        if not exists:
            logger.error("Bucket not found", extra={"bucket_name": bucket_name})
            raise UploadError(
                bucket_name, "", LookupError(f"bucket '{bucket_name}' was not found")
            )
        logger.info("Bucket found", extra={"bucket_name": bucket_name})

    def presigned_url(self, reference: StorageReference) -> str:
        try:
            return self._client.presigned_get_object(
                reference.bucket_name,
                reference.object_name,
                expires=self._presign_expiry,
            )
        except Exception as e:
            logger.exception(
                "Presigned URL generation failed",
                extra={
                    "bucket_name": reference.bucket_name,
                    "object_name": reference.object_name,
                },
            )
            raise UploadError(reference.bucket_name, reference.object_name, e) from e
