"""Abstract interface for object storage operations."""

from abc import ABC, abstractmethod
from typing import BinaryIO

from distill.domain.models import StorageReference


class StorageGateway(ABC):
    """Abstract base class for object storage backends."""

    @abstractmethod
    def upload(
        self,
        bucket_name: str,
        object_name: str,
        data: BinaryIO,
        size: int,
        content_type: str,
    ) -> StorageReference:
        """
        Uploads a byte stream to storage.

        Args:
            bucket_name: The storage bucket name.
            object_name: The destination key in storage.
            data: File-like object containing the data.
            size: Size of the data in bytes.
            content_type: MIME type of the data.

        Returns:
            StorageReference naming the stored object and its region.

        Raises:
            UploadError: If the upload fails.
        """

    @abstractmethod
    def resolve_region(self, bucket_name: str) -> str:
        """
        Resolves the region a bucket lives in.

        Raises:
            UploadError: If the bucket location cannot be read.
        """

    @abstractmethod
    def ensure_bucket_exists(self, bucket_name: str) -> None:
        """
        Verifies a bucket exists.

        Raises:
            UploadError: If the bucket is missing or cannot be checked.
        """

    @abstractmethod
    def presigned_url(self, reference: StorageReference) -> str:
        """
        Returns a time-limited download URL for a stored object.

        Raises:
            UploadError: If the URL cannot be produced.
        """
