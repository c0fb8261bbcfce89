"""Wrapper for the developer portal media container.

The container is reached through a short-lived SAS URL handed out by the
control plane, so no separate storage credential is needed. Storage SDK
errors are translated to the same typed hierarchy as control-plane errors.
"""

import logging
from typing import List

from azure.core.exceptions import (
    AzureError,
    ClientAuthenticationError,
    ResourceNotFoundError as AzureResourceNotFoundError,
    ServiceRequestError,
)
from azure.storage.blob import ContainerClient, ContentSettings

from src.models import BlobEntry

from .errors import (
    APIAccessError,
    APIUnreachableError,
    InvalidCredentialsError,
    RemoteError,
    ResourceNotFoundError,
)

logger = logging.getLogger(__name__)


class MediaContainer:
    """Blob operations on the portal media container.

    Example:
        >>> container = MediaContainer(api.get_media_container_url())
        >>> for blob in container.list_blobs():
        ...     print(blob.name, blob.content_type)
    """

    def __init__(self, container_url: str):
        """Initialize the container client from a SAS URL.

        Args:
            container_url: Container URL including the SAS query string
        """
        self._client = ContainerClient.from_container_url(container_url)
        self.account_url = container_url.split("?", 1)[0]

    def _translate_error(self, exception: AzureError, operation: str) -> RemoteError:
        """Translate storage SDK exceptions to typed remote exceptions."""
        if isinstance(exception, ClientAuthenticationError):
            return InvalidCredentialsError(endpoint=self.account_url, reason="SAS token rejected")
        if isinstance(exception, AzureResourceNotFoundError):
            return ResourceNotFoundError(resource=operation)
        if isinstance(exception, ServiceRequestError):
            return APIUnreachableError(endpoint=self.account_url)
        logger.error(f"Storage operation failed: {operation} - {exception.message}")
        return APIAccessError(f"Storage failure during {operation}: {exception.message}")

    def list_blobs(self) -> List[BlobEntry]:
        """List every blob in the container in one flat listing."""
        try:
            return [
                BlobEntry(
                    name=blob.name,
                    content_type=blob.content_settings.content_type if blob.content_settings else None,
                )
                for blob in self._client.list_blobs()
            ]
        except AzureError as e:
            raise self._translate_error(e, "list_blobs") from e

    def download_to_file(self, blob_name: str, file_path: str) -> None:
        """Copy a blob's content into ``file_path``, replacing the file."""
        try:
            downloader = self._client.download_blob(blob_name)
            with open(file_path, "wb") as f:
                downloader.readinto(f)
        except AzureError as e:
            raise self._translate_error(e, f"download_blob({blob_name})") from e

    def upload_file(self, file_path: str, blob_name: str, content_type: str) -> None:
        """Upload ``file_path`` as ``blob_name`` with the given content type."""
        try:
            with open(file_path, "rb") as f:
                self._client.upload_blob(
                    name=blob_name,
                    data=f,
                    overwrite=True,
                    content_settings=ContentSettings(content_type=content_type),
                )
        except AzureError as e:
            raise self._translate_error(e, f"upload_blob({blob_name})") from e

    def delete_blob(self, blob_name: str) -> None:
        """Delete a blob (and its snapshots)."""
        try:
            self._client.delete_blob(blob_name, delete_snapshots="include")
        except AzureError as e:
            raise self._translate_error(e, f"delete_blob({blob_name})") from e

    def close(self) -> None:
        self._client.close()
