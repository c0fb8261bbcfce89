"""Developer portal export, delete, import and publish operations.

This module provides the PortalOperations class that moves developer portal
content between an API Management service and a local folder:

    <folder>/data/<contentType>/<itemName>.json   content items
    <folder>/media/<blobName>[.ext]               media blobs

Each phase lists what it needs, then runs one batch of independent remote
calls and waits for the whole batch before the next phase starts.
"""

import logging
import os
from datetime import datetime, timezone
from typing import Callable, List, Optional, Sequence, Tuple

from src.apim_client.api_wrapper import APIWrapper
from src.apim_client.blob_storage import MediaContainer
from src.apim_client.errors import OperationError, ValidationError
from src.file_mapper.content_store import read_content_item, write_content_items
from src.file_mapper.errors import FilesystemError
from src.file_mapper.file_enumerator import list_files
from src.file_mapper.media_types import (
    blob_name_for_file,
    content_type_for_file,
    local_media_path,
)
from src.models import BlobEntry, ContentItem, ContentType, OperationResult, PortalRevision

from .batch import DEFAULT_MAX_WORKERS, run_batch

logger = logging.getLogger(__name__)

URL_CONTENT_TYPE = "url"

REVISION_TIMESTAMP_FORMAT = "%Y%m%d%H%M%S"


def current_timestamp() -> str:
    """UTC timestamp used as the default revision name (yyyyMMddHHmmss)."""
    return datetime.now(timezone.utc).strftime(REVISION_TIMESTAMP_FORMAT)


class PortalOperations:
    """Content and media operations for one developer portal.

    Configuration is fixed at construction; no state is kept between calls.

    Usage:
        api = APIWrapper(ResourceIdentifier.parse(service_id))
        ops = PortalOperations(api, folder="./snapshot")

        ops.export()            # service -> ./snapshot
        ops.delete()            # empty the service
        ops.import_()           # ./snapshot -> service
        ops.publish("v1")       # make the imported content live
    """

    def __init__(
        self,
        api: APIWrapper,
        folder: str = ".",
        max_workers: int = DEFAULT_MAX_WORKERS,
        container_factory: Callable[[str], MediaContainer] = MediaContainer,
        notify: Callable[[str], None] = print,
    ):
        """Initialize PortalOperations.

        Args:
            api: Control-plane wrapper for the target service
            folder: Local folder holding ``data/`` and ``media/``
            max_workers: Upper bound on concurrent remote calls per batch
            container_factory: Builds a media container from a SAS URL
            notify: Receives user-facing notices (skipped phases)
        """
        self.api = api
        self.folder = folder
        self.media_folder = os.path.join(folder, "media")
        self.data_folder = os.path.join(folder, "data")
        self.max_workers = max_workers
        self._container_factory = container_factory
        self._notify = notify

    def _get_container(self) -> MediaContainer:
        """Open the media container through a fresh SAS URL."""
        return self._container_factory(self.api.get_media_container_url())

    # Content

    def download_content(self) -> int:
        """Write every content item of every content type to ``data/``.

        Returns:
            Number of content items written
        """
        content_types = self.api.list_content_types()
        counts = run_batch(
            self._download_content_type,
            content_types,
            self.max_workers,
            "download content",
        )
        return sum(counts)

    def _download_content_type(self, content_type: ContentType) -> int:
        items = self.api.list_content_items(content_type.name)
        return write_content_items(self.data_folder, content_type.name, items)

    def delete_content(self) -> int:
        """Delete every content item of every content type.

        Returns:
            Number of content items deleted
        """
        targets: List[Tuple[str, str]] = []
        for content_type in self.api.list_content_types():
            for item in self.api.list_content_items(content_type.name):
                targets.append((content_type.name, item.name))

        run_batch(
            lambda target: self.api.delete_content_item(*target),
            targets,
            self.max_workers,
            "delete content",
        )
        return len(targets)

    def upload_content(self) -> int:
        """Upsert every content item file under ``data/``.

        All files are read and validated before the first upsert is sent, so
        a mismatched file aborts the phase without touching the service.

        Returns:
            Number of content items upserted
        """
        if not os.path.isdir(self.data_folder):
            logger.info(f"Content folder {self.data_folder} not found")
            self._notify("No content files found. Skipping content upload...")
            return 0

        uploads = [
            read_content_item(self.data_folder, file_path)
            for file_path in list_files(self.data_folder)
        ]
        run_batch(
            lambda upload: self.api.upsert_content_item(*upload),
            uploads,
            self.max_workers,
            "upload content",
        )
        return len(uploads)

    # Media

    def download_blobs(self) -> int:
        """Download every media blob into ``media/``.

        Returns:
            Number of blobs downloaded
        """
        container = self._get_container()
        blobs = container.list_blobs()
        run_batch(
            lambda blob: self._download_blob(container, blob),
            blobs,
            self.max_workers,
            "download media",
        )
        return len(blobs)

    def _download_blob(self, container: MediaContainer, blob: BlobEntry) -> None:
        file_path = local_media_path(self.media_folder, blob.name, blob.content_type)
        parent = os.path.dirname(os.path.abspath(file_path))
        try:
            os.makedirs(parent, exist_ok=True)
        except OSError as e:
            raise FilesystemError(parent, 'mkdir', str(e)) from e
        container.download_to_file(blob.name, file_path)

    def delete_blobs(self) -> int:
        """Delete every media blob.

        Returns:
            Number of blobs deleted
        """
        container = self._get_container()
        blobs = container.list_blobs()
        run_batch(
            lambda blob: container.delete_blob(blob.name),
            blobs,
            self.max_workers,
            "delete media",
        )
        return len(blobs)

    def upload_blobs(self) -> int:
        """Upload every file under ``media/`` as a blob.

        Returns:
            Number of blobs uploaded
        """
        if not os.path.isdir(self.media_folder):
            logger.info(f"Media folder {self.media_folder} not found")
            self._notify("No media files found. Skipping media upload...")
            return 0

        uploads = [
            (file_path, blob_name_for_file(self.media_folder, file_path), content_type_for_file(file_path))
            for file_path in list_files(self.media_folder)
        ]
        container = self._get_container()
        run_batch(
            lambda upload: container.upload_file(*upload),
            uploads,
            self.max_workers,
            "upload media",
        )
        return len(uploads)

    # Top-level operations

    def export(self) -> OperationResult:
        """Export content and media from the service into the local folder.

        Raises:
            OperationError: If any part of the export fails
        """
        logger.info(f"Exporting to {self.folder}")
        try:
            content_items = self.download_content()
            blobs = self.download_blobs()
        except Exception as e:
            logger.debug("Export failed", exc_info=True)
            raise OperationError("export", e) from e
        logger.info("Export DONE")
        return OperationResult("export", content_items=content_items, blobs=blobs)

    def delete(self) -> OperationResult:
        """Delete all content and media of the service.

        Raises:
            OperationError: If any part of the cleanup fails
        """
        logger.info("Cleaning up")
        try:
            content_items = self.delete_content()
            blobs = self.delete_blobs()
        except Exception as e:
            logger.debug("Cleanup failed", exc_info=True)
            raise OperationError("cleanup", e) from e
        logger.info("Cleanup DONE")
        return OperationResult("delete", content_items=content_items, blobs=blobs)

    def import_(self) -> OperationResult:
        """Import content and media from the local folder into the service.

        Raises:
            OperationError: If any part of the import fails
        """
        logger.info(f"Importing from {self.folder}")
        try:
            content_items = self.upload_content()
            blobs = self.upload_blobs()
        except Exception as e:
            logger.debug("Import failed", exc_info=True)
            raise OperationError("import", e) from e
        logger.info("Import DONE")
        return OperationResult("import", content_items=content_items, blobs=blobs)

    def publish(self, name: Optional[str] = None) -> OperationResult:
        """Publish the portal as a new current revision.

        Args:
            name: Revision name; defaults to the current UTC timestamp

        Raises:
            OperationError: If the revision cannot be created
        """
        revision_name = name or current_timestamp()
        logger.info(f"Publishing as {revision_name}")
        try:
            self.api.upsert_portal_revision(
                PortalRevision(name=revision_name, description=revision_name, is_current=True)
            )
        except Exception as e:
            logger.debug("Publish failed", exc_info=True)
            raise OperationError("publish", e) from e
        logger.info("Publish DONE")
        return OperationResult("publish", revision=revision_name)

    def update_content_urls(self, existing_urls: Sequence[str], replacement_urls: Sequence[str]) -> OperationResult:
        """Rewrite the permalinks of URL content items.

        Every ``url`` item whose permalink equals ``existing_urls[i]`` gets
        ``replacement_urls[i]`` and is upserted.

        Raises:
            ValidationError: If the two lists differ in length
            OperationError: If listing or upserting fails
        """
        if len(existing_urls) != len(replacement_urls):
            raise ValidationError(
                f"Existing and replacement URL lists differ in length "
                f"({len(existing_urls)} vs {len(replacement_urls)})."
            )
        replacements = dict(zip(existing_urls, replacement_urls))

        try:
            updated: List[ContentItem] = []
            for item in self.api.list_content_items(URL_CONTENT_TYPE):
                if item.permalink in replacements:
                    item.permalink = replacements[item.permalink]
                    updated.append(item)

            run_batch(
                lambda item: self.api.upsert_content_item(URL_CONTENT_TYPE, item.name, item),
                updated,
                self.max_workers,
                "update URLs",
            )
        except Exception as e:
            logger.debug("URL update failed", exc_info=True)
            raise OperationError("URL update", e) from e
        logger.info(f"Updated {len(updated)} URL item(s)")
        return OperationResult("url update", content_items=len(updated))
