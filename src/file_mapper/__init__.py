"""File mapper library for developer portal exports.

This package maps remote developer portal content onto the local export
folder: content items as JSON files under ``data/`` and media blobs as files
under ``media/``.
"""

from .content_store import content_item_path, read_content_item, write_content_items
from .errors import FileMapperError, FilesystemError
from .file_enumerator import list_files
from .media_types import (
    blob_name_for_file,
    content_type_for_file,
    extension_for_content_type,
    local_media_path,
)

__all__ = [
    'content_item_path',
    'read_content_item',
    'write_content_items',
    'FileMapperError',
    'FilesystemError',
    'list_files',
    'blob_name_for_file',
    'content_type_for_file',
    'extension_for_content_type',
    'local_media_path',
]
