"""Reading and writing content items in the local export folder.

Content items live at ``data/<contentType>/<itemName>.json``. The folder and
file name are the source of truth on import: an item whose ``name`` or
type segment of ``id`` disagrees with its location is rejected before any
remote call is made.
"""

import json
import logging
import os
from typing import List, Tuple

from src.apim_client.errors import ValidationError
from src.models import ContentItem

from .errors import FilesystemError

logger = logging.getLogger(__name__)

CONTENT_FILE_SUFFIX = ".json"


def content_item_path(data_folder: str, content_type: str, name: str) -> str:
    return os.path.join(data_folder, content_type, f"{name}{CONTENT_FILE_SUFFIX}")


def write_content_items(data_folder: str, content_type: str, items: List[ContentItem]) -> int:
    """Write the items of one content type as pretty-printed JSON files.

    The type folder is only created when there is at least one item.

    Returns:
        Number of files written

    Raises:
        FilesystemError: If the folder or a file cannot be written
    """
    if not items:
        return 0

    folder = os.path.join(data_folder, content_type)
    try:
        os.makedirs(folder, exist_ok=True)
    except OSError as e:
        raise FilesystemError(folder, 'mkdir', str(e)) from e

    for item in items:
        file_path = content_item_path(data_folder, content_type, item.name)
        try:
            with open(file_path, 'w', encoding='utf-8') as f:
                json.dump(item.to_dict(), f, indent=2, ensure_ascii=False)
        except OSError as e:
            raise FilesystemError(file_path, 'write', str(e)) from e

    logger.debug(f"Wrote {len(items)} {content_type} item(s) to {folder}")
    return len(items)


def read_content_item(data_folder: str, file_path: str) -> Tuple[str, str, ContentItem]:
    """Read a content item file and check it matches its location.

    The expected content type is the file's folder relative to the data
    folder and the expected item name is the file name without ``.json``.
    Files nested deeper than one level therefore never validate.

    Returns:
        Tuple of (expected content type, expected item name, parsed item)

    Raises:
        FilesystemError: If the file cannot be read
        ValidationError: If the file is not a content item JSON object, or
                         its name or type does not match the file location
    """
    relative = os.path.relpath(file_path, data_folder)
    expected_type = os.path.dirname(relative).replace(os.sep, "/")
    expected_name = os.path.basename(relative)
    if expected_name.endswith(CONTENT_FILE_SUFFIX):
        expected_name = expected_name[:-len(CONTENT_FILE_SUFFIX)]

    try:
        with open(file_path, 'r', encoding='utf-8') as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise ValidationError(f"Content item file {file_path} is not valid JSON: {e}") from e
    except OSError as e:
        raise FilesystemError(file_path, 'read', str(e)) from e

    try:
        item = ContentItem.from_dict(data)
    except ValueError as e:
        raise ValidationError(f"Content item file {file_path}: {e}") from e

    if item.name != expected_name or item.content_type_name != expected_type:
        raise ValidationError(
            f"Content item {item.id} does not match expected name {expected_name} "
            f"or type {expected_type}."
        )

    return expected_type, expected_name, item
