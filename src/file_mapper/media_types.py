"""Mapping between media blobs and local files.

Blobs at the top of the media container are stored without a file
extension; their content type carries that information instead. Locally
every media file has an extension so it can be opened and re-uploaded with
the right content type:

    blob ``logo`` (image/png)      <->  media/logo.png
    blob ``img/logo.png``          <->  media/img/logo.png
"""

import mimetypes
import os

from src.apim_client.errors import ContentTypeError

DEFAULT_CONTENT_TYPE = "application/octet-stream"

# Built-in table only, so results do not depend on the host's mime.types
_MIME = mimetypes.MimeTypes()
for _content_type, _extension in (
    ("image/webp", ".webp"),
    ("image/svg+xml", ".svg"),
    ("font/woff", ".woff"),
    ("font/woff2", ".woff2"),
    ("font/ttf", ".ttf"),
    ("application/json", ".json"),
):
    _MIME.add_type(_content_type, _extension)

# Extension chosen for a content type when several are registered
_PREFERRED_EXTENSIONS = {
    "image/jpeg": "jpeg",
}


def extension_for_content_type(content_type: str) -> str:
    """Return the file extension (without dot) for a content type.

    Parameters such as ``; charset=utf-8`` are ignored and a missing content
    type is treated as ``application/octet-stream``.

    Raises:
        ContentTypeError: If no extension is known for the content type
    """
    media_type = (content_type or DEFAULT_CONTENT_TYPE).split(";", 1)[0].strip().lower()
    if media_type in _PREFERRED_EXTENSIONS:
        return _PREFERRED_EXTENSIONS[media_type]
    extension = _MIME.guess_extension(media_type)
    if not extension:
        raise ContentTypeError(
            content_type,
            f"Unable to determine file extension for content type {content_type}."
        )
    return extension.lstrip(".")


def content_type_for_file(file_path: str) -> str:
    """Return the content type implied by a file's extension.

    Raises:
        ContentTypeError: If the extension is missing or unknown
    """
    content_type, _encoding = _MIME.guess_type(file_path)
    if not content_type:
        raise ContentTypeError(
            file_path,
            f"Unable to determine content type for file {file_path}."
        )
    return content_type


def local_media_path(media_folder: str, blob_name: str, content_type: str) -> str:
    """Local file path for a blob.

    The extension derived from ``content_type`` is appended only when the
    blob name has none of its own.

    Raises:
        ContentTypeError: If the content type has no known extension
    """
    extension = extension_for_content_type(content_type)
    file_path = os.path.join(media_folder, *blob_name.split("/"))
    if not os.path.splitext(file_path)[1]:
        file_path += f".{extension}"
    return file_path


def blob_name_for_file(media_folder: str, file_path: str) -> str:
    """Blob name for a local media file.

    The name is the path relative to the media folder with ``/`` separators.
    Files directly in the media folder lose their extension; files in
    subfolders keep it.
    """
    blob_name = os.path.relpath(file_path, media_folder).replace(os.sep, "/")
    if "/" not in blob_name:
        blob_name = os.path.splitext(blob_name)[0]
    return blob_name
