"""Unit tests for file_mapper.media_types module."""

import os

import pytest

from src.apim_client.errors import ContentTypeError
from src.file_mapper.media_types import (
    blob_name_for_file,
    content_type_for_file,
    extension_for_content_type,
    local_media_path,
)

MEDIA = os.path.join("export", "media")


class TestExtensionForContentType:
    """Test cases for extension_for_content_type."""

    @pytest.mark.parametrize("content_type, extension", [
        ("image/png", "png"),
        ("image/svg+xml", "svg"),
        ("image/webp", "webp"),
        ("font/woff2", "woff2"),
        ("application/json", "json"),
        ("image/jpeg", "jpeg"),
        ("IMAGE/JPEG; charset=binary", "jpeg"),
    ])
    def test_known_types(self, content_type, extension):
        assert extension_for_content_type(content_type) == extension

    def test_missing_type_defaults_to_octet_stream(self):
        assert extension_for_content_type(None) == "bin"
        assert extension_for_content_type("") == "bin"

    def test_parameters_and_case_ignored(self):
        assert extension_for_content_type("Image/PNG; charset=binary") == "png"

    def test_unknown_type_raises(self):
        with pytest.raises(ContentTypeError) as exc_info:
            extension_for_content_type("application/x-made-up")

        assert str(exc_info.value) == (
            "Unable to determine file extension for content type application/x-made-up."
        )
        assert exc_info.value.subject == "application/x-made-up"


class TestContentTypeForFile:
    """Test cases for content_type_for_file."""

    @pytest.mark.parametrize("file_name, content_type", [
        ("logo.png", "image/png"),
        ("icon.svg", "image/svg+xml"),
        ("brand.woff2", "font/woff2"),
        ("data.json", "application/json"),
    ])
    def test_known_extensions(self, file_name, content_type):
        assert content_type_for_file(os.path.join(MEDIA, file_name)) == content_type

    def test_no_extension_raises(self):
        with pytest.raises(ContentTypeError) as exc_info:
            content_type_for_file("README")

        assert str(exc_info.value) == "Unable to determine content type for file README."

    def test_unknown_extension_raises(self):
        with pytest.raises(ContentTypeError):
            content_type_for_file("archive.madeupext")


class TestLocalMediaPath:
    """Test cases for local_media_path."""

    def test_appends_extension_when_missing(self):
        assert local_media_path(MEDIA, "logo", "image/png") == os.path.join(MEDIA, "logo.png")

    def test_keeps_existing_extension(self):
        path = local_media_path(MEDIA, "img/logo.jpeg", "image/png")

        assert path == os.path.join(MEDIA, "img", "logo.jpeg")

    def test_nested_blob_without_extension(self):
        path = local_media_path(MEDIA, "fonts/brand", "font/woff2")

        assert path == os.path.join(MEDIA, "fonts", "brand.woff2")

    def test_unknown_content_type_raises_even_with_extension(self):
        with pytest.raises(ContentTypeError):
            local_media_path(MEDIA, "logo.png", "application/x-made-up")


class TestBlobNameForFile:
    """Test cases for blob_name_for_file."""

    def test_top_level_file_loses_extension(self):
        assert blob_name_for_file(MEDIA, os.path.join(MEDIA, "logo.png")) == "logo"

    def test_nested_file_keeps_extension(self):
        file_path = os.path.join(MEDIA, "img", "logo.png")

        assert blob_name_for_file(MEDIA, file_path) == "img/logo.png"

    def test_deeply_nested_uses_forward_slashes(self):
        file_path = os.path.join(MEDIA, "a", "b", "c.svg")

        assert blob_name_for_file(MEDIA, file_path) == "a/b/c.svg"

    def test_round_trip_with_local_media_path(self):
        """A top-level blob exported and re-imported keeps its name."""
        local = local_media_path(MEDIA, "logo", "image/png")

        assert blob_name_for_file(MEDIA, local) == "logo"
        assert content_type_for_file(local) == "image/png"

    def test_top_level_jpeg_uses_jpeg_extension(self):
        local = local_media_path(MEDIA, "hero", "image/jpeg")

        assert local == os.path.join(MEDIA, "hero.jpeg")
        assert content_type_for_file(local) == "image/jpeg"
