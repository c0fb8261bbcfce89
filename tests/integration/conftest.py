"""Pytest configuration and fixtures for integration tests.

Integration tests wire real PortalOperations, file mapping and CLI code to
the in-memory service fakes, so whole migrations run without Azure.
"""

import pytest

from tests.fixtures.portal_fakes import FakeMediaContainer, FakePortalAPI, make_item


@pytest.fixture
def source_service() -> FakePortalAPI:
    """A populated service to migrate from."""
    return FakePortalAPI(
        content={
            "page": [
                make_item("page", "home", title="Home", locales={"en-us": {"nodes": []}}),
                make_item("page", "apis", title="APIs"),
            ],
            "layout": [make_item("layout", "default", title="Default")],
            "url": [make_item("url", "docs", permalink="https://docs.contoso.com")],
            "document": [make_item("document", "styles", nodes=[{"type": "style"}])],
        },
        container=FakeMediaContainer({
            "logo": (b"\x89PNG logo", "image/png"),
            "favicon": (b"\x89PNG icon", None),
            "img/hero.svg": (b"<svg/>", "image/svg+xml"),
        }),
    )


@pytest.fixture
def target_service() -> FakePortalAPI:
    """A service holding stale content that a migration replaces."""
    return FakePortalAPI(
        content={"page": [make_item("page", "stale", title="Old")], "url": []},
        container=FakeMediaContainer({"old-banner": (b"old", "image/png")}),
    )
