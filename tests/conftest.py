"""Root pytest configuration for all tests.

Provides in-memory fakes of the management API and media container so no
test talks to Azure.
"""

import logging

import pytest

from src.portal_operations.portal_operations import PortalOperations
from tests.fixtures.portal_fakes import FakeMediaContainer, FakePortalAPI, make_item

# The storage SDK logs every request at INFO; keep test output readable.
logging.getLogger("azure").setLevel(logging.WARNING)


@pytest.fixture
def fake_container() -> FakeMediaContainer:
    return FakeMediaContainer({
        "logo": (b"\x89PNG logo", "image/png"),
        "fonts/brand.woff2": (b"wOF2 font", "font/woff2"),
    })


@pytest.fixture
def fake_api(fake_container: FakeMediaContainer) -> FakePortalAPI:
    """Service with pages, a layout, two url items and an empty type."""
    return FakePortalAPI(
        content={
            "page": [
                make_item("page", "home", title="Home", nodes=[{"type": "section"}]),
                make_item("page", "apis", title="APIs"),
            ],
            "layout": [make_item("layout", "default", title="Default layout")],
            "url": [
                make_item("url", "contoso", permalink="https://contoso.com", title="Contoso"),
                make_item("url", "docs", permalink="https://docs.contoso.com", title="Docs"),
            ],
            "blogpost": [],
        },
        container=fake_container,
    )


@pytest.fixture
def portal_ops(fake_api: FakePortalAPI, tmp_path) -> PortalOperations:
    """PortalOperations over the fakes, rooted at a temporary folder."""
    return PortalOperations(
        fake_api,
        folder=str(tmp_path),
        max_workers=4,
        container_factory=lambda url: fake_api.container,
        notify=lambda message: None,
    )
