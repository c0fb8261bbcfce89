"""Test fixtures for developer portal migration tests.

This module provides in-memory fakes of the management API and the portal
media container, plus helpers to build content items.
"""

from .portal_fakes import (
    CONTAINER_URL,
    SERVICE_ID,
    FakeMediaContainer,
    FakePortalAPI,
    make_item,
)

__all__ = [
    "CONTAINER_URL",
    "SERVICE_ID",
    "FakeMediaContainer",
    "FakePortalAPI",
    "make_item",
]
