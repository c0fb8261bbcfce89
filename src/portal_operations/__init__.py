"""Portal operations module for developer portal migration.

This module provides the high-level operations that move developer portal
content and media between an API Management service and a local folder.

Key classes:
    PortalOperations: Export, delete, import, publish and URL rewriting
    run_batch: Fire-all-then-join execution of independent remote calls
"""

from .batch import DEFAULT_MAX_WORKERS, run_batch
from .portal_operations import PortalOperations, current_timestamp

__all__ = [
    "PortalOperations",
    "current_timestamp",
    "run_batch",
    "DEFAULT_MAX_WORKERS",
]
