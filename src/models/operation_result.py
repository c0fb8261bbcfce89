"""Operation result data model."""

from dataclasses import dataclass
from typing import Optional


@dataclass
class OperationResult:
    """Counts of what an export, delete or import touched.

    Attributes:
        operation: Operation name (export, delete, import, publish, url update)
        content_items: Number of content items written, deleted or upserted
        blobs: Number of media blobs downloaded, deleted or uploaded
        revision: Revision name for publish operations
    """
    operation: str
    content_items: int = 0
    blobs: int = 0
    revision: Optional[str] = None
