"""Data models for developer portal content, media, revisions and results."""

from src.models.content_item import BlobEntry, ContentItem, ContentType, PortalRevision
from src.models.operation_result import OperationResult

__all__ = ['BlobEntry', 'ContentItem', 'ContentType', 'PortalRevision', 'OperationResult']
