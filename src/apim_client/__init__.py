"""API Management client library for developer portal migration.

This package provides Python abstractions over the Azure Resource Manager
content-item and portal-revision APIs and the portal media container,
with a typed error hierarchy shared by the rest of the tool.
"""

from .errors import (
    MigrationError,
    ValidationError,
    ContentTypeError,
    RemoteError,
    InvalidCredentialsError,
    ResourceNotFoundError,
    APIUnreachableError,
    APIAccessError,
    OperationError,
)
from .resource_id import APIM_SERVICE_TYPE, ResourceIdentifier

__all__ = [
    "MigrationError",
    "ValidationError",
    "ContentTypeError",
    "RemoteError",
    "InvalidCredentialsError",
    "ResourceNotFoundError",
    "APIUnreachableError",
    "APIAccessError",
    "OperationError",
    "APIM_SERVICE_TYPE",
    "ResourceIdentifier",
]
