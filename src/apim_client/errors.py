"""Typed exception hierarchy for developer portal migration errors.

This module defines the custom exceptions used by the API Management client
library. All exceptions inherit from MigrationError so the CLI can catch any
application-level failure in one place, and each carries enough context in
its message to debug a failed batch.
"""

from typing import Optional


class MigrationError(Exception):
    """Base exception for all devportal-migrate errors.

    Use this to catch any application-level error from the migration tool.
    """
    pass


class ValidationError(MigrationError):
    """Raised when an input fails validation before any remote call is made.

    Covers malformed resource identifiers, content items whose name or type
    disagree with their location on disk, and mismatched URL lists.
    """

    def __init__(self, message: str):
        super().__init__(message)


class ContentTypeError(MigrationError):
    """Raised when a content type has no file extension mapping or vice versa."""

    def __init__(self, subject: str, message: str):
        super().__init__(message)
        self.subject = subject


class RemoteError(MigrationError):
    """Base exception for failures of the control-plane or storage APIs."""
    pass


class InvalidCredentialsError(RemoteError):
    """Raised when the credential provider or the service rejects authentication."""

    def __init__(self, endpoint: str, reason: Optional[str] = None):
        message = f"Authentication failed for {endpoint}"
        if reason:
            message += f": {reason}"
        super().__init__(message)
        self.endpoint = endpoint
        self.reason = reason


class ResourceNotFoundError(RemoteError):
    """Raised when a requested remote resource does not exist."""

    def __init__(self, resource: str):
        super().__init__(f"Resource {resource} not found")
        self.resource = resource


class APIUnreachableError(RemoteError):
    """Raised when the remote API is not available or unreachable."""

    def __init__(self, endpoint: str):
        super().__init__(f"API is not available at {endpoint}")
        self.endpoint = endpoint


class APIAccessError(RemoteError):
    """Raised when a remote call fails for any other reason."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class OperationError(MigrationError):
    """Raised by the top-level operations to name the phase that failed.

    The original exception is kept as ``cause`` and chained with ``from`` so
    the full traceback remains available to debug logging.
    """

    def __init__(self, operation: str, cause: Exception):
        super().__init__(f"Unable to complete {operation}. {cause}")
        self.operation = operation
        self.cause = cause
