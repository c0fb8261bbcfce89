"""Typed exception hierarchy for file mapper errors.

This module defines the exceptions raised while reading and writing the
local export folder. All exceptions inherit from FileMapperError, itself a
MigrationError, and include the path and failed operation in their message.
"""

from typing import Optional

from src.apim_client.errors import MigrationError


class FileMapperError(MigrationError):
    """Base exception for all file mapper errors."""
    pass


class FilesystemError(FileMapperError):
    """Raised when filesystem operations fail (read, write, mkdir, listing)."""

    def __init__(self, file_path: str, operation: str, reason: Optional[str] = None):
        message = f"Filesystem operation '{operation}' failed for {file_path}"
        if reason:
            message += f": {reason}"
        super().__init__(message)
        self.file_path = file_path
        self.operation = operation
        self.reason = reason
