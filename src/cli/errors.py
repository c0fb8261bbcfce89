"""Typed exception hierarchy for CLI-related errors.

All exceptions inherit from CLIError, which is itself a MigrationError, so
the command object can catch every application failure in one place.
"""

from typing import Optional

from src.apim_client.errors import MigrationError


class CLIError(MigrationError):
    """Base exception for all CLI-related errors."""
    pass


class ConfigError(CLIError):
    """Raised when environment settings or the URL mapping file are invalid."""

    def __init__(self, message: str, config_field: Optional[str] = None):
        if config_field:
            full_message = f"Configuration error in field '{config_field}': {message}"
        else:
            full_message = f"Configuration error: {message}"
        super().__init__(full_message)
        self.config_field = config_field
        self.original_message = message
