"""Command-line interface for developer portal migration.

This package provides the `devportal-migrate` CLI tool that exports,
deletes, imports and publishes API Management developer portal content,
with spinner output, a run summary and meaningful exit codes.
"""

from .migrate_command import MigrateCommand
from .models import ExitCode, MigrationRequest, Settings, UrlMapping
from .errors import CLIError, ConfigError

__all__ = [
    'MigrateCommand',
    'ExitCode',
    'MigrationRequest',
    'Settings',
    'UrlMapping',
    'CLIError',
    'ConfigError',
]
