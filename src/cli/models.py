"""Data models for CLI operations.

All models use dataclasses, following the patterns established in
src/models.
"""

from dataclasses import dataclass, field
from enum import IntEnum
from typing import List, Optional

from src.apim_client.api_wrapper import DEFAULT_ENDPOINT
from src.portal_operations.batch import DEFAULT_MAX_WORKERS


class ExitCode(IntEnum):
    """Exit codes for CLI operations.

    - SUCCESS (0): Every requested operation completed
    - GENERAL_ERROR (1): Invalid input, local file problems, unexpected errors
    - AUTH_ERROR (3): Authentication or authorization failure
    - NETWORK_ERROR (4): Remote API unreachable or failing

    Example:
        >>> sys.exit(ExitCode.SUCCESS)
    """
    SUCCESS = 0
    GENERAL_ERROR = 1
    AUTH_ERROR = 3
    NETWORK_ERROR = 4


@dataclass
class Settings:
    """Environment-level settings, loaded from the process environment and .env.

    Attributes:
        endpoint: ARM host name (DEVPORTAL_ENDPOINT)
        max_workers: Concurrent remote calls per batch (DEVPORTAL_MAX_WORKERS)
    """
    endpoint: str = DEFAULT_ENDPOINT
    max_workers: int = DEFAULT_MAX_WORKERS


@dataclass
class UrlMapping:
    """Parallel lists of permalinks to rewrite, read from a YAML file.

    Example YAML:
        existing:
          - https://old.example.com/docs
        replacement:
          - https://new.example.com/docs
    """
    existing: List[str] = field(default_factory=list)
    replacement: List[str] = field(default_factory=list)


@dataclass
class MigrationRequest:
    """Operations requested on the command line.

    ``import_revision`` and ``publish_revision`` are None when the option was
    not given and an empty string when it was given without a name.

    Attributes:
        resource_id: Resource id of the API Management service
        path: Local folder holding data/ and media/
        export: Export content and media to ``path``
        delete: Delete all content and media from the service
        import_revision: Import from ``path``; a non-empty value also
                         publishes under that revision name
        publish_revision: Publish; empty means a timestamp revision name
        update_urls_file: YAML URL mapping to apply to url content items
    """
    resource_id: str
    path: str = "."
    export: bool = False
    delete: bool = False
    import_revision: Optional[str] = None
    publish_revision: Optional[str] = None
    update_urls_file: Optional[str] = None

    @property
    def do_import(self) -> bool:
        return self.import_revision is not None

    @property
    def do_publish(self) -> bool:
        return self.publish_revision is not None or bool(self.import_revision)

    @property
    def revision_name(self) -> Optional[str]:
        """Explicit revision name, preferring --publish over --import."""
        return self.publish_revision or self.import_revision or None

    @property
    def has_operations(self) -> bool:
        return (
            self.export
            or self.delete
            or self.do_import
            or self.do_publish
            or self.update_urls_file is not None
        )
