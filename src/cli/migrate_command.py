"""Migration command orchestration for CLI.

This module provides the MigrateCommand class that runs the requested
developer portal operations in a fixed order and translates failures to
exit codes.
"""

import logging
from typing import List, Optional

from src.apim_client.api_wrapper import APIWrapper
from src.apim_client.auth import Authenticator
from src.apim_client.errors import (
    APIAccessError,
    APIUnreachableError,
    InvalidCredentialsError,
    MigrationError,
    OperationError,
    ValidationError,
)
from src.apim_client.resource_id import ResourceIdentifier
from src.cli.config import SettingsLoader, UrlMappingLoader
from src.cli.errors import ConfigError
from src.cli.models import ExitCode, MigrationRequest, Settings
from src.cli.output import OutputHandler
from src.models import OperationResult
from src.portal_operations.portal_operations import PortalOperations

logger = logging.getLogger(__name__)


class MigrateCommand:
    """Runs export, delete, import, URL update and publish for one service.

    Operations always run in that order, each one only if requested. The
    first failing operation stops the run.

    Example:
        >>> output = OutputHandler(verbosity=1)
        >>> command = MigrateCommand(output_handler=output)
        >>> exit_code = command.run(MigrationRequest(resource_id, export=True))
        >>> sys.exit(exit_code)
    """

    def __init__(
        self,
        output_handler: Optional[OutputHandler] = None,
        settings: Optional[Settings] = None,
        authenticator: Optional[Authenticator] = None,
        portal_operations: Optional[PortalOperations] = None,
        endpoint: Optional[str] = None,
        max_workers: Optional[int] = None,
    ):
        """Initialize migrate command with dependencies.

        Args:
            output_handler: OutputHandler for terminal output (optional)
            settings: Environment settings (loaded on run if not given)
            authenticator: Token source for the management API (optional)
            portal_operations: Pre-built operations object (optional)
            endpoint: Overrides the management host from settings (optional)
            max_workers: Overrides the batch size from settings (optional)

        Note:
            All dependencies are optional to support testing. In production
            they are created on run from the request and the environment.
        """
        self.output_handler = output_handler or OutputHandler()
        self.settings = settings
        self.authenticator = authenticator
        self.portal_operations = portal_operations
        self.endpoint = endpoint
        self.max_workers = max_workers

    def run(self, request: MigrationRequest) -> ExitCode:
        """Execute every requested operation.

        Args:
            request: Parsed command-line request

        Returns:
            ExitCode indicating success or specific failure type
        """
        api: Optional[APIWrapper] = None
        try:
            resource = ResourceIdentifier.parse(request.resource_id)
            logger.info(f"Target service: {resource.name} (resource group {resource.group})")

            # Validated up front so a bad mapping file fails before any remote change
            url_mapping = None
            if request.update_urls_file is not None:
                url_mapping = UrlMappingLoader.load(request.update_urls_file)

            if self.settings is None:
                self.settings = SettingsLoader.load()

            operations = self.portal_operations
            if operations is None:
                if not self.authenticator:
                    self.authenticator = Authenticator()
                api = APIWrapper(resource, self.authenticator, endpoint=self.endpoint or self.settings.endpoint)
                operations = PortalOperations(
                    api,
                    folder=request.path,
                    max_workers=self.max_workers or self.settings.max_workers,
                    notify=self.output_handler.warning,
                )

            results: List[OperationResult] = []

            if request.export:
                with self.output_handler.spinner(f"Exporting to {request.path}..."):
                    results.append(operations.export())
                self.output_handler.success("Export DONE")

            if request.delete:
                with self.output_handler.spinner("Cleaning up..."):
                    results.append(operations.delete())
                self.output_handler.success("Cleanup DONE")

            if request.do_import:
                with self.output_handler.spinner(f"Importing from {request.path}..."):
                    results.append(operations.import_())
                self.output_handler.success("Import DONE")

            if url_mapping is not None:
                with self.output_handler.spinner("Updating URLs..."):
                    results.append(
                        operations.update_content_urls(url_mapping.existing, url_mapping.replacement)
                    )
                self.output_handler.success("URL update DONE")

            if request.do_publish:
                with self.output_handler.spinner("Publishing..."):
                    result = operations.publish(request.revision_name)
                results.append(result)
                self.output_handler.success(f"Published as {result.revision}")

            self.output_handler.print_summary(results)
            return ExitCode.SUCCESS

        except OperationError as e:
            logger.error(str(e))
            self.output_handler.error(str(e))
            return self._exit_code_for(e.cause)

        except (ValidationError, ConfigError) as e:
            logger.error(f"Invalid input: {e}")
            self.output_handler.error(str(e))
            return ExitCode.GENERAL_ERROR

        except InvalidCredentialsError as e:
            logger.error(f"Authentication failed: {e}")
            self.output_handler.error(str(e))
            self.output_handler.info(
                "Sign in with 'az login' or set AZURE_CLIENT_ID, AZURE_TENANT_ID and AZURE_CLIENT_SECRET"
            )
            return ExitCode.AUTH_ERROR

        except (APIUnreachableError, APIAccessError) as e:
            logger.error(f"API error: {e}")
            self.output_handler.error(f"API error: {e}")
            return ExitCode.NETWORK_ERROR

        except MigrationError as e:
            logger.error(f"Error: {e}")
            self.output_handler.error(f"Error: {e}")
            return ExitCode.GENERAL_ERROR

        except Exception as e:
            logger.exception("Unexpected error during migration")
            self.output_handler.error(f"Unexpected error: {e}")
            return ExitCode.GENERAL_ERROR

        finally:
            if api is not None:
                api.close()

    def _exit_code_for(self, cause: Exception) -> ExitCode:
        """Map the underlying cause of a failed operation to an exit code."""
        if isinstance(cause, InvalidCredentialsError):
            self.output_handler.info(
                "Sign in with 'az login' or set AZURE_CLIENT_ID, AZURE_TENANT_ID and AZURE_CLIENT_SECRET"
            )
            return ExitCode.AUTH_ERROR
        if isinstance(cause, (APIUnreachableError, APIAccessError)):
            self.output_handler.info("Check your network connection and the service endpoint")
            return ExitCode.NETWORK_ERROR
        return ExitCode.GENERAL_ERROR
