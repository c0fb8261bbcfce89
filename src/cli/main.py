"""Main CLI entry point for the devportal-migrate command.

This module provides the Typer application that serves as the entry point
for the devportal-migrate command-line tool. Operations are selected with
options on the main command rather than subcommands, so several can be
chained in one run.
"""

import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import List, Optional

import typer

from src.cli.migrate_command import MigrateCommand
from src.cli.models import ExitCode, MigrationRequest
from src.cli.output import OutputHandler

VERSION = "0.1.0"

app = typer.Typer(
    name="devportal-migrate",
    help="""Migrate API Management developer portal content between services.

QUICK START:
  devportal-migrate <resource_id> --export --path ./portal         # Service → local
  devportal-migrate <resource_id> --import --path ./portal         # Local → service
  devportal-migrate <resource_id> --import v2 --path ./portal      # Import and publish as v2
  devportal-migrate <resource_id> --delete                         # Remove all content""",
    add_completion=False,
    rich_markup_mode=None,
    no_args_is_help=False,
)

logger = logging.getLogger(__name__)

GETTING_STARTED_MESSAGE = """devportal-migrate <resource_id> [options]

--export                    # Export content and media to --path
--delete                    # Delete all content and media
--import [NAME]             # Import from --path (publish as NAME if given)
--publish [NAME]            # Publish a new revision
--update-urls FILE          # Rewrite URL permalinks from a YAML mapping
--path FOLDER               # Local folder (default: .)
--help                      # Show all options

Example:
  devportal-migrate /subscriptions/<sub>/resourceGroups/<rg>/providers/Microsoft.ApiManagement/service/<name> --export --path ./portal"""

# Options that take a value only when one follows them
OPTIONAL_VALUE_OPTIONS = ("--import", "--publish")


def _normalize_optional_values(argv: List[str]) -> List[str]:
    """Give bare optional-value options an explicit empty value.

    ``--import`` followed by nothing, another option or the resource id
    becomes ``--import=`` so the parser never swallows the next token.

    Example:
        >>> _normalize_optional_values(["/subscriptions/x", "--import", "--path", "d"])
        ['/subscriptions/x', '--import=', '--path', 'd']
    """
    normalized = []
    for index, arg in enumerate(argv):
        if arg in OPTIONAL_VALUE_OPTIONS:
            following = argv[index + 1] if index + 1 < len(argv) else None
            if following is None or following.startswith("-") or following.startswith("/"):
                normalized.append(f"{arg}=")
                continue
        normalized.append(arg)
    return normalized


def _configure_logging(verbosity: int, logdir: Optional[str] = None) -> None:
    """Configure logging based on verbosity level.

    Configures only the 'src' namespace logger so the azure and urllib3
    loggers keep their own settings.

    Args:
        verbosity: Verbosity level (0=WARNING, 1=INFO, 2=DEBUG)
        logdir: Optional directory for log files (creates timestamped log file)
    """
    if verbosity == 0:
        level = logging.WARNING
    elif verbosity == 1:
        level = logging.INFO
    else:
        level = logging.DEBUG

    app_logger = logging.getLogger("src")
    app_logger.setLevel(level)

    date_format = "%Y-%m-%d %H:%M:%S"
    formatter = logging.Formatter("%(asctime)s [%(levelname)8s] %(message)s", datefmt=date_format)

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    app_logger.addHandler(console_handler)

    if logdir:
        log_path = Path(logdir)
        log_path.mkdir(parents=True, exist_ok=True)

        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        log_file = log_path / f"devportal-migrate_{timestamp}.log"

        file_formatter = logging.Formatter(
            "%(asctime)s - %(name)s - %(threadName)s - %(levelname)s - %(message)s",
            datefmt=date_format,
        )
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(level)
        file_handler.setFormatter(file_formatter)
        app_logger.addHandler(file_handler)

        logger.info(f"Logging to file: {log_file}")


def _run_migration(
    request: MigrationRequest,
    endpoint: Optional[str],
    max_workers: Optional[int],
    logdir: Optional[str],
    verbosity: int,
    no_color: bool,
) -> None:
    """Run the requested operations and exit with the resulting code."""
    _configure_logging(verbosity, logdir)

    output = OutputHandler(verbosity=verbosity, no_color=no_color)

    command = MigrateCommand(output_handler=output, endpoint=endpoint, max_workers=max_workers)
    exit_code = command.run(request)
    raise typer.Exit(exit_code)


@app.command()
def main_command(
    resource_id: Optional[str] = typer.Argument(
        None,
        help="Resource id of the API Management service "
             "(/subscriptions/<sub>/resourceGroups/<rg>/providers/Microsoft.ApiManagement/service/<name>)",
        metavar="RESOURCE_ID",
    ),
    export: bool = typer.Option(
        False,
        "--export",
        help="Export the developer portal content and media to --path",
    ),
    delete: bool = typer.Option(
        False,
        "--delete",
        help="Delete all developer portal content and media",
    ),
    import_revision: Optional[str] = typer.Option(
        None,
        "--import",
        help="Import the developer portal content from --path, optionally naming a revision to publish",
        metavar="[NAME]",
    ),
    publish_revision: Optional[str] = typer.Option(
        None,
        "--publish",
        help="Publish the developer portal, optionally naming the revision (default: UTC timestamp)",
        metavar="[NAME]",
    ),
    update_urls: Optional[str] = typer.Option(
        None,
        "--update-urls",
        help="YAML file with 'existing' and 'replacement' URL lists for url content items",
        metavar="FILE",
    ),
    path: str = typer.Option(
        ".",
        "--path",
        help="Path to the folder for import/export",
        metavar="FOLDER",
    ),
    endpoint: Optional[str] = typer.Option(
        None,
        "--endpoint",
        help="Management API host name (default: DEVPORTAL_ENDPOINT or management.azure.com)",
        metavar="HOST",
    ),
    max_workers: Optional[int] = typer.Option(
        None,
        "--max-workers",
        min=1,
        help="Concurrent remote calls per batch (default: DEVPORTAL_MAX_WORKERS or 16)",
    ),
    logdir: Optional[str] = typer.Option(
        None,
        "--logdir",
        help="Directory for log files (creates timestamped log file)",
    ),
    verbosity: int = typer.Option(
        0,
        "--verbosity",
        "-v",
        help="Verbosity level: 0=summary, 1=info, 2=debug",
    ),
    no_color: bool = typer.Option(
        False,
        "--no-color",
        help="Disable colored output",
    ),
    version: bool = typer.Option(
        False,
        "--version",
        "-V",
        help="Show version and exit",
    ),
) -> None:
    """Migrate API Management developer portal content between services.

    \b
    Operations run in this order, each only when requested:
      export, delete, import, update-urls, publish

    \b
    EXAMPLE:
      devportal-migrate <source_id> --export --path ./portal
      devportal-migrate <target_id> --delete --import v2 --path ./portal
    """
    if version:
        typer.echo(f"devportal-migrate version {VERSION}")
        raise typer.Exit()

    request = MigrationRequest(
        resource_id=resource_id or "",
        path=path,
        export=export,
        delete=delete,
        import_revision=import_revision,
        publish_revision=publish_revision,
        update_urls_file=update_urls,
    )

    if not request.has_operations:
        typer.echo(GETTING_STARTED_MESSAGE)
        raise typer.Exit()

    if resource_id is None:
        typer.echo("Error: Missing argument 'RESOURCE_ID'.", err=True)
        raise typer.Exit(ExitCode.GENERAL_ERROR)

    _run_migration(request, endpoint, max_workers, logdir, verbosity, no_color)


def main() -> None:
    """Main entry point for the CLI application.

    Called when the module is executed directly or when the console script
    is invoked.
    """
    app(args=_normalize_optional_values(sys.argv[1:]))


# Allow running as: python -m src.cli.main
if __name__ == "__main__":
    main()
