"""Command line interface entry point."""

from __future__ import annotations

import logging
import sys

import click

from excel_asset_importer.asset_store import JsonAssetStore
from excel_asset_importer.configuration import (
    ConfigurationError,
    load_configuration,
    registry_from_configuration,
)
from excel_asset_importer.import_orchestration import ImportStatus, import_batch
from excel_asset_importer.schema_generation import write_schema_stub
from excel_asset_importer.schema_registry import default_registry
from excel_asset_importer.workbook_loading import FileFormatError

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s - %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


class CliError(Exception):
    """Custom CLI error."""


class _ClickEchoHandler(logging.Handler):
    """Writes log records to the current click error stream."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            click.echo(self.format(record), err=True)
        except Exception:  # pylint: disable=broad-exception-caught
            self.handleError(record)


def configure_logging(verbose: bool) -> None:
    """Attach a console handler to the package logger."""
    package_logger = logging.getLogger("excel_asset_importer")
    if not any(isinstance(handler, _ClickEchoHandler) for handler in package_logger.handlers):
        handler = _ClickEchoHandler()
        handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt=LOG_DATE_FORMAT))
        package_logger.addHandler(handler)
    package_logger.setLevel(logging.DEBUG if verbose else logging.INFO)


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(package_name="excel-asset-importer")
@click.option("--verbose", "-v", is_flag=True, default=False, help="Enable debug logging.")
def cli(verbose: bool) -> None:
    """Import spreadsheet workbooks into typed asset collections."""
    configure_logging(verbose)


@cli.command(name="import")
@click.option(
    "--config",
    "config_paths",
    required=True,
    multiple=True,
    type=click.Path(path_type=str),
    help="Importer configuration file; repeat to register several (first wins on clashes)",
)
@click.argument("workbook_paths", nargs=-1, required=True, type=click.Path(path_type=str))
def import_workbooks(config_paths: tuple[str, ...], workbook_paths: tuple[str, ...]) -> None:
    """Import changed workbooks in the given order."""
    try:
        configurations = [load_configuration(path) for path in config_paths]
    except (ConfigurationError, OSError) as exc:
        raise CliError(str(exc)) from exc

    registry = default_registry()
    registry.clear()
    registry_from_configuration(configurations, registry=registry)
    result = import_batch(
        workbook_paths,
        registry=registry,
        store=JsonAssetStore(),
    )
    for outcome in result.outcomes:
        if outcome.status is ImportStatus.IMPORTED:
            click.echo(f"imported: {outcome.workbook_path} -> {outcome.asset_path}")
        elif outcome.error is not None:
            click.echo(f"{outcome.status.value}: {outcome.workbook_path}: {outcome.error}")
        else:
            click.echo(f"{outcome.status.value}: {outcome.workbook_path}")
    if result.failed:
        raise CliError(f"{len(result.failed)} workbook(s) failed to import.")


@cli.command(name="generate-schema")
@click.option(
    "--output",
    "output_dir",
    required=False,
    type=click.Path(path_type=str),
    help="Directory for the declaration stub (defaults to the workbook directory)",
)
@click.argument("workbook_path", type=click.Path(path_type=str))
def generate_schema(output_dir: str | None, workbook_path: str) -> None:
    """Generate a schema declaration stub from a workbook's sheet names."""
    try:
        resolved_output = write_schema_stub(workbook_path, output_dir)
    except (FileFormatError, FileExistsError, OSError) as exc:
        raise CliError(str(exc)) from exc
    click.echo(str(resolved_output))


def main(argv: list[str] | None = None) -> int:
    """CLI entry point for console_scripts wiring."""
    argv = argv if argv is not None else sys.argv[1:]
    try:
        cli.main(args=list(argv), standalone_mode=False)
    except CliError as exc:
        click.echo(str(exc), err=True)
        return 1
    except click.ClickException as exc:
        exc.show()
        return exc.exit_code
    except click.Abort:
        click.echo("Aborted.", err=True)
        return 1
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
