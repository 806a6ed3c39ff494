"""Command line interface entry point."""

from __future__ import annotations

import logging
import sys

import click

from devops_result_sync.configuration import (
    DEFAULT_CONFIG_FILENAME,
    ConfigurationError,
    load_configuration,
    load_overrides,
    write_placeholder_configuration,
)
from devops_result_sync.record_store import RecordStoreError, ScenarioWorkbookStore
from devops_result_sync.scenario_tagging import extract_test_case_ids
from devops_result_sync.synchronization import SynchronizationError, SyncSession

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


class CliError(Exception):
    """Custom CLI error."""


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(package_name="devops-result-sync")
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    default="INFO",
    show_default=True,
    help="Logging verbosity",
)
def cli(log_level: str) -> None:
    """Synchronize behavioral test results with Azure DevOps Test Plans."""
    logging.basicConfig(level=log_level.upper(), format=LOG_FORMAT)


@cli.command(name="generate-config")
@click.option(
    "--output",
    "output_path",
    required=False,
    default=DEFAULT_CONFIG_FILENAME,
    show_default=True,
    type=click.Path(path_type=str),
    help="Path to the YAML configuration template to write",
)
def generate_config(output_path: str) -> None:
    """Generate a placeholder YAML configuration with guidance comments."""
    try:
        resolved_output = write_placeholder_configuration(output_path)
    except (FileExistsError, OSError) as exc:
        raise CliError(str(exc)) from exc
    click.echo(str(resolved_output))


@cli.command(name="init-store")
@click.option(
    "--config",
    "config_path",
    required=True,
    type=click.Path(path_type=str),
    help="Path to YAML/JSON configuration file",
)
def init_store(config_path: str) -> None:
    """Create today's scenario workbook before the test execution starts."""
    try:
        configuration = load_configuration(config_path)
        store = ScenarioWorkbookStore(configuration.record_store.directory)
        store.initialize()
    except (ConfigurationError, RecordStoreError) as exc:
        raise CliError(str(exc)) from exc
    click.echo(str(store.path))


@cli.command(name="finalize")
@click.option(
    "--config",
    "config_path",
    required=True,
    type=click.Path(path_type=str),
    help="Path to YAML/JSON configuration file",
)
@click.option(
    "--records",
    "records_path",
    required=False,
    type=click.Path(path_type=str),
    help="Scenario workbook to upload; defaults to today's workbook",
)
def finalize(config_path: str, records_path: str | None) -> None:
    """Create missing plan/suite/run and upload the recorded scenario results."""
    try:
        configuration = load_configuration(config_path)
        store = ScenarioWorkbookStore.from_existing(
            records_path
            or ScenarioWorkbookStore(configuration.record_store.directory).path
        )
        session = SyncSession(configuration, load_overrides(), store=store)
        outcome = session.finalize()
    except (ConfigurationError, RecordStoreError, SynchronizationError) as exc:
        raise CliError(str(exc)) from exc
    click.echo(
        f"run {outcome.run_id}: {outcome.completed_count}/{outcome.point_count} points completed"
    )


@cli.command(name="extract-ids")
@click.argument("tags", nargs=-1)
def extract_ids(tags: tuple[str, ...]) -> None:
    """Print the test-case ids referenced by the given scenario tags."""
    click.echo(extract_test_case_ids(tags))


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
