"""Configuration loader service."""

from __future__ import annotations

import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml

from .runtime_settings import (
    Configuration,
    PlanSettings,
    RecordStoreSettings,
    RunSettings,
    ServerSettings,
    SuiteSettings,
    SyncOverrides,
)

DEFAULT_API_VERSION = "5.0"
DEFAULT_SUITE_QUERY = (
    "SELECT [System.Id],[System.WorkItemType],[System.Title],"
    "[Microsoft.VSTS.Common.Priority],[System.AssignedTo],[System.AreaPath] "
    "FROM WorkItems WHERE [System.TeamProject] = @project "
    "AND [System.WorkItemType] IN GROUP 'Microsoft.TestCaseCategory'"
)

OVERRIDE_ENVIRONMENT_VARIABLES = {
    "plan_id": "PLAN_ID",
    "root_suite_id": "ROOT_SUITE_ID",
    "suite_id": "SUITE_ID",
    "run_id": "RUN_ID",
    "access_token": "AZURE_PAT",
}


class ConfigurationError(Exception):
    """Raised when the configuration file or the overrides are invalid."""


def load_configuration(config_path: Path | str) -> Configuration:
    """Load and validate the configuration file."""
    path = Path(config_path)
    if not path.exists():
        raise ConfigurationError(f"Configuration file not found: {path}")

    text = path.read_text(encoding="utf-8")
    try:
        parsed = yaml.safe_load(text)
    except yaml.YAMLError as exc:  # pragma: no cover - exercised indirectly
        raise ConfigurationError(f"Failed to parse configuration file: {exc}") from exc

    if parsed is None:
        parsed = {}

    if not isinstance(parsed, Mapping):
        raise ConfigurationError("Configuration root must be a mapping.")

    return Configuration(
        path=path,
        server=_parse_server_settings(parsed),
        plan=_parse_plan_section(parsed.get("plan")),
        suite=_parse_suite_section(parsed.get("suite")),
        run=_parse_run_section(parsed.get("run")),
        record_store=_parse_record_store_section(parsed.get("record_store"), path.parent),
    )


def load_overrides(environ: Mapping[str, str] | None = None) -> SyncOverrides:
    """Read override identifiers and the access token from the environment.

    Empty values are treated as absent.
    """
    source = os.environ if environ is None else environ
    values = {
        field_name: _optional_string(source.get(variable), variable)
        for field_name, variable in OVERRIDE_ENVIRONMENT_VARIABLES.items()
    }
    return SyncOverrides(**values)


def _parse_server_settings(parsed: Mapping[str, Any]) -> ServerSettings:
    url = _require_non_empty_string(parsed.get("server_url"), "server_url").rstrip("/")
    if not url.startswith(("http://", "https://")):
        raise ConfigurationError("server_url must start with http:// or https://.")
    api_version = _require_non_empty_string(
        str(parsed.get("api_version", DEFAULT_API_VERSION)), "api_version"
    )
    timeout_seconds = _require_positive_int(
        parsed.get("timeout_seconds", 30), "timeout_seconds"
    )
    verify_tls = parsed.get("verify_tls", True)
    if not isinstance(verify_tls, bool):
        raise ConfigurationError("verify_tls must be a boolean.")
    return ServerSettings(
        url=url,
        api_version=api_version,
        timeout_seconds=timeout_seconds,
        verify_tls=verify_tls,
    )


def _parse_plan_section(value: Any) -> PlanSettings:
    section = _require_mapping(value, "plan")
    return PlanSettings(
        name=_require_non_empty_string(section.get("name"), "plan.name"),
        area_path=_require_non_empty_string(section.get("area_path"), "plan.area_path"),
        iteration_path=_require_non_empty_string(
            section.get("iteration_path"), "plan.iteration_path"
        ),
    )


def _parse_suite_section(value: Any) -> SuiteSettings:
    section = _require_mapping(value, "suite")
    name = _require_non_empty_string(section.get("name"), "suite.name")
    query = _require_non_empty_string(section.get("query", DEFAULT_SUITE_QUERY), "suite.query")
    return SuiteSettings(name=name, query=query)


def _parse_run_section(value: Any) -> RunSettings:
    section = _require_mapping(value, "run")
    return RunSettings(
        name=_require_non_empty_string(section.get("name"), "run.name"),
        report_url=_optional_string(section.get("report_url"), "run.report_url"),
    )


def _parse_record_store_section(value: Any, base_path: Path) -> RecordStoreSettings:
    section = value or {}
    if not isinstance(section, Mapping):
        raise ConfigurationError("record_store must be a mapping.")
    directory = _require_non_empty_string(
        section.get("directory", "target"), "record_store.directory"
    )
    parallelism = _require_positive_int(
        section.get("parallelism", 4), "record_store.parallelism"
    )
    return RecordStoreSettings(
        directory=_resolve_path(base_path, directory),
        parallelism=parallelism,
    )


def _resolve_path(base_path: Path, raw_path: str) -> Path:
    candidate = Path(raw_path)
    if not candidate.is_absolute():
        return (base_path / candidate).resolve()
    return candidate


def _require_mapping(value: Any, section_name: str) -> Mapping[str, Any]:
    if not isinstance(value, Mapping):
        raise ConfigurationError(f"Configuration section '{section_name}' is required.")
    return value


def _require_non_empty_string(value: Any, field_name: str) -> str:
    if not isinstance(value, str):
        raise ConfigurationError(f"{field_name} must be a string.")
    stripped = value.strip()
    if not stripped:
        raise ConfigurationError(f"{field_name} must not be empty.")
    return stripped


def _optional_string(value: Any, field_name: str) -> str | None:
    if value is None:
        return None
    if not isinstance(value, str):
        raise ConfigurationError(f"{field_name} must be a string.")
    stripped = value.strip()
    return stripped or None


def _require_positive_int(value: Any, field_name: str) -> int:
    if isinstance(value, bool):
        raise ConfigurationError(f"{field_name} must be an integer.")
    if not isinstance(value, int):
        raise ConfigurationError(f"{field_name} must be an integer.")
    if value <= 0:
        raise ConfigurationError(f"{field_name} must be greater than zero.")
    return value
