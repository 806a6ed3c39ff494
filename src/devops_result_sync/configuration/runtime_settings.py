"""Configuration domain entities."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class ServerSettings:
    """Test-management service connectivity configuration."""

    url: str
    api_version: str
    timeout_seconds: int
    verify_tls: bool


@dataclass(frozen=True)
class PlanSettings:
    """Attributes used when a test plan has to be created."""

    name: str
    area_path: str
    iteration_path: str


@dataclass(frozen=True)
class SuiteSettings:
    """Attributes used when a dynamic test suite has to be created."""

    name: str
    query: str


@dataclass(frozen=True)
class RunSettings:
    """Attributes used when a test run has to be created."""

    name: str
    report_url: str | None


@dataclass(frozen=True)
class RecordStoreSettings:
    """Location of the per-execution scenario workbook."""

    directory: Path
    parallelism: int


@dataclass(frozen=True)
class Configuration:
    """Top-level configuration aggregate."""

    path: Path
    server: ServerSettings
    plan: PlanSettings
    suite: SuiteSettings
    run: RunSettings
    record_store: RecordStoreSettings


@dataclass(frozen=True)
class SyncOverrides:
    """Externally supplied identifiers and the access token.

    A present identifier skips the matching creation step.
    """

    plan_id: str | None = None
    root_suite_id: str | None = None
    suite_id: str | None = None
    run_id: str | None = None
    access_token: str | None = None

    def __repr__(self) -> str:
        token = "***" if self.access_token else None
        return (
            f"SyncOverrides(plan_id={self.plan_id!r}, root_suite_id={self.root_suite_id!r}, "
            f"suite_id={self.suite_id!r}, run_id={self.run_id!r}, access_token={token!r})"
        )
