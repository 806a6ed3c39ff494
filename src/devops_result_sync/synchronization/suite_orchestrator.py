"""Plan, suite and run resolution for one synchronization pass."""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Protocol

from devops_result_sync.configuration.loader import ConfigurationError
from devops_result_sync.configuration.runtime_settings import Configuration, SyncOverrides
from devops_result_sync.devops_client.resource_models import Plan, Point, Run, Suite

logger = logging.getLogger(__name__)

SUITE_TIMESTAMP_FORMAT = "%Y/%m/%d %H:%M:%S"


class RemoteResourceOperations(Protocol):
    """Remote operations the orchestrator and the upload depend on."""

    def create_plan(self, name: str, area_path: str, iteration_path: str) -> Plan: ...

    def create_suite(self, plan_id: str, root_suite_id: str, name: str, query: str) -> Suite: ...

    def list_points(self, plan_id: str, suite_id: str) -> tuple[Point, ...]: ...

    def create_run(self, name: str, plan_id: str, point_ids: Sequence[int]) -> Run: ...

    def patch_run_results(self, run_id: str, results: Sequence[Mapping[str, Any]]) -> None: ...


@dataclass(frozen=True)
class SuiteTarget:
    """Plan and suite the results of this pass belong to."""

    plan_id: str
    root_suite_id: str | None
    suite_id: str
    plan_created: bool
    suite_created: bool


class SuiteOrchestrator:
    """Reuse overridden identifiers or create the missing resources in dependency order."""

    def __init__(
        self,
        client: RemoteResourceOperations,
        configuration: Configuration,
        overrides: SyncOverrides,
        *,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self._client = client
        self._configuration = configuration
        self._overrides = overrides
        self._clock = clock or datetime.now

    def validate_overrides(self) -> None:
        """Reject override combinations that would fail midway, before any request is sent."""
        overrides = self._overrides
        if overrides.plan_id and not overrides.suite_id and not overrides.root_suite_id:
            raise ConfigurationError(
                "ROOT_SUITE_ID is required to create a suite under plan "
                f"{overrides.plan_id}; set ROOT_SUITE_ID or SUITE_ID."
            )

    def resolve_target(self) -> SuiteTarget:
        self.validate_overrides()
        plan_id, root_suite_id, plan_created = self.resolve_plan()
        suite_id, suite_created = self.resolve_suite(plan_id, root_suite_id)
        return SuiteTarget(
            plan_id=plan_id,
            root_suite_id=root_suite_id,
            suite_id=suite_id,
            plan_created=plan_created,
            suite_created=suite_created,
        )

    def resolve_plan(self) -> tuple[str, str | None, bool]:
        if self._overrides.plan_id:
            logger.info("Using existing plan %s", self._overrides.plan_id)
            return self._overrides.plan_id, self._overrides.root_suite_id, False
        settings = self._configuration.plan
        plan = self._client.create_plan(settings.name, settings.area_path, settings.iteration_path)
        return plan.id, plan.root_suite_id, True

    def resolve_suite(self, plan_id: str, root_suite_id: str | None) -> tuple[str, bool]:
        if self._overrides.suite_id:
            logger.info("Using existing suite %s", self._overrides.suite_id)
            return self._overrides.suite_id, False
        if not root_suite_id:
            raise ConfigurationError(
                f"Unable to create a suite under plan {plan_id}: root suite id is unknown."
            )
        settings = self._configuration.suite
        suite_name = f"{settings.name}_{self._clock().strftime(SUITE_TIMESTAMP_FORMAT)}"
        suite = self._client.create_suite(plan_id, root_suite_id, suite_name, settings.query)
        return suite.id, True

    def resolve_run(self, plan_id: str, points: Sequence[Point]) -> tuple[str, bool]:
        if self._overrides.run_id:
            logger.info("Using existing run %s", self._overrides.run_id)
            return self._overrides.run_id, False
        run = self._client.create_run(
            self._configuration.run.name, plan_id, [point.id for point in points]
        )
        return run.id, True
