"""Run-scoped synchronization session.

One ``SyncSession`` lives for one test execution. Scenario workers call
``before_scenario``/``after_scenario`` concurrently; the caller invokes
``finalize`` once after every worker has finished.
"""

from __future__ import annotations

import logging
import threading
import time
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime

from devops_result_sync.configuration.loader import ConfigurationError
from devops_result_sync.configuration.runtime_settings import Configuration, SyncOverrides
from devops_result_sync.devops_client.plans_api_client import PlansApiClient, RemoteOperationError
from devops_result_sync.record_store.scenario_workbook_store import (
    RecordStoreError,
    ScenarioWorkbookStore,
)
from devops_result_sync.scenario_tagging.scenario_rows import (
    ScenarioDefinition,
    ScenarioExecution,
    to_scenario_row,
)

from .result_aggregator import PointCorrelation, build_result_records, serialize_results
from .suite_orchestrator import RemoteResourceOperations, SuiteOrchestrator

logger = logging.getLogger(__name__)

ClientFactory = Callable[[Configuration, SyncOverrides], RemoteResourceOperations]


class SynchronizationError(Exception):
    """Raised when the finalization pass cannot upload the results."""


@dataclass(frozen=True)
class SyncOutcome:
    """Identifiers and counters of a completed upload."""

    plan_id: str
    suite_id: str
    run_id: str
    point_count: int
    completed_count: int
    scenario_count: int


def _default_client_factory(
    configuration: Configuration, overrides: SyncOverrides
) -> RemoteResourceOperations:
    return PlansApiClient(configuration.server, overrides.access_token)


class SyncSession:
    """Context shared by the scenario hooks and the deferred finalization of one execution."""

    def __init__(
        self,
        configuration: Configuration,
        overrides: SyncOverrides,
        *,
        store: ScenarioWorkbookStore | None = None,
        client_factory: ClientFactory | None = None,
        clock: Callable[[], datetime] | None = None,
        timer: Callable[[], float] | None = None,
    ) -> None:
        self._configuration = configuration
        self._overrides = overrides
        self._clock = clock or datetime.now
        self._timer = timer or time.monotonic
        self._store = store or ScenarioWorkbookStore(configuration.record_store.directory)
        self._client_factory = client_factory or _default_client_factory
        self._started_at: dict[str, float] = {}
        self._started_lock = threading.Lock()
        self._finalize_lock = threading.Lock()
        self._outcome: SyncOutcome | None = None
        self._failure: SynchronizationError | None = None

    @property
    def store(self) -> ScenarioWorkbookStore:
        return self._store

    @property
    def configuration(self) -> Configuration:
        return self._configuration

    def before_scenario(self, scenario: ScenarioDefinition) -> None:
        """Create the scenario workbook on first use and start the scenario clock."""
        self._store.initialize()
        with self._started_lock:
            self._started_at[scenario.scenario_id] = self._timer()

    def after_scenario(self, scenario: ScenarioDefinition, status: str) -> bool:
        """Persist the finished scenario; a failed write is logged and the row is lost."""
        with self._started_lock:
            started_at = self._started_at.pop(scenario.scenario_id, None)
        duration = 0.0 if started_at is None else self._timer() - started_at
        return self.record_execution(
            ScenarioExecution(scenario=scenario, status=status, duration_seconds=duration)
        )

    def record_execution(self, execution: ScenarioExecution) -> bool:
        row = to_scenario_row(execution)
        try:
            self._store.append_row(row)
        except RecordStoreError:
            logger.exception("Scenario '%s' could not be recorded", row.description)
            return False
        return True

    def finalize(self) -> SyncOutcome:
        """Upload the recorded results; runs once, later calls repeat the first result."""
        with self._finalize_lock:
            if self._outcome is not None:
                return self._outcome
            if self._failure is not None:
                raise self._failure
            try:
                self._outcome = self._synchronize()
            except (ConfigurationError, RemoteOperationError, RecordStoreError) as exc:
                logger.exception("Unable to mark test results in the test-management service")
                self._failure = SynchronizationError(str(exc))
                raise self._failure from exc
            except Exception as exc:  # pylint: disable=broad-exception-caught
                logger.exception("Unexpected failure while synchronizing test results")
                self._failure = SynchronizationError(f"Unexpected failure: {exc!r}")
                raise self._failure from exc
            return self._outcome

    def _synchronize(self) -> SyncOutcome:
        logger.info("Synchronizing scenario results from %s", self._store.path)
        client = self._client_factory(self._configuration, self._overrides)
        orchestrator = SuiteOrchestrator(
            client, self._configuration, self._overrides, clock=self._clock
        )
        target = orchestrator.resolve_target()

        correlation = PointCorrelation.from_points(
            client.list_points(target.plan_id, target.suite_id)
        )
        rows = self._store.read_all()
        records = build_result_records(
            correlation, rows, report_url=self._configuration.run.report_url
        )
        run_id, _ = orchestrator.resolve_run(target.plan_id, correlation.points)
        client.patch_run_results(run_id, serialize_results(records))

        completed = sum(1 for record in records if record.state)
        logger.info(
            "Run %s updated: %d of %d points completed from %d scenarios",
            run_id,
            completed,
            len(records),
            len(rows),
        )
        return SyncOutcome(
            plan_id=target.plan_id,
            suite_id=target.suite_id,
            run_id=run_id,
            point_count=len(records),
            completed_count=completed,
            scenario_count=len(rows),
        )
