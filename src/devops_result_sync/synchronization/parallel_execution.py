"""Parallel scenario execution followed by the one-shot upload."""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from concurrent.futures import ThreadPoolExecutor, wait

from devops_result_sync.scenario_tagging.scenario_rows import ScenarioDefinition

from .sync_session import SyncOutcome, SyncSession

logger = logging.getLogger(__name__)

ScenarioExecutor = Callable[[ScenarioDefinition], str]


def run_scenarios_in_parallel(
    session: SyncSession,
    scenarios: Sequence[ScenarioDefinition],
    execute_scenario: ScenarioExecutor,
    *,
    parallelism: int | None = None,
) -> SyncOutcome:
    """Execute every scenario on a worker pool, join it, then finalize the session.

    ``execute_scenario`` returns the runner status of the scenario; an
    exception raised by it marks the scenario as failed.
    """
    max_workers = max(1, parallelism or session.configuration.record_store.parallelism)
    with ThreadPoolExecutor(max_workers=max_workers) as executor:
        futures = [
            executor.submit(_run_single, session, scenario, execute_scenario)
            for scenario in scenarios
        ]
        wait(futures)
    for future in futures:
        future.result()
    return session.finalize()


def _run_single(
    session: SyncSession,
    scenario: ScenarioDefinition,
    execute_scenario: ScenarioExecutor,
) -> bool:
    session.before_scenario(scenario)
    try:
        status = execute_scenario(scenario)
    except Exception:  # pylint: disable=broad-exception-caught
        logger.exception("Scenario '%s' raised during execution", scenario.name)
        status = "failed"
    return session.after_scenario(scenario, status)
