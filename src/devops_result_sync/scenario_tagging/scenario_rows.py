"""Conversion of finished scenarios into scenario workbook rows."""

from __future__ import annotations

import re
from dataclasses import dataclass

from devops_result_sync.record_store.scenario_records import ScenarioRow

from .testcase_tags import extract_test_case_ids

# Runner statuses mapped onto the outcomes accepted by the results API.
OUTCOME_BY_STATUS = {
    "passed": "Passed",
    "failed": "Failed",
    "skipped": "NotExecuted",
    "pending": "NotExecuted",
    "unused": "NotExecuted",
    "undefined": "Inconclusive",
    "ambiguous": "Inconclusive",
}

_LINE_SUFFIX = re.compile(r":\d+$")


@dataclass(frozen=True)
class ScenarioDefinition:
    """Scenario as announced by the test runner before it executes."""

    scenario_id: str
    name: str
    tags: tuple[str, ...]
    uri: str


@dataclass(frozen=True)
class ScenarioExecution:
    """Finished scenario with its runner status and wall-clock duration."""

    scenario: ScenarioDefinition
    status: str
    duration_seconds: float


def normalize_outcome(status: str) -> str:
    cleaned = (status or "").strip()
    return OUTCOME_BY_STATUS.get(cleaned.lower(), cleaned.title())


def feature_name_from_uri(uri: str) -> str:
    """Return the feature file stem, e.g. ``login`` for ``file:///features/login.feature:12``."""
    location = _LINE_SUFFIX.sub("", (uri or "").strip())
    file_name = location.replace("\\", "/").rsplit("/", 1)[-1]
    return file_name.split(".", 1)[0]


def to_scenario_row(execution: ScenarioExecution) -> ScenarioRow:
    scenario = execution.scenario
    return ScenarioRow(
        description=scenario.name,
        outcome=normalize_outcome(execution.status),
        test_case_ids=extract_test_case_ids(scenario.tags),
        feature_name=feature_name_from_uri(scenario.uri),
        duration_seconds=int(max(execution.duration_seconds, 0)),
    )
