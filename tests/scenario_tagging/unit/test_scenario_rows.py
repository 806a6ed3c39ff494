"""Scenario row conversion tests."""

from __future__ import annotations

import pytest
from devops_result_sync.record_store import ScenarioRow
from devops_result_sync.scenario_tagging import (
    ScenarioDefinition,
    ScenarioExecution,
    feature_name_from_uri,
    normalize_outcome,
    to_scenario_row,
)


@pytest.mark.parametrize(
    ("status", "expected"),
    [
        ("passed", "Passed"),
        ("FAILED", "Failed"),
        ("skipped", "NotExecuted"),
        ("pending", "NotExecuted"),
        ("undefined", "Inconclusive"),
        ("blocked", "Blocked"),
        ("", ""),
    ],
)
def test_normalize_outcome(status: str, expected: str) -> None:
    assert normalize_outcome(status) == expected


@pytest.mark.parametrize(
    ("uri", "expected"),
    [
        ("file:///work/features/login.feature:12", "login"),
        ("features/checkout/payment.feature", "payment"),
        ("C:\\suite\\features\\search.feature:3", "search"),
        ("", ""),
    ],
)
def test_feature_name_from_uri(uri: str, expected: str) -> None:
    assert feature_name_from_uri(uri) == expected


def test_to_scenario_row_collects_every_column() -> None:
    scenario = ScenarioDefinition(
        scenario_id="login;valid-user",
        name="Valid user logs in",
        tags=("@smoke", "@TC-101", "@TC_102"),
        uri="features/login.feature:8",
    )

    row = to_scenario_row(
        ScenarioExecution(scenario=scenario, status="passed", duration_seconds=12.9)
    )

    assert row == ScenarioRow(
        description="Valid user logs in",
        outcome="Passed",
        test_case_ids="101,102,",
        feature_name="login",
        duration_seconds=12,
    )


def test_to_scenario_row_clamps_negative_duration() -> None:
    scenario = ScenarioDefinition(scenario_id="s", name="s", tags=(), uri="a.feature")

    row = to_scenario_row(
        ScenarioExecution(scenario=scenario, status="failed", duration_seconds=-1)
    )

    assert row.duration_seconds == 0
    assert row.test_case_ids == ""
