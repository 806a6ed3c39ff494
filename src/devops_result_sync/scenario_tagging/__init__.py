"""Scenario tagging exports."""

from .scenario_rows import (
    OUTCOME_BY_STATUS,
    ScenarioDefinition,
    ScenarioExecution,
    feature_name_from_uri,
    normalize_outcome,
    to_scenario_row,
)
from .testcase_tags import extract_test_case_ids, split_test_case_ids

__all__ = [
    "OUTCOME_BY_STATUS",
    "ScenarioDefinition",
    "ScenarioExecution",
    "extract_test_case_ids",
    "feature_name_from_uri",
    "normalize_outcome",
    "split_test_case_ids",
    "to_scenario_row",
]
