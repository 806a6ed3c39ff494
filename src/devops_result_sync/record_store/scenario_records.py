"""Scenario record entities."""

from __future__ import annotations

from dataclasses import dataclass

RECORD_SHEET_NAME = "TestData"
RECORD_COLUMNS: tuple[str, ...] = (
    "description",
    "status",
    "testCaseIds",
    "featureFile",
    "executionTimeSeconds",
)


@dataclass(frozen=True)
class ScenarioRow:
    """One executed scenario as persisted in the record workbook."""

    description: str
    outcome: str
    test_case_ids: str
    feature_name: str
    duration_seconds: int

    def to_cells(self) -> tuple[str, str, str, str, int]:
        return (
            self.description,
            self.outcome,
            self.test_case_ids,
            self.feature_name,
            self.duration_seconds,
        )

    @classmethod
    def from_cells(cls, values: tuple[object, ...]) -> ScenarioRow:
        padded = tuple(values) + (None,) * (len(RECORD_COLUMNS) - len(values))
        description, outcome, test_case_ids, feature_name, duration = padded[
            : len(RECORD_COLUMNS)
        ]
        return cls(
            description=_text(description),
            outcome=_text(outcome),
            test_case_ids=_text(test_case_ids),
            feature_name=_text(feature_name),
            duration_seconds=_seconds(duration),
        )


def _text(value: object) -> str:
    if value is None:
        return ""
    return str(value)


def _seconds(value: object) -> int:
    if value is None or value == "":
        return 0
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, int | float):
        return int(value)
    try:
        return int(float(str(value)))
    except ValueError:
        return 0
