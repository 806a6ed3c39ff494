"""Reconciliation of scenario rows against the points of a suite."""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass
from typing import Any

from devops_result_sync.devops_client.resource_models import Point, ResultRecord
from devops_result_sync.record_store.scenario_records import ScenarioRow
from devops_result_sync.scenario_tagging.testcase_tags import split_test_case_ids


@dataclass(frozen=True)
class PointCorrelation:
    """Ordered points of a suite together with their test-case index."""

    points: tuple[Point, ...]
    point_id_by_test_case: Mapping[str, int]

    @classmethod
    def from_points(cls, points: Iterable[Point]) -> PointCorrelation:
        ordered = tuple(points)
        index: dict[str, int] = {}
        for point in ordered:
            index.setdefault(point.test_case_id, point.id)
        return cls(points=ordered, point_id_by_test_case=index)

    @property
    def point_ids(self) -> tuple[int, ...]:
        return tuple(point.id for point in self.points)

    def point_for(self, test_case_id: str) -> int | None:
        return self.point_id_by_test_case.get(test_case_id)


def compose_result_comment(
    test_case_id: str, row: ScenarioRow, report_url: str | None = None
) -> str:
    comment = (
        f"Test Case run by Automation: {test_case_id} : {row.outcome}"
        f" | Feature File: {row.feature_name}"
        f" | Description: {row.description}"
    )
    if report_url:
        comment += f" | Report: {report_url}"
    return comment


def build_result_records(
    correlation: PointCorrelation,
    rows: Iterable[ScenarioRow],
    *,
    report_url: str | None = None,
) -> tuple[ResultRecord, ...]:
    """Return one result per point, in point order.

    Rows referencing test cases outside the suite are ignored. When several
    rows reference the same test case, the last one read wins.
    """
    records = {point.id: ResultRecord(point_id=point.id) for point in correlation.points}
    for row in rows:
        for test_case_id in split_test_case_ids(row.test_case_ids):
            point_id = correlation.point_for(test_case_id)
            if point_id is None:
                continue
            records[point_id] = records[point_id].completed(
                row.outcome, compose_result_comment(test_case_id, row, report_url)
            )
    return tuple(records[point_id] for point_id in correlation.point_ids)


def serialize_results(records: Sequence[ResultRecord]) -> list[dict[str, Any]]:
    return [record.to_payload(position) for position, record in enumerate(records)]
