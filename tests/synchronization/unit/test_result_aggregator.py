"""Result aggregation tests."""

from __future__ import annotations

from devops_result_sync.devops_client import DEFAULT_RESULT_COMMENT, Point, ResultRecord
from devops_result_sync.record_store import ScenarioRow
from devops_result_sync.synchronization import (
    PointCorrelation,
    build_result_records,
    compose_result_comment,
    serialize_results,
)

POINTS = (
    Point(id=1, test_case_id="10"),
    Point(id=2, test_case_id="20"),
    Point(id=3, test_case_id="30"),
)


def _row(
    test_case_ids: str, outcome: str = "Passed", description: str = "Checkout"
) -> ScenarioRow:
    return ScenarioRow(
        description=description,
        outcome=outcome,
        test_case_ids=test_case_ids,
        feature_name="checkout",
        duration_seconds=3,
    )


def test_every_point_gets_a_result_in_point_order() -> None:
    records = build_result_records(PointCorrelation.from_points(POINTS), [_row("20,")])

    assert [record.point_id for record in records] == [1, 2, 3]
    assert records[0] == ResultRecord(point_id=1)
    assert records[2] == ResultRecord(point_id=3)
    assert records[1].state == "Completed"
    assert records[1].outcome == "Passed"
    assert records[1].comment == (
        "Test Case run by Automation: 20 : Passed | Feature File: checkout | Description: Checkout"
    )


def test_untouched_points_keep_default_comment() -> None:
    records = build_result_records(PointCorrelation.from_points(POINTS), [])

    assert all(record.state == "" for record in records)
    assert all(record.outcome == "" for record in records)
    assert all(record.comment == DEFAULT_RESULT_COMMENT for record in records)


def test_test_cases_outside_the_suite_are_ignored() -> None:
    correlation = PointCorrelation.from_points(POINTS)

    records = build_result_records(correlation, [_row("99,")])

    assert records == build_result_records(correlation, [])


def test_one_row_can_complete_several_points() -> None:
    records = build_result_records(
        PointCorrelation.from_points(POINTS), [_row("10,30,", outcome="Failed")]
    )

    assert [record.outcome for record in records] == ["Failed", "", "Failed"]


def test_last_row_for_a_test_case_wins() -> None:
    rows = [_row("10,", "Failed", "first try"), _row("10,", "Passed", "second try")]

    records = build_result_records(PointCorrelation.from_points(POINTS), rows)

    assert records[0].outcome == "Passed"
    assert records[0].comment.endswith("Description: second try")


def test_first_point_wins_when_test_case_is_listed_twice() -> None:
    correlation = PointCorrelation.from_points([Point(id=5, test_case_id="10"), *POINTS])

    records = build_result_records(correlation, [_row("10,")])

    assert correlation.point_for("10") == 5
    assert correlation.point_ids == (5, 1, 2, 3)
    assert [record.state for record in records] == ["Completed", "", "", ""]


def test_empty_suite_yields_no_results() -> None:
    records = build_result_records(PointCorrelation.from_points([]), [_row("10,")])

    assert records == ()
    assert serialize_results(records) == []


def test_report_url_is_appended_to_the_comment() -> None:
    comment = compose_result_comment(
        "10", _row("10,"), report_url="https://reports.example.com/launch/5"
    )

    assert comment.endswith(" | Report: https://reports.example.com/launch/5")


def test_serialize_results_numbers_results_from_base_id() -> None:
    records = build_result_records(PointCorrelation.from_points(POINTS), [_row("30,")])

    payload = serialize_results(records)

    assert [item["id"] for item in payload] == [100000, 100001, 100002]
    assert [item["testPoint"] for item in payload] == [{"id": "1"}, {"id": "2"}, {"id": "3"}]
    assert payload[0] == {
        "id": 100000,
        "testPoint": {"id": "1"},
        "state": "",
        "outcome": "",
        "comment": DEFAULT_RESULT_COMMENT,
    }
    assert payload[2]["state"] == "Completed"
    assert payload[2]["outcome"] == "Passed"
