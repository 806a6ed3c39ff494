"""Test-management resources exchanged with the remote service."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any

RESULT_ID_BASE = 100000
DEFAULT_RESULT_COMMENT = "Test Case run by Automation"
COMPLETED_STATE = "Completed"


class ResponseFieldMissing(Exception):
    """Raised by the response mappers when an expected field is absent."""


@dataclass(frozen=True)
class Plan:
    """Test plan with the id of its root suite."""

    id: str
    root_suite_id: str
    name: str = ""
    area_path: str = ""
    iteration_path: str = ""

    @staticmethod
    def to_payload(name: str, area_path: str, iteration_path: str) -> dict[str, Any]:
        return {"name": name, "iteration": iteration_path, "area": {"name": area_path}}

    @classmethod
    def from_response(
        cls, body: Any, *, name: str = "", area_path: str = "", iteration_path: str = ""
    ) -> Plan:
        return cls(
            id=_identifier(body, "id"),
            root_suite_id=_identifier(_mapping(body, "rootSuite"), "id", "rootSuite.id"),
            name=name,
            area_path=area_path,
            iteration_path=iteration_path,
        )


@dataclass(frozen=True)
class Suite:
    """Dynamic test suite whose membership is defined by a work-item query."""

    id: str
    parent_plan_id: str
    root_suite_id: str
    name: str = ""
    query: str = ""

    @staticmethod
    def to_payload(name: str, query: str) -> dict[str, Any]:
        return {"name": name, "suiteType": "DynamicTestSuite", "queryString": query}

    @classmethod
    def from_response(
        cls, body: Any, *, plan_id: str, root_suite_id: str, name: str = "", query: str = ""
    ) -> Suite:
        values = _sequence(body, "value")
        if not values:
            raise ResponseFieldMissing("value[0]")
        return cls(
            id=_identifier(values[0], "id", "value[0].id"),
            parent_plan_id=plan_id,
            root_suite_id=root_suite_id,
            name=name,
            query=query,
        )


@dataclass(frozen=True)
class Point:
    """Binding of one test case to the suite."""

    id: int
    test_case_id: str

    @classmethod
    def list_from_response(cls, body: Any) -> tuple[Point, ...]:
        points = []
        for index, entry in enumerate(_sequence(body, "value")):
            location = f"value[{index}]"
            test_case = _mapping(entry, "testCase", f"{location}.testCase")
            points.append(
                cls(
                    id=_integer(entry, "id", f"{location}.id"),
                    test_case_id=_identifier(test_case, "id", f"{location}.testCase.id"),
                )
            )
        return tuple(points)


@dataclass(frozen=True)
class Run:
    """Test run bound to an ordered set of points."""

    id: str
    plan_id: str
    name: str = ""
    point_ids: tuple[int, ...] = ()

    @staticmethod
    def to_payload(name: str, plan_id: str, point_ids: Sequence[int]) -> dict[str, Any]:
        return {"name": name, "pointIds": list(point_ids), "plan": {"id": plan_id}}

    @classmethod
    def from_response(
        cls, body: Any, *, plan_id: str, name: str = "", point_ids: Sequence[int] = ()
    ) -> Run:
        return cls(
            id=_identifier(body, "id"),
            plan_id=plan_id,
            name=name,
            point_ids=tuple(point_ids),
        )


@dataclass(frozen=True)
class ResultRecord:
    """Result attached to one point of the run."""

    point_id: int
    state: str = ""
    outcome: str = ""
    comment: str = DEFAULT_RESULT_COMMENT

    def completed(self, outcome: str, comment: str) -> ResultRecord:
        return ResultRecord(
            point_id=self.point_id,
            state=COMPLETED_STATE,
            outcome=outcome,
            comment=comment,
        )

    def to_payload(self, position: int) -> dict[str, Any]:
        """Serialize for the run results update; ``position`` is the index in the run."""
        return {
            "id": RESULT_ID_BASE + position,
            "testPoint": {"id": str(self.point_id)},
            "state": self.state,
            "outcome": self.outcome,
            "comment": self.comment,
        }


def _mapping(body: Any, key: str, location: str | None = None) -> Mapping[str, Any]:
    if not isinstance(body, Mapping):
        raise ResponseFieldMissing(location or key)
    value = body.get(key)
    if not isinstance(value, Mapping):
        raise ResponseFieldMissing(location or key)
    return value


def _sequence(body: Any, key: str) -> list[Any]:
    if not isinstance(body, Mapping):
        raise ResponseFieldMissing(key)
    value = body.get(key)
    if not isinstance(value, list):
        raise ResponseFieldMissing(key)
    return value


def _identifier(body: Any, key: str, location: str | None = None) -> str:
    if not isinstance(body, Mapping):
        raise ResponseFieldMissing(location or key)
    value = body.get(key)
    if value is None or isinstance(value, bool) or str(value).strip() == "":
        raise ResponseFieldMissing(location or key)
    return str(value)


def _integer(body: Any, key: str, location: str) -> int:
    try:
        return int(_identifier(body, key, location))
    except ValueError as exc:
        raise ResponseFieldMissing(location) from exc
