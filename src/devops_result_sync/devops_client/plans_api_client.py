"""Test Plans REST client.

Every outbound call to the test-management service goes through
``PlansApiClient``. Each operation is a single authenticated request;
there is no retry here. Pass a fake ``session`` in tests to intercept
HTTP calls.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping, Sequence
from typing import Any, TypeVar

import requests

from devops_result_sync.authentication import basic_authorization_header
from devops_result_sync.configuration.runtime_settings import ServerSettings

from .resource_models import Plan, Point, ResponseFieldMissing, Run, Suite

logger = logging.getLogger(__name__)

MappedT = TypeVar("MappedT")

CREATE_PLAN_PATH = "/test/plans"
CREATE_SUITE_PATH = "/test/Plans/{plan_id}/suites/{root_suite_id}"
LIST_POINTS_PATH = "/test/Plans/{plan_id}/Suites/{suite_id}/points"
CREATE_RUN_PATH = "/test/runs"
UPDATE_RUN_RESULTS_PATH = "/test/Runs/{run_id}/results"


class RemoteOperationError(Exception):
    """Raised when a remote operation fails; the original cause is chained."""

    def __init__(self, operation: str, message: str) -> None:
        super().__init__(f"{operation} failed: {message}")
        self.operation = operation


class TransportError(RemoteOperationError):
    """The request could not complete or the response was not usable."""


class ResponseDataError(RemoteOperationError):
    """A well-formed response lacked an expected field."""


class PlansApiClient:
    """Plan, suite, point and run operations against the Test Plans API.

    The access token is encoded when the client is built, so a missing
    token fails before any request is attempted.
    """

    def __init__(
        self,
        server: ServerSettings,
        access_token: str | None,
        session: requests.Session | None = None,
    ) -> None:
        self._server = server
        self._authorization = basic_authorization_header(access_token)
        self._session = session

    @property
    def session(self) -> requests.Session:
        """Return (or lazily create) the requests.Session."""
        if self._session is None:
            self._session = requests.Session()
        return self._session

    def create_plan(self, name: str, area_path: str, iteration_path: str) -> Plan:
        logger.info(
            "Creating test plan '%s' (area path '%s', iteration '%s')",
            name,
            area_path,
            iteration_path,
        )
        body = self._send(
            "create plan",
            "POST",
            CREATE_PLAN_PATH,
            json_body=Plan.to_payload(name, area_path, iteration_path),
        )
        plan = self._map(
            "create plan",
            lambda: Plan.from_response(
                body, name=name, area_path=area_path, iteration_path=iteration_path
            ),
        )
        logger.info("Test plan %s created with root suite %s", plan.id, plan.root_suite_id)
        return plan

    def create_suite(self, plan_id: str, root_suite_id: str, name: str, query: str) -> Suite:
        logger.info("Creating dynamic suite '%s' under plan %s", name, plan_id)
        body = self._send(
            "create suite",
            "POST",
            CREATE_SUITE_PATH.format(plan_id=plan_id, root_suite_id=root_suite_id),
            json_body=Suite.to_payload(name, query),
        )
        suite = self._map(
            "create suite",
            lambda: Suite.from_response(
                body, plan_id=plan_id, root_suite_id=root_suite_id, name=name, query=query
            ),
        )
        logger.info("Suite %s created under plan %s", suite.id, plan_id)
        return suite

    def list_points(self, plan_id: str, suite_id: str) -> tuple[Point, ...]:
        logger.info("Listing points of suite %s in plan %s", suite_id, plan_id)
        body = self._send(
            "list points",
            "GET",
            LIST_POINTS_PATH.format(plan_id=plan_id, suite_id=suite_id),
        )
        points = self._map("list points", lambda: Point.list_from_response(body))
        logger.info("Suite %s has %d points", suite_id, len(points))
        return points

    def create_run(self, name: str, plan_id: str, point_ids: Sequence[int]) -> Run:
        logger.info("Creating run '%s' in plan %s for %d points", name, plan_id, len(point_ids))
        body = self._send(
            "create run",
            "POST",
            CREATE_RUN_PATH,
            json_body=Run.to_payload(name, plan_id, point_ids),
        )
        run = self._map(
            "create run",
            lambda: Run.from_response(body, plan_id=plan_id, name=name, point_ids=point_ids),
        )
        logger.info("Run %s created", run.id)
        return run

    def patch_run_results(self, run_id: str, results: Sequence[Mapping[str, Any]]) -> None:
        """Send the ordered result array; the response is only logged."""
        payload = [dict(result) for result in results]
        logger.info("Updating run %s with %d results", run_id, len(payload))
        logger.debug("Run %s result payload: %s", run_id, payload)
        body = self._send(
            "update run results",
            "PATCH",
            UPDATE_RUN_RESULTS_PATH.format(run_id=run_id),
            json_body=payload,
        )
        logger.info("Run %s update response: %s", run_id, body)

    def _url(self, path: str) -> str:
        return f"{self._server.url}{path}"

    def _headers(self, *, write: bool) -> dict[str, str]:
        headers = {"Authorization": self._authorization, "Accept": "application/json"}
        if write:
            headers["Content-Type"] = "application/json"
        return headers

    def _send(
        self,
        operation: str,
        method: str,
        path: str,
        *,
        json_body: dict[str, Any] | list[dict[str, Any]] | None = None,
    ) -> Any:
        kwargs: dict[str, Any] = {
            "headers": self._headers(write=json_body is not None),
            "params": {"api-version": self._server.api_version},
            "timeout": self._server.timeout_seconds,
            "verify": self._server.verify_tls,
        }
        if json_body is not None:
            kwargs["json"] = json_body
        url = self._url(path)
        try:
            response = self.session.request(method, url, **kwargs)
        except requests.RequestException as exc:
            logger.error("%s request to %s could not complete: %s", operation, url, exc)
            raise TransportError(operation, str(exc)) from exc

        logger.info("%s response status: %s %s", operation, response.status_code, response.reason)
        if not response.ok:
            message = f"HTTP {response.status_code}: {response.text[:500]}"
            logger.error("%s rejected by %s: %s", operation, url, message)
            raise TransportError(operation, message)
        if not response.content:
            return {}
        try:
            return response.json()
        except ValueError as exc:
            raise TransportError(operation, "response body is not valid JSON") from exc

    @staticmethod
    def _map(operation: str, mapper: Callable[[], MappedT]) -> MappedT:
        try:
            return mapper()
        except ResponseFieldMissing as exc:
            logger.error("%s response is missing '%s'", operation, exc)
            raise ResponseDataError(operation, f"response is missing '{exc}'") from exc
