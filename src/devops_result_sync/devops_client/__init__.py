"""Test-management service client exports."""

from .resource_models import (
    COMPLETED_STATE,
    DEFAULT_RESULT_COMMENT,
    RESULT_ID_BASE,
    Plan,
    Point,
    ResultRecord,
    Run,
    Suite,
)
from .plans_api_client import (
    PlansApiClient,
    RemoteOperationError,
    ResponseDataError,
    TransportError,
)

__all__ = [
    "COMPLETED_STATE",
    "DEFAULT_RESULT_COMMENT",
    "RESULT_ID_BASE",
    "Plan",
    "Point",
    "ResultRecord",
    "Run",
    "Suite",
    "PlansApiClient",
    "RemoteOperationError",
    "ResponseDataError",
    "TransportError",
]
