"""Synchronization domain exports."""

from .parallel_execution import run_scenarios_in_parallel
from .result_aggregator import (
    PointCorrelation,
    build_result_records,
    compose_result_comment,
    serialize_results,
)
from .suite_orchestrator import RemoteResourceOperations, SuiteOrchestrator, SuiteTarget
from .sync_session import SynchronizationError, SyncOutcome, SyncSession

__all__ = [
    "PointCorrelation",
    "build_result_records",
    "compose_result_comment",
    "serialize_results",
    "SuiteOrchestrator",
    "SuiteTarget",
    "RemoteResourceOperations",
    "SynchronizationError",
    "SyncOutcome",
    "SyncSession",
    "run_scenarios_in_parallel",
]
