"""
Data models for the Dune API client.
"""

from .execution import (
    CancelExecutionResponse,
    ExecuteResponse,
    ExecutionErrorDetail,
    ExecutionResults,
    ExecutionState,
    ExecutionStatus,
    PipelineExecuteResponse,
    ResultMetadata,
    ResultSet,
)
from .requests import (
    ExecuteQueryRequest,
    ExecuteSqlRequest,
    Performance,
    ResultOptions,
)

__all__ = [
    "CancelExecutionResponse",
    "ExecuteResponse",
    "ExecutionErrorDetail",
    "ExecutionResults",
    "ExecutionState",
    "ExecutionStatus",
    "PipelineExecuteResponse",
    "ResultMetadata",
    "ResultSet",
    "ExecuteQueryRequest",
    "ExecuteSqlRequest",
    "Performance",
    "ResultOptions",
]
