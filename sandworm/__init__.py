"""
sandworm - client for the Dune Analytics query API.

``DuneClient`` is the async client; ``sandworm.blocking.DuneClient`` is its
synchronous twin.
"""

from .client import DuneClient
from .errors import (
    ApiError,
    DecodeError,
    DuneError,
    ExecutionCancelledError,
    ExecutionFailedError,
    ExecutionTimeoutError,
    InvalidCredentialError,
    InvalidRequestError,
    TransportError,
)
from .factory import create_dune_client
from .models import (
    CancelExecutionResponse,
    ExecuteQueryRequest,
    ExecuteResponse,
    ExecuteSqlRequest,
    ExecutionResults,
    ExecutionState,
    ExecutionStatus,
    Performance,
    PipelineExecuteResponse,
    ResultMetadata,
    ResultOptions,
    ResultSet,
)
from .settings import Settings, load_settings

__all__ = [
    "DuneClient",
    "create_dune_client",
    "Settings",
    "load_settings",
    "ApiError",
    "DecodeError",
    "DuneError",
    "ExecutionCancelledError",
    "ExecutionFailedError",
    "ExecutionTimeoutError",
    "InvalidCredentialError",
    "InvalidRequestError",
    "TransportError",
    "CancelExecutionResponse",
    "ExecuteQueryRequest",
    "ExecuteResponse",
    "ExecuteSqlRequest",
    "ExecutionResults",
    "ExecutionState",
    "ExecutionStatus",
    "Performance",
    "PipelineExecuteResponse",
    "ResultMetadata",
    "ResultOptions",
    "ResultSet",
]
