"""
Execution lifecycle models.

States and status snapshots are observed from the service, never set by the
client. Timestamps are kept as the service's ISO-8601 strings.
"""

from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import AliasChoices, BaseModel, Field


class ExecutionState(str, Enum):
    """Remote execution state, as reported by the status endpoint."""
    PENDING = "QUERY_STATE_PENDING"
    EXECUTING = "QUERY_STATE_EXECUTING"
    COMPLETED = "QUERY_STATE_COMPLETED"
    FAILED = "QUERY_STATE_FAILED"
    CANCELLED = "QUERY_STATE_CANCELLED"

    @property
    def is_terminal(self) -> bool:
        return self in (
            ExecutionState.COMPLETED,
            ExecutionState.FAILED,
            ExecutionState.CANCELLED,
        )


class ExecutionErrorDetail(BaseModel):
    type: Optional[str] = None
    message: Optional[str] = None
    metadata: Optional[Dict[str, Any]] = None


class ResultMetadata(BaseModel):
    column_names: List[str] = Field(default_factory=list)
    column_types: Optional[List[str]] = None
    row_count: int = 0
    result_set_bytes: Optional[int] = None
    total_row_count: Optional[int] = None
    total_result_set_bytes: Optional[int] = None
    datapoint_count: Optional[int] = None
    pending_time_millis: Optional[int] = None
    execution_time_millis: Optional[int] = None


class ExecutionStatus(BaseModel):
    """
    A single status snapshot for one execution.

    Fetched once per poll and never cached beyond it.
    """
    execution_id: Optional[str] = None
    query_id: Optional[int] = None
    state: ExecutionState
    is_execution_finished: Optional[bool] = None
    submitted_at: Optional[str] = None
    execution_started_at: Optional[str] = None
    execution_ended_at: Optional[str] = None
    expires_at: Optional[str] = None
    cancelled_at: Optional[str] = None
    queue_position: Optional[int] = None
    result_metadata: Optional[ResultMetadata] = None
    error: Optional[ExecutionErrorDetail] = None


class ResultSet(BaseModel):
    rows: List[Dict[str, Any]] = Field(default_factory=list)
    metadata: ResultMetadata = Field(default_factory=ResultMetadata)


class ExecutionResults(BaseModel):
    """
    Results envelope for an execution.

    ``result`` is only populated once the execution has completed; earlier
    calls return whatever the service yields, usually no result at all.
    """
    execution_id: Optional[str] = None
    query_id: Optional[int] = None
    state: ExecutionState
    is_execution_finished: Optional[bool] = None
    submitted_at: Optional[str] = None
    execution_started_at: Optional[str] = None
    execution_ended_at: Optional[str] = None
    expires_at: Optional[str] = None
    cancelled_at: Optional[str] = None
    next_offset: Optional[int] = None
    next_uri: Optional[str] = None
    result: Optional[ResultSet] = None
    error: Optional[ExecutionErrorDetail] = None

    @property
    def rows(self) -> List[Dict[str, Any]]:
        return self.result.rows if self.result else []


class ExecuteResponse(BaseModel):
    execution_id: str
    state: Optional[ExecutionState] = None


class PipelineExecuteResponse(BaseModel):
    execution_id: str = Field(
        ...,
        validation_alias=AliasChoices("execution_id", "pipeline_execution_id"),
    )
    child_execution_ids: List[str] = Field(default_factory=list)


class CancelExecutionResponse(BaseModel):
    success: bool
