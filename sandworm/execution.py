"""Shared request/response helpers for the blocking and async clients.

Centralises the endpoint templates, response interpretation and the
per-poll state dispatch so both clients drive the same state machine.
"""

from __future__ import annotations

import json
import logging
import time
from typing import Any, Dict, Optional, Type, TypeVar, Union
from urllib.parse import quote

from pydantic import BaseModel, ValidationError

from .errors import (
    ApiError,
    DecodeError,
    ExecutionCancelledError,
    ExecutionFailedError,
    ExecutionTimeoutError,
    InvalidRequestError,
)
from .models import (
    ExecuteQueryRequest,
    ExecuteSqlRequest,
    ExecutionState,
    ExecutionStatus,
    ResultOptions,
)
from .transport import TransportResponse

LOGGER = logging.getLogger("sandworm")

DEFAULT_POLL_INTERVAL_SECONDS = 1.0

Submission = Union[ExecuteSqlRequest, ExecuteQueryRequest]
ModelT = TypeVar("ModelT", bound=BaseModel)


# ── Endpoints ─────────────────────────────────────────────────────────────


def _segment(value: Any) -> str:
    return quote(str(value), safe="")


def sql_execute_path() -> str:
    return "/v1/sql/execute"


def query_execute_path(query_id: int) -> str:
    return f"/v1/query/{_segment(query_id)}/execute"


def pipeline_execute_path(query_id: int) -> str:
    return f"/v1/query/{_segment(query_id)}/pipeline/execute"


def status_path(execution_id: str) -> str:
    return f"/v1/execution/{_segment(execution_id)}/status"


def results_path(execution_id: str, csv: bool = False) -> str:
    path = f"/v1/execution/{_segment(execution_id)}/results"
    return f"{path}/csv" if csv else path


def latest_results_path(query_id: int, csv: bool = False) -> str:
    path = f"/v1/query/{_segment(query_id)}/results"
    return f"{path}/csv" if csv else path


def cancel_path(execution_id: str) -> str:
    return f"/v1/execution/{_segment(execution_id)}/cancel"


def build_request(model: Type[ModelT], **fields: Any) -> ModelT:
    """Validate request arguments locally, before any network call."""
    try:
        return model(**fields)
    except ValidationError as exc:
        raise InvalidRequestError(f"Invalid {model.__name__}: {exc}") from exc


def result_params(options: Optional[ResultOptions]) -> Dict[str, str]:
    return options.to_query_params() if options is not None else {}


# ── Responses ─────────────────────────────────────────────────────────────


def api_error_from(response: TransportResponse) -> ApiError:
    """Build an ApiError, preferring the ``error`` field of a JSON body."""
    try:
        payload = json.loads(response.body)
    except (json.JSONDecodeError, ValueError):
        payload = None
    if isinstance(payload, dict) and isinstance(payload.get("error"), str):
        return ApiError(payload["error"], status_code=response.status_code)
    return ApiError(
        f"HTTP {response.status_code}: {response.body}",
        status_code=response.status_code,
    )


def parse_json_response(response: TransportResponse, model: Type[ModelT]) -> ModelT:
    if not response.is_success:
        raise api_error_from(response)
    try:
        return model.model_validate_json(response.body)
    except ValidationError as exc:
        raise DecodeError(
            f"Could not decode {model.__name__} from response: {exc}",
            body=response.body,
        ) from exc


def parse_text_response(response: TransportResponse) -> str:
    """Return the body as decoded text (UTF-8 unless the response says otherwise).

    Used for the CSV endpoints; the text is handed back as-is, never parsed.
    """
    if not response.is_success:
        raise ApiError(
            f"HTTP {response.status_code}: {response.body}",
            status_code=response.status_code,
        )
    return response.body


# ── State machine ─────────────────────────────────────────────────────────


def check_deadline(started: float, timeout_seconds: float, execution_id: str) -> None:
    """Raise once the wait budget is exhausted. Called before every poll."""
    elapsed = time.monotonic() - started
    if elapsed > timeout_seconds:
        LOGGER.warning(
            "Execution %s still running after %.2fs (timeout=%ss)",
            execution_id,
            elapsed,
            timeout_seconds,
        )
        raise ExecutionTimeoutError(timeout_seconds, execution_id=execution_id)


def is_complete(execution_id: str, status: ExecutionStatus) -> bool:
    """
    Interpret one status snapshot.

    Returns True when results are ready, False when the execution is still
    running, and raises for the failure terminals.
    """
    state = status.state
    if state is ExecutionState.COMPLETED:
        LOGGER.info("Execution %s completed", execution_id)
        return True
    if state is ExecutionState.FAILED:
        LOGGER.warning("Execution %s failed", execution_id)
        raise ExecutionFailedError(execution_id, status)
    if state is ExecutionState.CANCELLED:
        LOGGER.warning("Execution %s was cancelled", execution_id)
        raise ExecutionCancelledError(execution_id)
    if state is ExecutionState.PENDING or state is ExecutionState.EXECUTING:
        LOGGER.debug("Execution %s is %s", execution_id, state.value)
        return False
    raise AssertionError(f"Unhandled execution state: {state!r}")
