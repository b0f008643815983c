"""
Error taxonomy for the Dune API client.

Every failure surfaced by the client is a ``DuneError`` subclass so callers
can catch the whole family or branch on the specific kind.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from .models import ExecutionStatus


class DuneError(Exception):
    """Base class for all client errors."""


class InvalidCredentialError(DuneError):
    def __init__(self, message: str = "Dune API key must be a non-empty string"):
        super().__init__(message)


class InvalidRequestError(DuneError):
    """Request arguments rejected locally, before anything is sent."""


class TransportError(DuneError):
    """Connection, timeout or protocol failure below the HTTP status level."""


class ApiError(DuneError):
    """The service answered with a non-success status."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class DecodeError(DuneError):
    """A success response whose body does not match the expected shape."""

    def __init__(self, message: str, body: str = ""):
        super().__init__(message)
        self.body = body[:500]


class ExecutionFailedError(DuneError):
    def __init__(self, execution_id: str, status: "ExecutionStatus"):
        detail = status.error.message if status.error and status.error.message else status.state.value
        super().__init__(
            f"Query execution failed for execution_id {execution_id}: {detail}"
        )
        self.execution_id = execution_id
        self.status = status


class ExecutionCancelledError(DuneError):
    def __init__(self, execution_id: str):
        super().__init__(f"Query execution {execution_id} was cancelled")
        self.execution_id = execution_id


class ExecutionTimeoutError(DuneError):
    def __init__(self, timeout_seconds: float, execution_id: Optional[str] = None):
        super().__init__(
            f"Timed out after {timeout_seconds} seconds waiting for execution "
            f"{execution_id or '<unknown>'}"
        )
        self.timeout_seconds = timeout_seconds
        self.execution_id = execution_id
