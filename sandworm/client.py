"""
Async client for the Dune Analytics API.

Exposes the primitive execution operations (submit, status, results, cancel)
and composes them into ``wait_for_results`` / ``run_and_wait``, which poll
until the remote execution reaches a terminal state.
"""

from __future__ import annotations

import logging
import time
from typing import Any, Dict, Optional, Union

import anyio
import httpx

from . import execution as _execution
from .execution import DEFAULT_POLL_INTERVAL_SECONDS, Submission
from .models import (
    CancelExecutionResponse,
    ExecuteQueryRequest,
    ExecuteResponse,
    ExecuteSqlRequest,
    ExecutionResults,
    ExecutionStatus,
    Performance,
    PipelineExecuteResponse,
    ResultOptions,
)
from .transport import (
    BASE_URL,
    DEFAULT_TIMEOUT_SECONDS,
    AsyncHttpTransport,
    AsyncTransport,
    build_auth_headers,
)

LOGGER = logging.getLogger("sandworm")


class DuneClient:
    """Coroutine client; safe to share across concurrent tasks.

    Args:
        api_key:               Dune API key, sent on every request.
        base_url:              API root, ``https://api.dune.com/api`` by default.
        timeout_seconds:       Per-request timeout applied by the transport.
        poll_interval_seconds: Delay between status polls while waiting.
        transport:             Injected httpx transport (``httpx.MockTransport``
                               in tests).
        http:                  Injected ``AsyncTransport``; skips building one.
    """

    def __init__(
        self,
        api_key: str,
        base_url: str = BASE_URL,
        timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS,
        poll_interval_seconds: float = DEFAULT_POLL_INTERVAL_SECONDS,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        http: Optional[AsyncTransport] = None,
    ):
        build_auth_headers(api_key)
        self.http = http if http is not None else AsyncHttpTransport(
            api_key,
            base_url=base_url,
            timeout_seconds=timeout_seconds,
            transport=transport,
        )
        self.poll_interval_seconds = poll_interval_seconds

    async def aclose(self) -> None:
        await self.http.aclose()

    async def __aenter__(self) -> "DuneClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    # ── Execute ──────────────────────────────────────────────────────────

    async def execute_sql(
        self,
        sql: str,
        *,
        query_parameters: Optional[Dict[str, Any]] = None,
        performance: Optional[Union[Performance, str]] = None,
    ) -> ExecuteResponse:
        request = _execution.build_request(
            ExecuteSqlRequest, sql=sql, query_parameters=query_parameters, performance=performance
        )
        return await self.submit(request)

    async def execute_query(
        self,
        query_id: int,
        *,
        query_parameters: Optional[Dict[str, Any]] = None,
        performance: Optional[Union[Performance, str]] = None,
    ) -> ExecuteResponse:
        request = _execution.build_request(
            ExecuteQueryRequest, query_id=query_id, query_parameters=query_parameters, performance=performance
        )
        return await self.submit(request)

    async def execute_pipeline(
        self,
        query_id: int,
        *,
        query_parameters: Optional[Dict[str, Any]] = None,
        performance: Optional[Union[Performance, str]] = None,
    ) -> PipelineExecuteResponse:
        """Execute a saved query together with its declared dependents."""
        request = _execution.build_request(
            ExecuteQueryRequest, query_id=query_id, query_parameters=query_parameters, performance=performance
        )
        response = await self.http.send(
            "POST", _execution.pipeline_execute_path(request.query_id), json=request.body()
        )
        pipeline = _execution.parse_json_response(response, PipelineExecuteResponse)
        LOGGER.info(
            "Submitted pipeline for query %s: execution_id=%s children=%d",
            request.query_id,
            pipeline.execution_id,
            len(pipeline.child_execution_ids),
        )
        return pipeline

    async def submit(self, request: Submission) -> ExecuteResponse:
        if isinstance(request, ExecuteSqlRequest):
            path = _execution.sql_execute_path()
        elif isinstance(request, ExecuteQueryRequest):
            path = _execution.query_execute_path(request.query_id)
        else:
            raise TypeError(f"Unsupported submission: {type(request).__name__}")
        response = await self.http.send("POST", path, json=request.body())
        execute = _execution.parse_json_response(response, ExecuteResponse)
        LOGGER.info("Submitted execution %s via %s", execute.execution_id, path)
        return execute

    # ── Status & results ─────────────────────────────────────────────────

    async def get_execution_status(self, execution_id: str) -> ExecutionStatus:
        response = await self.http.send("GET", _execution.status_path(execution_id))
        return _execution.parse_json_response(response, ExecutionStatus)

    async def get_execution_results(
        self, execution_id: str, options: Optional[ResultOptions] = None
    ) -> ExecutionResults:
        response = await self.http.send(
            "GET",
            _execution.results_path(execution_id),
            params=_execution.result_params(options),
        )
        return _execution.parse_json_response(response, ExecutionResults)

    async def get_execution_results_csv(
        self, execution_id: str, options: Optional[ResultOptions] = None
    ) -> str:
        """CSV export as decoded text; the body is not parsed or re-encoded."""
        response = await self.http.send(
            "GET",
            _execution.results_path(execution_id, csv=True),
            params=_execution.result_params(options),
        )
        return _execution.parse_text_response(response)

    async def get_latest_results(
        self, query_id: int, options: Optional[ResultOptions] = None
    ) -> ExecutionResults:
        """Latest stored results of a saved query, without executing it."""
        response = await self.http.send(
            "GET",
            _execution.latest_results_path(query_id),
            params=_execution.result_params(options),
        )
        return _execution.parse_json_response(response, ExecutionResults)

    async def get_latest_results_csv(
        self, query_id: int, options: Optional[ResultOptions] = None
    ) -> str:
        response = await self.http.send(
            "GET",
            _execution.latest_results_path(query_id, csv=True),
            params=_execution.result_params(options),
        )
        return _execution.parse_text_response(response)

    # ── Cancel ───────────────────────────────────────────────────────────

    async def cancel_execution(self, execution_id: str) -> bool:
        response = await self.http.send("POST", _execution.cancel_path(execution_id))
        cancelled = _execution.parse_json_response(response, CancelExecutionResponse)
        LOGGER.info("Cancel requested for %s: success=%s", execution_id, cancelled.success)
        return cancelled.success

    # ── Composite ────────────────────────────────────────────────────────

    async def wait_for_results(
        self,
        execution_id: str,
        timeout_seconds: float,
        options: Optional[ResultOptions] = None,
    ) -> ExecutionResults:
        """Poll until the execution is terminal, then fetch its results.

        The deadline is checked before each poll, so a slow poll may overrun
        ``timeout_seconds``; the following check raises. Transport and API
        errors from a poll are not retried.
        """
        started = time.monotonic()
        while True:
            _execution.check_deadline(started, timeout_seconds, execution_id)
            status = await self.get_execution_status(execution_id)
            if _execution.is_complete(execution_id, status):
                return await self.get_execution_results(execution_id, options)
            await anyio.sleep(self.poll_interval_seconds)

    async def run_and_wait(
        self,
        submission: Submission,
        timeout_seconds: float,
        options: Optional[ResultOptions] = None,
    ) -> ExecutionResults:
        execute = await self.submit(submission)
        return await self.wait_for_results(execute.execution_id, timeout_seconds, options)

    async def run_sql(
        self,
        sql: str,
        timeout_seconds: float,
        *,
        query_parameters: Optional[Dict[str, Any]] = None,
        performance: Optional[Union[Performance, str]] = None,
        options: Optional[ResultOptions] = None,
    ) -> ExecutionResults:
        request = _execution.build_request(
            ExecuteSqlRequest, sql=sql, query_parameters=query_parameters, performance=performance
        )
        return await self.run_and_wait(request, timeout_seconds, options)

    async def run_query(
        self,
        query_id: int,
        timeout_seconds: float,
        *,
        query_parameters: Optional[Dict[str, Any]] = None,
        performance: Optional[Union[Performance, str]] = None,
        options: Optional[ResultOptions] = None,
    ) -> ExecutionResults:
        request = _execution.build_request(
            ExecuteQueryRequest, query_id=query_id, query_parameters=query_parameters, performance=performance
        )
        return await self.run_and_wait(request, timeout_seconds, options)
