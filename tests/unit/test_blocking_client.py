import json
from pathlib import Path
import sys

import httpx
import pytest

sys.path.insert(0, str(Path(__file__).parent.parent.parent))

from sandworm import (  # noqa: E402
    ApiError,
    ExecutionCancelledError,
    ExecutionFailedError,
    ExecutionTimeoutError,
    InvalidRequestError,
    ResultOptions,
    TransportError,
)
from sandworm.blocking import DuneClient  # noqa: E402


class _ScriptedStates:
    def __init__(self, states):
        self.states = list(states)
        self.paths = []

    def __call__(self, request):
        self.paths.append(request.url.path)
        if request.url.path.endswith("/execute"):
            return httpx.Response(200, json={"execution_id": "01HX"})
        if request.url.path.endswith("/status"):
            state = self.states.pop(0) if len(self.states) > 1 else self.states[0]
            return httpx.Response(200, json={"execution_id": "01HX", "state": state})
        if request.url.path.endswith("/results"):
            return httpx.Response(
                200,
                json={
                    "execution_id": "01HX",
                    "state": "QUERY_STATE_COMPLETED",
                    "result": {
                        "rows": [{"epoch": 1, "net_sol": 2.5}],
                        "metadata": {"column_names": ["epoch", "net_sol"], "row_count": 1},
                    },
                },
            )
        return httpx.Response(404, json={"error": "not found"})

    def count(self, suffix):
        return sum(1 for p in self.paths if p.endswith(suffix))


@pytest.fixture
def sleeps(monkeypatch):
    recorded = []
    monkeypatch.setattr("sandworm.blocking.time.sleep", recorded.append)
    return recorded


def _client(handler, **kwargs):
    return DuneClient("test-key", transport=httpx.MockTransport(handler), **kwargs)


def test_blocking_run_sql_two_pending_then_completed(sleeps):
    api = _ScriptedStates(
        ["QUERY_STATE_PENDING", "QUERY_STATE_PENDING", "QUERY_STATE_COMPLETED"]
    )
    with _client(api, poll_interval_seconds=1.0) as client:
        results = client.run_sql("SELECT 1", 60)

    assert results.rows == [{"epoch": 1, "net_sol": 2.5}]
    assert api.count("/status") == 3
    assert api.count("/results") == 1
    assert sleeps == [1.0, 1.0]


def test_blocking_default_poll_interval_is_one_second(sleeps):
    api = _ScriptedStates(["QUERY_STATE_EXECUTING", "QUERY_STATE_COMPLETED"])
    client = _client(api)
    client.run_query(1234, 60)
    assert sleeps == [1.0]
    assert api.paths[0] == "/api/v1/query/1234/execute"


def test_blocking_failed_state(sleeps):
    api = _ScriptedStates(["QUERY_STATE_FAILED"])
    client = _client(api)
    with pytest.raises(ExecutionFailedError):
        client.run_sql("SELECT 1", 60)
    assert api.count("/results") == 0
    assert sleeps == []


def test_blocking_cancelled_state(sleeps):
    api = _ScriptedStates(["QUERY_STATE_PENDING", "QUERY_STATE_CANCELLED"])
    client = _client(api)
    with pytest.raises(ExecutionCancelledError):
        client.wait_for_results("01HX", 60)


def test_blocking_timeout_uses_wall_clock(monkeypatch):
    clock = {"now": 100.0}
    monkeypatch.setattr("sandworm.execution.time.monotonic", lambda: clock["now"])

    def fake_sleep(seconds):
        clock["now"] += seconds

    monkeypatch.setattr("sandworm.blocking.time.sleep", fake_sleep)
    api = _ScriptedStates(["QUERY_STATE_PENDING"])
    client = _client(api, poll_interval_seconds=1.0)

    with pytest.raises(ExecutionTimeoutError) as excinfo:
        client.wait_for_results("01HX", 2.5)

    assert excinfo.value.timeout_seconds == 2.5
    # checks at t=0,1,2 pass; t=3 exceeds 2.5
    assert api.count("/status") == 3


def test_blocking_results_options_and_csv():
    seen = []

    def handler(request):
        seen.append((request.url.path, dict(request.url.params)))
        return httpx.Response(200, text="epoch,net_sol\n1,2.5\n")

    client = _client(handler)
    options = ResultOptions(limit=10, offset=5, sort_by="epoch desc", columns=["epoch", "net_sol"])
    text = client.get_execution_results_csv("01HX", options)

    assert text == "epoch,net_sol\n1,2.5\n"
    assert seen == [
        (
            "/api/v1/execution/01HX/results/csv",
            {"limit": "10", "offset": "5", "sort_by": "epoch desc", "columns": "epoch,net_sol"},
        )
    ]


def test_blocking_pipeline_and_cancel():
    def handler(request):
        if request.url.path.endswith("/pipeline/execute"):
            assert json.loads(request.read()) == {"performance": "medium"}
            return httpx.Response(200, json={"execution_id": "p-1"})
        return httpx.Response(200, json={"success": True})

    client = _client(handler)
    pipeline = client.execute_pipeline(42, performance="medium")
    assert pipeline.execution_id == "p-1"
    assert pipeline.child_execution_ids == []
    assert client.cancel_execution("p-1") is True


def test_blocking_api_error_and_transport_error():
    client = _client(lambda request: httpx.Response(401, json={"error": "invalid API Key"}))
    with pytest.raises(ApiError, match="invalid API Key"):
        client.get_execution_status("01HX")

    def broken(request):
        raise httpx.ReadTimeout("timed out", request=request)

    client = _client(broken)
    with pytest.raises(TransportError):
        client.get_latest_results(7)


def test_blocking_invalid_arguments_raise_before_any_request():
    api = _ScriptedStates(["QUERY_STATE_COMPLETED"])
    client = _client(api)

    with pytest.raises(InvalidRequestError):
        client.execute_sql("   ")
    with pytest.raises(InvalidRequestError):
        client.execute_query(1, performance="xlarge")
    with pytest.raises(InvalidRequestError):
        client.run_query(0, 60)
    assert api.paths == []
