from pathlib import Path
import sys

import pytest
from pydantic import ValidationError

sys.path.insert(0, str(Path(__file__).parent.parent.parent))

from sandworm.models import (  # noqa: E402
    ExecuteQueryRequest,
    ExecuteSqlRequest,
    ExecutionResults,
    ExecutionState,
    ExecutionStatus,
    Performance,
    PipelineExecuteResponse,
    ResultOptions,
)


def test_result_options_limit_offset_only():
    assert ResultOptions(limit=10, offset=5).to_query_params() == {"limit": "10", "offset": "5"}


def test_result_options_empty_means_service_defaults():
    assert ResultOptions().to_query_params() == {}


def test_result_options_wire_formatting():
    params = ResultOptions(
        sort_by="block_time desc",
        columns=["a", "b"],
        filters="a > 1",
        sample_count=100,
        allow_partial_results=True,
        ignore_max_datapoints_per_request=False,
    ).to_query_params()
    assert params == {
        "sort_by": "block_time desc",
        "columns": "a,b",
        "filters": "a > 1",
        "sample_count": "100",
        "allow_partial_results": "true",
        "ignore_max_datapoints_per_request": "false",
    }


def test_result_options_validation():
    with pytest.raises(ValidationError):
        ResultOptions(limit=0)
    with pytest.raises(ValidationError):
        ResultOptions(offset=-1)
    with pytest.raises(ValidationError):
        ResultOptions(columns=[])


def test_sql_request_body_omits_unset_options():
    assert ExecuteSqlRequest(sql="SELECT 1").body() == {"sql": "SELECT 1"}
    assert ExecuteSqlRequest(sql="SELECT 1", performance=Performance.LARGE).body() == {
        "sql": "SELECT 1",
        "performance": "large",
    }


def test_sql_request_rejects_blank_sql():
    with pytest.raises(ValidationError, match="sql must not be empty"):
        ExecuteSqlRequest(sql="   ")


def test_query_request_keeps_query_id_out_of_body():
    request = ExecuteQueryRequest(query_id=1234, query_parameters={"wallet": "0xabc"})
    assert request.query_id == 1234
    assert request.body() == {"query_parameters": {"wallet": "0xabc"}}
    with pytest.raises(ValidationError):
        ExecuteQueryRequest(query_id=0)


@pytest.mark.parametrize(
    "state,terminal",
    [
        (ExecutionState.PENDING, False),
        (ExecutionState.EXECUTING, False),
        (ExecutionState.COMPLETED, True),
        (ExecutionState.FAILED, True),
        (ExecutionState.CANCELLED, True),
    ],
)
def test_terminal_states(state, terminal):
    assert state.is_terminal is terminal


def test_status_parses_dune_payload():
    status = ExecutionStatus.model_validate(
        {
            "execution_id": "01HX",
            "query_id": 1234,
            "state": "QUERY_STATE_EXECUTING",
            "is_execution_finished": False,
            "submitted_at": "2026-01-01T00:00:00.123456789Z",
            "queue_position": 3,
            "result_metadata": {"column_names": ["n"], "row_count": 0},
            "unexpected_field": "ignored",
        }
    )
    assert status.state is ExecutionState.EXECUTING
    assert status.queue_position == 3
    assert status.result_metadata.column_names == ["n"]


def test_status_rejects_unknown_state():
    with pytest.raises(ValidationError):
        ExecutionStatus.model_validate({"execution_id": "01HX", "state": "QUERY_STATE_EXPIRED"})


def test_results_rows_default_to_empty():
    results = ExecutionResults.model_validate(
        {"execution_id": "01HX", "state": "QUERY_STATE_PENDING"}
    )
    assert results.result is None
    assert results.rows == []


def test_pipeline_response_accepts_either_id_key():
    assert PipelineExecuteResponse.model_validate({"execution_id": "a"}).execution_id == "a"
    assert (
        PipelineExecuteResponse.model_validate({"pipeline_execution_id": "b"}).execution_id == "b"
    )
