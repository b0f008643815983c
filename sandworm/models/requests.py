"""
Request shapes and result options.

Request models are plain value objects built fresh for every call; their
JSON body is ``model_dump(exclude_none=True)`` so unset options fall back to
the service defaults.
"""

from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field, field_validator


class Performance(str, Enum):
    """Engine tier requested for an execution."""
    MEDIUM = "medium"
    LARGE = "large"


class ExecuteSqlRequest(BaseModel):
    """
    Execute raw SQL text.

    Example:
        ExecuteSqlRequest(sql="SELECT 1", performance="large")
    """
    sql: str = Field(..., description="SQL text to execute")
    query_parameters: Optional[Dict[str, Any]] = Field(
        None, description="Named query parameters"
    )
    performance: Optional[Performance] = Field(None, description="Engine tier")

    @field_validator("sql")
    @classmethod
    def validate_sql(cls, v):
        if not v.strip():
            raise ValueError("sql must not be empty")
        return v

    def body(self) -> Dict[str, Any]:
        return self.model_dump(mode="json", exclude_none=True)


class ExecuteQueryRequest(BaseModel):
    """
    Execute a saved query (or a pipeline rooted at it) by numeric ID.

    ``query_id`` goes into the URL path, never into the body.
    """
    query_id: int = Field(..., gt=0, exclude=True, description="Saved query ID")
    query_parameters: Optional[Dict[str, Any]] = Field(
        None, description="Named query parameters"
    )
    performance: Optional[Performance] = Field(None, description="Engine tier")

    def body(self) -> Dict[str, Any]:
        return self.model_dump(mode="json", exclude_none=True)


class ResultOptions(BaseModel):
    """
    Options for result retrieval, sent as query parameters.

    Only options that were set are sent; everything else is left to the
    service default.
    """
    limit: Optional[int] = Field(None, ge=1, description="Maximum rows returned")
    offset: Optional[int] = Field(None, ge=0, description="Pagination start row")
    sort_by: Optional[str] = Field(None, description="ORDER BY expression")
    columns: Optional[List[str]] = Field(None, description="Columns to return")
    filters: Optional[str] = Field(None, description="WHERE-style filter expression")
    sample_count: Optional[int] = Field(None, ge=1, description="Uniform row sample size")
    allow_partial_results: Optional[bool] = None
    ignore_max_datapoints_per_request: Optional[bool] = None

    @field_validator("columns")
    @classmethod
    def validate_columns(cls, v):
        if v is not None and len(v) == 0:
            raise ValueError("columns cannot be empty if provided")
        return v

    def to_query_params(self) -> Dict[str, str]:
        params: Dict[str, str] = {}
        for key, value in self.model_dump(exclude_none=True).items():
            if isinstance(value, bool):
                params[key] = "true" if value else "false"
            elif isinstance(value, list):
                params[key] = ",".join(value)
            else:
                params[key] = str(value)
        return params
