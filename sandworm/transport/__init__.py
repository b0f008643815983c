"""Transport implementations."""

from .base import AsyncTransport, Transport, TransportResponse
from .http_transport import (
    API_KEY_HEADER,
    BASE_URL,
    DEFAULT_TIMEOUT_SECONDS,
    AsyncHttpTransport,
    HttpTransport,
    build_auth_headers,
)

__all__ = [
    "API_KEY_HEADER",
    "BASE_URL",
    "DEFAULT_TIMEOUT_SECONDS",
    "AsyncTransport",
    "AsyncHttpTransport",
    "HttpTransport",
    "Transport",
    "TransportResponse",
    "build_auth_headers",
]
