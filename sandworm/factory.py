"""
Client factory for building a configured client from Settings.
"""

from __future__ import annotations

from typing import Any, Optional, Union

from . import blocking
from .client import DuneClient
from .settings import Settings, load_settings


def create_dune_client(
    settings: Optional[Settings] = None,
    *,
    mode: str = "async",
    transport: Optional[Any] = None,
) -> Union[DuneClient, blocking.DuneClient]:
    settings = settings or load_settings()
    normalized = (mode or "async").strip().lower()
    kwargs = dict(
        base_url=settings.base_url,
        timeout_seconds=settings.request_timeout_seconds,
        poll_interval_seconds=settings.poll_interval_seconds,
        transport=transport,
    )
    if normalized == "async":
        return DuneClient(settings.api_key, **kwargs)
    if normalized == "blocking":
        return blocking.DuneClient(settings.api_key, **kwargs)
    raise ValueError(f"Unsupported client mode: {mode}")
