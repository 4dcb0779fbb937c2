"""Response envelopes shared by the API routes."""
from __future__ import annotations

import time
from datetime import datetime, timezone
from typing import Any

from fastapi import Request


def _timestamp() -> str:
    return datetime.now(timezone.utc).isoformat()


def request_meta(request: Request, **extra: Any) -> dict[str, Any]:
    started = getattr(request.state, "started_at", None)
    elapsed_ms = int((time.perf_counter() - started) * 1000) if started is not None else 0
    meta: dict[str, Any] = {"duration": f"{elapsed_ms}ms", "timestamp": _timestamp()}
    meta.update(extra)
    return meta


def success(request: Request, data: Any, **meta: Any) -> dict[str, Any]:
    return {"success": True, "data": data, "meta": request_meta(request, **meta)}


def failure(request: Request, error: str, *, message: str, error_type: str) -> dict[str, Any]:
    return {
        "error": error,
        "details": {"message": message, "type": error_type},
        "meta": request_meta(request),
    }
