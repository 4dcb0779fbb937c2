"""HTTP client for the analysis proxy, used by the command line."""
from __future__ import annotations

from typing import Any

import httpx

from readiness.domain.errors import UpstreamError


class ProxyClient:
    """Calls the ``/api/analyze*`` endpoints and unwraps the envelope."""

    def __init__(self, base_url: str, *, timeout: float = 90.0, http_client: httpx.Client | None = None) -> None:
        self._base_url = base_url.rstrip("/")
        self._client = http_client or httpx.Client(timeout=timeout)
        self._owns_client = http_client is None

    def _post(self, path: str, payload: dict[str, Any]) -> Any:
        try:
            response = self._client.post(f"{self._base_url}{path}", json=payload)
        except httpx.HTTPError as exc:
            raise UpstreamError(f"تعذر الاتصال بخادم التحليل: {exc}") from exc

        try:
            body = response.json()
        except ValueError:
            body = {}
        if not isinstance(body, dict):
            body = {}

        if not response.is_success:
            message = body.get("error") or f"HTTP {response.status_code}: {response.reason_phrase}"
            raise UpstreamError(str(message), status_code=response.status_code, detail=body.get("details"))
        return body.get("data")

    def analyze(self, owner: str, repo: str, analysis_data: dict[str, Any]) -> Any:
        return self._post("/api/analyze", {"owner": owner, "repo": repo, "analysisData": analysis_data})

    def analyze_incident(self, debug_data: dict[str, Any]) -> Any:
        return self._post("/api/analyze-incident", {"debugData": debug_data})

    def close(self) -> None:  # pragma: no cover - best effort cleanup
        if self._owns_client:
            self._client.close()


__all__ = ["ProxyClient"]
