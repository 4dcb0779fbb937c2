"""Client for the Gemini ``generateContent`` REST endpoint."""
from __future__ import annotations

import json
import logging
import random
import time
from typing import Any, Protocol

import httpx

from readiness.domain.errors import ConfigurationError, EmptyResponseError, UpstreamError

logger = logging.getLogger(__name__)

_RETRYABLE_STATUSES = frozenset({429, 500, 502, 503, 504})


class TextGenerator(Protocol):
    """Contract for model integrations used by the analysis service."""

    model: str

    def generate_content(self, prompt: str) -> str:
        """Return the model's text answer for a single-turn prompt."""


class GeminiClient:
    """Single-turn text generation against Google's Generative Language API."""

    def __init__(
        self,
        api_key: str | None,
        *,
        model: str = "gemini-3-pro-preview",
        api_base: str = "https://generativelanguage.googleapis.com/v1beta",
        timeout: float = 60.0,
        max_retries: int = 2,
        retry_base_delay: float = 1.0,
        http_client: httpx.Client | None = None,
    ) -> None:
        self._api_key = api_key
        self.model = model.removeprefix("models/")
        self._endpoint = f"{api_base.rstrip('/')}/models/{self.model}:generateContent"
        self._max_retries = max_retries
        self._retry_base_delay = retry_base_delay
        self._client = http_client or httpx.Client(timeout=timeout)
        self._owns_client = http_client is None
        self._timeout = timeout

    # ------------------------------------------------------------------
    # helpers
    # ------------------------------------------------------------------
    def _redact(self, text: str) -> str:
        if self._api_key:
            return text.replace(self._api_key, "***")
        return text

    @staticmethod
    def _build_payload(prompt: str) -> dict[str, Any]:
        return {"contents": [{"parts": [{"text": prompt}]}]}

    @staticmethod
    def _error_body(response: httpx.Response) -> Any:
        try:
            return response.json()
        except ValueError:
            return response.text

    def _backoff(self, attempt: int) -> float:
        base = self._retry_base_delay * (2**attempt)
        return base + random.uniform(0, self._retry_base_delay)

    def _upstream_error(self, response: httpx.Response) -> UpstreamError:
        body = self._error_body(response)
        rendered = body if isinstance(body, str) else json.dumps(body, ensure_ascii=False)
        message = self._redact(f"Gemini API error: {response.status_code} {rendered}".strip())
        return UpstreamError(message, status_code=response.status_code, detail=body)

    @staticmethod
    def _extract_text(payload: Any) -> str | None:
        if not isinstance(payload, dict):
            return None
        candidates = payload.get("candidates")
        if not isinstance(candidates, list) or not candidates or not isinstance(candidates[0], dict):
            return None
        content = candidates[0].get("content")
        if not isinstance(content, dict):
            return None
        parts = content.get("parts")
        if not isinstance(parts, list) or not parts or not isinstance(parts[0], dict):
            return None
        text = parts[0].get("text")
        return text if isinstance(text, str) and text.strip() else None

    def _post(self, prompt: str) -> httpx.Response:
        return self._client.post(
            self._endpoint,
            headers={"x-goog-api-key": self._api_key or ""},
            json=self._build_payload(prompt),
            timeout=self._timeout,
        )

    def _wait_before_retry(self, attempt: int, reason: str) -> None:
        delay = self._backoff(attempt)
        logger.warning(
            "Gemini %s (attempt %d/%d), retrying in %.1fs",
            reason,
            attempt + 1,
            self._max_retries + 1,
            delay,
        )
        time.sleep(delay)

    # ------------------------------------------------------------------
    # public API
    # ------------------------------------------------------------------
    def generate_content(self, prompt: str) -> str:
        if not self._api_key:
            raise ConfigurationError("GEMINI_API_KEY is not configured on the server")

        logger.info("Sending request to Gemini (%s), prompt length %d", self.model, len(prompt))
        for attempt in range(self._max_retries + 1):
            can_retry = attempt < self._max_retries
            try:
                response = self._post(prompt)
            except httpx.TimeoutException as exc:
                if can_retry:
                    self._wait_before_retry(attempt, "request timed out")
                    continue
                raise UpstreamError(self._redact(f"Gemini API request timed out after {self._timeout}s")) from exc
            except httpx.HTTPError as exc:
                raise UpstreamError(self._redact(f"Gemini API request failed: {exc}")) from exc

            if response.is_success:
                break
            if response.status_code in _RETRYABLE_STATUSES and can_retry:
                self._wait_before_retry(attempt, f"returned HTTP {response.status_code}")
                continue
            raise self._upstream_error(response)

        try:
            payload = response.json()
        except ValueError as exc:
            raise EmptyResponseError("Gemini API returned a non-JSON body") from exc

        text = self._extract_text(payload)
        if text is None:
            raise EmptyResponseError("Empty response received from Gemini API")
        return text

    def close(self) -> None:  # pragma: no cover - best effort cleanup
        if self._owns_client:
            self._client.close()


__all__ = ["GeminiClient", "TextGenerator"]
