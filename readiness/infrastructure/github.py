"""GitHub REST helpers used to collect repository facts."""
from __future__ import annotations

import base64
import binascii
import logging
import re
from typing import Any

import httpx

from readiness.domain.errors import GitHubError

logger = logging.getLogger(__name__)

_URL_PATTERNS = (
    re.compile(r"github\.com[/:]([^/\s]+)/([^/\s?#]+)"),
    re.compile(r"^([A-Za-z0-9-]+)/([^/\s]+)$"),
)


def parse_github_url(url: str) -> tuple[str, str] | None:
    """Extract ``(owner, repo)`` from a GitHub URL or an ``owner/repo`` slug."""

    cleaned = (url or "").strip().rstrip("/")
    for pattern in _URL_PATTERNS:
        match = pattern.search(cleaned)
        if match:
            owner = match.group(1)
            repo = match.group(2).removesuffix(".git")
            if owner and repo:
                return owner, repo
    return None


def is_valid_github_url(url: str) -> bool:
    return parse_github_url(url) is not None


def decode_content(encoded: str) -> str:
    """Decode the base64 ``content`` field returned by the contents API."""

    raw = base64.b64decode(encoded.replace("\n", ""))
    try:
        return raw.decode("utf-8")
    except UnicodeDecodeError:
        return raw.decode("latin-1")


class GitHubClient:
    """Thin wrapper over the GitHub REST v3 API."""

    def __init__(
        self,
        token: str | None = None,
        *,
        api_base: str = "https://api.github.com",
        timeout: float = 10.0,
        http_client: httpx.Client | None = None,
    ) -> None:
        headers = {"Accept": "application/vnd.github.v3+json"}
        if token:
            headers["Authorization"] = f"Bearer {token}"
        self._api_base = api_base.rstrip("/")
        self._headers = headers
        self._client = http_client or httpx.Client(timeout=timeout, follow_redirects=True)
        self._owns_client = http_client is None

    def _get(self, path: str) -> httpx.Response:
        return self._client.get(f"{self._api_base}{path}", headers=self._headers)

    def fetch_repository_info(self, owner: str, repo: str) -> dict[str, Any]:
        try:
            response = self._get(f"/repos/{owner}/{repo}")
        except httpx.HTTPError as exc:
            logger.error("Error fetching repository info for %s/%s: %s", owner, repo, exc)
            raise GitHubError(f"فشل في الوصول إلى المستودع: {exc}") from exc

        if response.status_code == 404:
            raise GitHubError("المستودع غير موجود أو خاص", status_code=404)
        if response.status_code == 403:
            raise GitHubError(
                "تم تجاوز حد الطلبات لـ GitHub API. يرجى الانتظار أو إضافة GITHUB_TOKEN",
                status_code=403,
            )
        if not response.is_success:
            raise GitHubError(
                f"فشل في الوصول إلى المستودع: {response.reason_phrase}",
                status_code=response.status_code,
            )
        try:
            info = response.json()
        except ValueError as exc:
            raise GitHubError("استجابة GitHub غير صالحة", status_code=response.status_code) from exc
        if not isinstance(info, dict):
            raise GitHubError("استجابة GitHub غير صالحة", status_code=response.status_code)
        return info

    def fetch_repository_contents(self, owner: str, repo: str, path: str = "") -> list[dict[str, Any]] | dict[str, Any] | None:
        try:
            response = self._get(f"/repos/{owner}/{repo}/contents/{path}")
        except httpx.HTTPError as exc:
            logger.error("Error fetching repository contents %s/%s/%s: %s", owner, repo, path, exc)
            return None
        if not response.is_success:
            return None
        try:
            return response.json()
        except ValueError:
            logger.error("Non-JSON contents listing for %s/%s/%s", owner, repo, path)
            return None

    def fetch_file_content(self, owner: str, repo: str, path: str) -> str | None:
        data = self.fetch_repository_contents(owner, repo, path)
        if not isinstance(data, dict) or not isinstance(data.get("content"), str) or not data["content"]:
            return None
        try:
            return decode_content(data["content"])
        except (binascii.Error, ValueError):
            logger.error("Error decoding file content %s/%s/%s", owner, repo, path)
            return None

    def close(self) -> None:  # pragma: no cover - best effort cleanup
        if self._owns_client:
            self._client.close()


__all__ = ["GitHubClient", "decode_content", "is_valid_github_url", "parse_github_url"]
