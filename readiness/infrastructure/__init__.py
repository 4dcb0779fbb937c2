"""Infrastructure layer exports."""

from .gemini import GeminiClient, TextGenerator
from .github import GitHubClient, is_valid_github_url, parse_github_url
from .proxy import ProxyClient
from .storage import InMemoryKeyValueStore, JsonFileKeyValueStore, KeyValueStore, ReportHistory

__all__ = [
    "GeminiClient",
    "GitHubClient",
    "InMemoryKeyValueStore",
    "JsonFileKeyValueStore",
    "KeyValueStore",
    "ProxyClient",
    "ReportHistory",
    "TextGenerator",
    "is_valid_github_url",
    "parse_github_url",
]
