"""Error taxonomy shared by the proxy and the client layer."""
from __future__ import annotations


class ReadinessError(Exception):
    """Base class for failures that map onto the API error envelope."""

    error_type = "INTERNAL_ERROR"
    status_code = 500
    public_message = "فشل في تحليل المستودع. حدث خطأ داخلي."


class ValidationError(ReadinessError):
    """Raised when required request fields are missing."""

    error_type = "VALIDATION_ERROR"
    status_code = 400
    public_message = "الحقول المطلوبة مفقودة أو غير صحيحة."


class ConfigurationError(ReadinessError):
    """Raised when the server is missing configuration (e.g. the API key)."""

    error_type = "CONFIGURATION_ERROR"
    public_message = "خطأ في الإعدادات: خدمة التحليل غير متاحة حالياً."


class UpstreamError(ReadinessError):
    """Raised when a remote service answers with a non-2xx status."""

    error_type = "AI_SERVICE_ERROR"
    public_message = "فشل في تحليل المستودع. خدمة الذكاء الاصطناعي غير متاحة حالياً."

    def __init__(self, message: str, *, status_code: int | None = None, detail: object | None = None) -> None:
        super().__init__(message)
        self.upstream_status = status_code
        self.detail = detail


class EmptyResponseError(UpstreamError):
    """Raised when the model returns no candidate text."""

    error_type = "EMPTY_AI_RESPONSE"
    public_message = "لم تُرجع خدمة الذكاء الاصطناعي أي محتوى."


class GitHubError(UpstreamError):
    """Raised when the GitHub REST API refuses a request."""

    error_type = "GITHUB_ERROR"
    public_message = "فشل في الوصول إلى المستودع على GitHub."


class ResponseFormatError(ReadinessError):
    """Raised when model output is not a JSON object."""

    error_type = "RESPONSE_FORMAT_ERROR"
    public_message = "استجابة خدمة التحليل ليست بصيغة JSON صالحة."

    def __init__(self, message: str, *, raw_text: str = "") -> None:
        super().__init__(message)
        self.raw_text = raw_text


class StorageError(ReadinessError):
    """Raised when the local report store cannot be read or written."""

    error_type = "STORAGE_ERROR"
    public_message = "تعذر الوصول إلى التقارير المحفوظة."


__all__ = [
    "ConfigurationError",
    "EmptyResponseError",
    "GitHubError",
    "ReadinessError",
    "ResponseFormatError",
    "StorageError",
    "UpstreamError",
    "ValidationError",
]
