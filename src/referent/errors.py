"""Error taxonomy shared by the fetcher, extractor and generation services."""

from enum import StrEnum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from referent.models import ProviderAttempt


class ErrorKind(StrEnum):
    """Caller-visible error classification."""

    INVALID_INPUT = "invalid_input"
    TIMEOUT = "timeout"
    NOT_FOUND = "not_found"
    ACCESS_DENIED = "access_denied"
    SERVER_ERROR = "server_error"
    UPSTREAM_ERROR = "upstream_error"
    PROVIDER_ERROR = "provider_error"
    AUTH_ERROR = "auth_error"
    MODEL_LOADING = "model_loading"
    EMPTY_RESULT = "empty_result"
    PARSE_ERROR = "parse_error"
    NETWORK_ERROR = "network_error"
    ALL_PROVIDERS_FAILED = "all_providers_failed"
    CONFIGURATION = "configuration"


class ReferentError(Exception):
    """Base class for every error surfaced to callers."""

    kind: ErrorKind = ErrorKind.UPSTREAM_ERROR

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class InvalidInputError(ReferentError):
    """Raised for caller mistakes, before any network call is made."""

    kind = ErrorKind.INVALID_INPUT


class RequestTimeoutError(ReferentError):
    """Raised when an operation exceeds its time budget."""

    kind = ErrorKind.TIMEOUT


class NetworkError(ReferentError):
    """Raised when a remote host cannot be reached at all."""

    kind = ErrorKind.NETWORK_ERROR


class ParseError(ReferentError):
    """Raised when a document is not markup at all."""

    kind = ErrorKind.PARSE_ERROR


class EmptyResultError(ReferentError):
    """Raised when a provider answers successfully but without usable content."""

    kind = ErrorKind.EMPTY_RESULT


class ConfigurationError(ReferentError):
    """Raised when a required setting or secret is missing."""

    kind = ErrorKind.CONFIGURATION


class UpstreamCategory(StrEnum):
    """Classification of a failed source-site response."""

    NOT_FOUND = "not_found"
    ACCESS_DENIED = "access_denied"
    SERVER_ERROR = "server_error"
    OTHER = "other"


_CATEGORY_KINDS = {
    UpstreamCategory.NOT_FOUND: ErrorKind.NOT_FOUND,
    UpstreamCategory.ACCESS_DENIED: ErrorKind.ACCESS_DENIED,
    UpstreamCategory.SERVER_ERROR: ErrorKind.SERVER_ERROR,
    UpstreamCategory.OTHER: ErrorKind.UPSTREAM_ERROR,
}


class UpstreamHttpError(ReferentError):
    """Raised when a source site answers with a non-success status."""

    def __init__(self, status_code: int, message: str) -> None:
        self.status_code = status_code
        super().__init__(message)

    @property
    def category(self) -> UpstreamCategory:
        if self.status_code == 404:
            return UpstreamCategory.NOT_FOUND
        if self.status_code in (401, 403):
            return UpstreamCategory.ACCESS_DENIED
        if self.status_code >= 500:
            return UpstreamCategory.SERVER_ERROR
        return UpstreamCategory.OTHER

    @property
    def kind(self) -> ErrorKind:  # type: ignore[override]
        return _CATEGORY_KINDS[self.category]


class ProviderError(ReferentError):
    """Raised when a generation provider answers with a non-success status."""

    kind = ErrorKind.PROVIDER_ERROR

    def __init__(self, status_code: int, message: str, provider: str = "") -> None:
        self.status_code = status_code
        self.provider = provider
        super().__init__(message)


class ProviderAuthError(ProviderError):
    """Raised when provider credentials are rejected."""

    kind = ErrorKind.AUTH_ERROR


class ModelLoadingError(ProviderError):
    """Raised when the only actionable failure is a model still warming up."""

    kind = ErrorKind.MODEL_LOADING


class AllProvidersFailedError(ReferentError):
    """Raised when every ranked candidate was tried without success."""

    kind = ErrorKind.ALL_PROVIDERS_FAILED

    def __init__(self, message: str, attempts: list["ProviderAttempt"]) -> None:
        self.attempts = attempts
        super().__init__(message)

    @property
    def last_attempt(self) -> "ProviderAttempt | None":
        return self.attempts[-1] if self.attempts else None
