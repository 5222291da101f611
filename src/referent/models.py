"""Shared data models for Referent."""

import base64
from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import StrEnum


class TransformationKind(StrEnum):
    """Artifacts that can be generated from article text."""

    SUMMARY = "summary"
    THESES = "theses"
    SOCIAL_POST = "social_post"


class ProviderOutcome(StrEnum):
    """Result of a single call to a ranked provider candidate."""

    SUCCESS = "success"
    TRANSIENT_UNAVAILABLE = "transient_unavailable"
    AUTH_FAILURE = "auth_failure"
    DEPRECATED = "deprecated"
    MALFORMED_RESPONSE = "malformed_response"
    NETWORK_ERROR = "network_error"
    FAILED = "failed"


@dataclass(frozen=True)
class Article:
    """An article extracted from a web page."""

    title: str
    published_at: datetime
    body: str

    @property
    def published_at_iso(self) -> str:
        """Publication time as UTC ISO-8601 with millisecond precision."""
        value = self.published_at.astimezone(UTC)
        return value.strftime("%Y-%m-%dT%H:%M:%S.") + f"{value.microsecond // 1000:03d}Z"

    def as_source_text(self) -> str:
        """Render the article as plain text for downstream generation."""
        return f"Title: {self.title}\n\nContent:\n{self.body}"


@dataclass(frozen=True)
class Prompt:
    """A fully rendered prompt ready to send to a text provider."""

    system_instruction: str
    user_message: str
    temperature: float


@dataclass(frozen=True)
class ProviderAttempt:
    """Diagnostic record of one candidate call."""

    provider_id: str
    outcome: ProviderOutcome
    status_code: int | None = None
    message: str = ""


@dataclass(frozen=True)
class GeneratedImage:
    """Binary image returned by an image model."""

    data: bytes = field(repr=False)
    mime_type: str
    model: str

    @property
    def data_url(self) -> str:
        encoded = base64.b64encode(self.data).decode("ascii")
        return f"data:{self.mime_type};base64,{encoded}"
