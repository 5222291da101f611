"""Unit tests for the HTTP API."""

from datetime import UTC, datetime
from unittest.mock import AsyncMock, patch

import pytest
from fastapi.testclient import TestClient

from referent import __version__
from referent.api.routes import error_status, to_http_exception
from referent.errors import (
    AllProvidersFailedError,
    EmptyResultError,
    InvalidInputError,
    ModelLoadingError,
    ProviderAuthError,
    ProviderError,
    RequestTimeoutError,
    UpstreamHttpError,
)
from referent.main import app
from referent.models import Article


@pytest.fixture
def client() -> TestClient:
    return TestClient(app)


class TestErrorStatus:
    """Tests for error to HTTP status translation."""

    @pytest.mark.parametrize(
        ("error", "expected"),
        [
            (InvalidInputError("bad"), 400),
            (RequestTimeoutError("slow"), 504),
            (UpstreamHttpError(404, "missing"), 404),
            (UpstreamHttpError(401, "denied"), 403),
            (UpstreamHttpError(503, "down"), 502),
            (UpstreamHttpError(429, "slow down"), 429),
            (ProviderError(402, "credits"), 402),
            (ProviderAuthError(401, "bad key"), 401),
            (ModelLoadingError(503, "loading"), 503),
            (EmptyResultError("nothing"), 502),
            (AllProvidersFailedError("all failed", []), 500),
        ],
    )
    def test_status(self, error: Exception, expected: int) -> None:
        """Should keep error kinds distinguishable by status."""
        assert error_status(error) == expected  # type: ignore[arg-type]

    def test_detail_carries_kind(self) -> None:
        """Should expose the error kind and upstream status to clients."""
        exc = to_http_exception(UpstreamHttpError(404, "Failed to fetch article"))
        assert exc.detail == {
            "error": "Failed to fetch article",
            "error_type": "not_found",
            "status": 404,
        }


class TestRoutes:
    """Tests for API routes."""

    def test_health(self, client: TestClient) -> None:
        """Should report healthy status and version."""
        response = client.get("/api/v1/health")
        assert response.status_code == 200
        assert response.json() == {"status": "healthy", "version": __version__}

    def test_parse_invalid_url(self, client: TestClient) -> None:
        """Should reject a malformed URL with 400."""
        response = client.post("/api/v1/parse", json={"url": "not-a-url"})

        assert response.status_code == 400
        assert response.json()["detail"]["error_type"] == "invalid_input"

    def test_parse_success(self, client: TestClient) -> None:
        """Should return the extracted article."""
        article = Article(
            title="Title",
            published_at=datetime(2024, 1, 1, tzinfo=UTC),
            body="Body text.",
        )
        with patch(
            "referent.api.routes.ArticleService.extract", AsyncMock(return_value=article)
        ):
            response = client.post("/api/v1/parse", json={"url": "https://example.com/a"})

        assert response.status_code == 200
        assert response.json() == {
            "date": "2024-01-01T00:00:00.000Z",
            "title": "Title",
            "content": "Body text.",
        }

    def test_process_unknown_action(self, client: TestClient) -> None:
        """Should reject an unknown action before any provider is created."""
        with patch("referent.api.routes._text_provider") as provider_factory:
            response = client.post(
                "/api/v1/process", json={"text": "text", "action": "unknownKind"}
            )

        assert response.status_code == 400
        assert response.json()["detail"]["error_type"] == "invalid_input"
        provider_factory.assert_not_called()

    def test_generate_image_empty_prompt(self, client: TestClient) -> None:
        """Should reject an empty prompt with 400."""
        response = client.post("/api/v1/generate-image", json={"prompt": " "})
        assert response.status_code == 400
