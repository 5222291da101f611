"""Illustration generation across a ranked list of image models.

Models are tried strictly one after another. The first image wins; rejected
credentials stop the whole list since every model shares the same key; any
other failure moves on to the next model.
"""

import asyncio
from collections.abc import Sequence

import httpx

from referent.clients.huggingface import HuggingFaceImageClient
from referent.errors import (
    AllProvidersFailedError,
    InvalidInputError,
    ModelLoadingError,
    ProviderAuthError,
)
from referent.models import GeneratedImage, ProviderAttempt, ProviderOutcome
from referent.utils.logging import get_logger

logger = get_logger(__name__)

ERROR_PREVIEW_LENGTH = 200

OUTCOME_MESSAGES = {
    ProviderOutcome.TRANSIENT_UNAVAILABLE: "Model is loading. Please wait a few seconds and try again.",
    ProviderOutcome.AUTH_FAILURE: "Authorization failed. Check the Hugging Face API key.",
    ProviderOutcome.DEPRECATED: "This API endpoint is no longer supported",
    ProviderOutcome.MALFORMED_RESPONSE: "The server did not return an image",
}


def media_type(content_type: str | None) -> str:
    """Return the bare, lower-cased media type of a Content-Type header."""
    return (content_type or "").split(";", 1)[0].strip().lower()


def classify_response(status_code: int, content_type: str | None) -> ProviderOutcome:
    """Map an image model's HTTP answer to an attempt outcome."""
    if 200 <= status_code < 300:
        if media_type(content_type).startswith("image/"):
            return ProviderOutcome.SUCCESS
        return ProviderOutcome.MALFORMED_RESPONSE
    if status_code == 503:
        return ProviderOutcome.TRANSIENT_UNAVAILABLE
    if status_code in (401, 403):
        return ProviderOutcome.AUTH_FAILURE
    if status_code == 410:
        return ProviderOutcome.DEPRECATED
    return ProviderOutcome.FAILED


def _error_detail(response: httpx.Response) -> str:
    try:
        data = response.json()
    except ValueError:
        text = response.text.strip()
        return text[:ERROR_PREVIEW_LENGTH] or response.reason_phrase
    if isinstance(data, dict) and data.get("error"):
        return str(data["error"])[:ERROR_PREVIEW_LENGTH]
    return response.reason_phrase


class IllustrationService:
    """Generates an illustration with the first image model that delivers one."""

    def __init__(
        self,
        client: HuggingFaceImageClient,
        models: Sequence[str],
        candidate_timeout: float = 120.0,
    ) -> None:
        if not models:
            raise ValueError("At least one image model is required")
        self._client = client
        self._models = list(models)
        self._candidate_timeout = candidate_timeout

    async def generate_image(self, prompt: str) -> GeneratedImage:
        """Generate an image for a prompt.

        Args:
            prompt: Text description of the illustration.

        Returns:
            The first image produced by a model in rank order.

        Raises:
            InvalidInputError: If the prompt is empty. No call is made.
            ProviderAuthError: If a model rejects the credentials.
            ModelLoadingError: If the list was exhausted and a model was loading.
            AllProvidersFailedError: If the list was exhausted otherwise.
        """
        if not isinstance(prompt, str) or not prompt.strip():
            raise InvalidInputError("Prompt is required")

        attempts: list[ProviderAttempt] = []
        for model in self._models:
            attempt, image = await self._try_model(model, prompt)
            attempts.append(attempt)
            logger.info(
                "Image model attempt",
                model=model,
                outcome=attempt.outcome.value,
                status=attempt.status_code,
            )

            if image is not None:
                logger.info("Image generated", model=model, mime_type=image.mime_type, size=len(image.data))
                return image
            if attempt.outcome is ProviderOutcome.AUTH_FAILURE:
                raise ProviderAuthError(
                    attempt.status_code or 401,
                    OUTCOME_MESSAGES[ProviderOutcome.AUTH_FAILURE],
                    provider=model,
                )

        raise self._exhausted(attempts)

    async def _try_model(
        self, model: str, prompt: str
    ) -> tuple[ProviderAttempt, GeneratedImage | None]:
        try:
            async with asyncio.timeout(self._candidate_timeout):
                response = await self._client.text_to_image(model, prompt)
                outcome = classify_response(
                    response.status_code, response.headers.get("content-type")
                )
                data = await response.aread() if outcome is ProviderOutcome.SUCCESS else b""
        except (TimeoutError, httpx.HTTPError) as e:
            logger.warning("Image model unreachable", model=model, error=str(e) or type(e).__name__)
            attempt = ProviderAttempt(
                model, ProviderOutcome.NETWORK_ERROR, message=str(e) or type(e).__name__
            )
            return attempt, None

        if outcome is ProviderOutcome.SUCCESS:
            mime = media_type(response.headers.get("content-type"))
            return ProviderAttempt(model, outcome, response.status_code), GeneratedImage(
                data=data, mime_type=mime, model=model
            )

        if outcome is ProviderOutcome.FAILED:
            message = _error_detail(response)
        else:
            message = OUTCOME_MESSAGES[outcome]
        if outcome is ProviderOutcome.MALFORMED_RESPONSE:
            logger.warning(
                "Unexpected response type",
                model=model,
                content_type=response.headers.get("content-type"),
                preview=response.text[:ERROR_PREVIEW_LENGTH],
            )
        return ProviderAttempt(model, outcome, response.status_code, message), None

    def _exhausted(self, attempts: list[ProviderAttempt]) -> Exception:
        loading = [a for a in attempts if a.outcome is ProviderOutcome.TRANSIENT_UNAVAILABLE]
        if loading:
            latest = loading[-1]
            logger.warning("All image models failed, one was loading", model=latest.provider_id)
            return ModelLoadingError(latest.status_code or 503, latest.message, provider=latest.provider_id)

        last = attempts[-1]
        logger.error(
            "All image models failed",
            attempts=[(a.provider_id, a.outcome.value) for a in attempts],
        )
        return AllProvidersFailedError(
            last.message or "Image generation failed. All models are unavailable.",
            attempts,
        )
