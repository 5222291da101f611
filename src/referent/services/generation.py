"""Text artifact generation: summaries, theses, social posts and translations."""

import asyncio
from typing import Protocol

from referent.errors import EmptyResultError, InvalidInputError, RequestTimeoutError
from referent.models import Prompt, TransformationKind
from referent.services.chunker import CHUNK_SIZE, MAX_TEXT_LENGTH, reduce_text
from referent.services.prompts import TARGET_LANGUAGE, prompt_for, translation_prompt
from referent.utils.logging import get_logger

logger = get_logger(__name__)


# Camel-case spelling used by the browser client.
KIND_ALIASES = {"socialPost": TransformationKind.SOCIAL_POST}


class TextProvider(Protocol):
    """A backend that turns a prompt into text."""

    name: str

    async def complete(self, prompt: Prompt) -> str | None: ...


def parse_kind(kind: TransformationKind | str) -> TransformationKind:
    """Validate a requested artifact kind.

    Raises:
        InvalidInputError: If the kind is not one of the supported values.
    """
    if isinstance(kind, str) and kind in KIND_ALIASES:
        return KIND_ALIASES[kind]
    try:
        return TransformationKind(kind)
    except ValueError as e:
        allowed = ", ".join(k.value for k in TransformationKind)
        raise InvalidInputError(f"Valid action is required ({allowed})") from e


class GenerationService:
    """Builds prompts for article text and runs them against a text provider."""

    def __init__(
        self,
        provider: TextProvider,
        timeout: float = 60.0,
        language: str = TARGET_LANGUAGE,
    ) -> None:
        self._provider = provider
        self._timeout = timeout
        self._language = language

    async def generate(
        self,
        kind: TransformationKind | str,
        source_text: str,
        source_url: str | None = None,
    ) -> str:
        """Generate an artifact of the given kind.

        Args:
            kind: summary, theses or social_post.
            source_text: Article text; long texts are reduced to head and tail.
            source_url: Article URL, linked from social posts when given.

        Returns:
            The generated artifact text.

        Raises:
            InvalidInputError: If the kind or text is invalid. No call is made.
            RequestTimeoutError: If the provider does not answer in time.
            ProviderError: If the provider answers with a failure status.
            EmptyResultError: If the provider answers without content.
        """
        parsed_kind = parse_kind(kind)
        text = _require_text(source_text)

        prompt = prompt_for(
            parsed_kind,
            reduce_text(text, MAX_TEXT_LENGTH, CHUNK_SIZE),
            source_url=source_url,
            language=self._language,
        )
        logger.info(
            "Generating artifact",
            kind=parsed_kind.value,
            provider=self._provider.name,
            text_length=len(text),
        )
        result = await self._complete(prompt)
        logger.info("Artifact generated", kind=parsed_kind.value, length=len(result))
        return result

    async def translate(self, source_text: str) -> str:
        """Translate article text into the target language.

        The full text is sent; unlike generate, nothing is elided.
        """
        text = _require_text(source_text)
        prompt = translation_prompt(text, language=self._language)
        logger.info("Translating text", provider=self._provider.name, text_length=len(text))
        result = await self._complete(prompt)
        logger.info("Text translated", length=len(result))
        return result

    async def _complete(self, prompt: Prompt) -> str:
        try:
            async with asyncio.timeout(self._timeout):
                result = await self._provider.complete(prompt)
        except TimeoutError as e:
            logger.warning("Generation timed out", provider=self._provider.name, timeout=self._timeout)
            raise RequestTimeoutError(
                "AI processing took too long. Please try again or use a shorter article."
            ) from e

        if not result or not result.strip():
            logger.warning("Provider returned an empty result", provider=self._provider.name)
            raise EmptyResultError("No result received from API")
        return result.strip()


def _require_text(source_text: str) -> str:
    if not isinstance(source_text, str) or not source_text.strip():
        raise InvalidInputError("Text is required")
    return source_text
