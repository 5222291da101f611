"""Vertex AI Gemini client for Referent."""

import vertexai
from google.api_core import exceptions as google_exceptions
from google.auth import exceptions as auth_exceptions
from vertexai.generative_models import GenerationConfig, GenerativeModel

from referent.errors import ProviderAuthError, ProviderError
from referent.models import Prompt
from referent.utils.logging import get_logger

logger = get_logger(__name__)


class GeminiClient:
    """Text generation through Vertex AI Gemini."""

    name = "gemini"

    def __init__(
        self,
        project_id: str,
        region: str = "europe-west1",
        model_name: str = "gemini-2.0-flash-001",
        max_output_tokens: int = 2048,
    ) -> None:
        self._project_id = project_id
        self._region = region
        self._model_name = model_name
        self._max_output_tokens = max_output_tokens
        self._initialized = False

    async def __aenter__(self) -> "GeminiClient":
        """Async context manager entry - initialize Vertex AI."""
        self._ensure_initialized()
        return self

    async def __aexit__(self, *args: object) -> None:
        # Vertex AI holds no per-client resources.
        pass

    def _ensure_initialized(self) -> None:
        """Initialize Vertex AI if not already done."""
        if not self._initialized:
            try:
                vertexai.init(project=self._project_id, location=self._region)
            except auth_exceptions.GoogleAuthError as e:
                raise self._auth_error(e) from e
            self._initialized = True
            logger.info("Vertex AI initialized", project=self._project_id, region=self._region)

    def _auth_error(self, error: Exception) -> ProviderAuthError:
        logger.error("Google credentials rejected", project=self._project_id, error=str(error))
        return ProviderAuthError(401, f"Google credentials error: {error}", provider=self.name)

    async def complete(self, prompt: Prompt) -> str | None:
        """Send a prompt and return the generated text.

        Args:
            prompt: Rendered system and user messages with a temperature.

        Returns:
            The generated text, or None if the model produced no candidate.

        Raises:
            ProviderError: If Vertex AI rejects the call.
            ProviderAuthError: If Google credentials are missing or invalid.
        """
        self._ensure_initialized()
        model = GenerativeModel(
            self._model_name,
            system_instruction=[prompt.system_instruction],
        )
        config = GenerationConfig(
            temperature=prompt.temperature,
            max_output_tokens=self._max_output_tokens,
        )

        try:
            response = await model.generate_content_async(
                prompt.user_message, generation_config=config
            )
        except google_exceptions.GoogleAPICallError as e:
            status = int(e.code) if e.code is not None else 500
            logger.error("Gemini API error", model=self._model_name, status=status, error=e.message)
            raise ProviderError(status, e.message or str(e), provider=self.name) from e
        except auth_exceptions.GoogleAuthError as e:
            raise self._auth_error(e) from e

        try:
            return response.text
        except ValueError:
            # Raised when the response was blocked or has no text parts.
            logger.warning("Gemini returned no text", model=self._model_name)
            return None
