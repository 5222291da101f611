"""OpenRouter chat-completions client for Referent."""

from typing import Any

import httpx

from referent.errors import NetworkError, ProviderError, RequestTimeoutError
from referent.models import Prompt
from referent.utils.logging import get_logger

logger = get_logger(__name__)


class OpenRouterClient:
    """Text generation through the OpenRouter chat-completions API."""

    name = "openrouter"

    def __init__(
        self,
        api_key: str,
        model: str = "deepseek/deepseek-chat",
        base_url: str = "https://openrouter.ai/api/v1",
        app_url: str = "http://localhost:3000",
        app_title: str = "Referent - Article AI Processor",
        timeout: float = 60.0,
    ) -> None:
        self._model = model
        self._client = httpx.AsyncClient(
            base_url=base_url,
            timeout=timeout,
            headers={
                "Authorization": f"Bearer {api_key}",
                "HTTP-Referer": app_url,
                "X-Title": app_title,
            },
        )

    async def close(self) -> None:
        """Close the HTTP client."""
        await self._client.aclose()

    async def __aenter__(self) -> "OpenRouterClient":
        return self

    async def __aexit__(self, *args: object) -> None:
        await self.close()

    async def complete(self, prompt: Prompt) -> str | None:
        """Send a prompt and return the generated text.

        Args:
            prompt: Rendered system and user messages with a temperature.

        Returns:
            The first choice's message content, or None if the response has none.

        Raises:
            ProviderError: If OpenRouter answers with a non-success status.
            RequestTimeoutError: If the HTTP client times out.
            NetworkError: If OpenRouter cannot be reached.
        """
        payload = {
            "model": self._model,
            "messages": [
                {"role": "system", "content": prompt.system_instruction},
                {"role": "user", "content": prompt.user_message},
            ],
            "temperature": prompt.temperature,
        }

        try:
            response = await self._client.post("/chat/completions", json=payload)
        except httpx.TimeoutException as e:
            logger.warning("OpenRouter request timed out", model=self._model)
            raise RequestTimeoutError("AI processing took too long") from e
        except httpx.RequestError as e:
            logger.warning("OpenRouter request failed", model=self._model, error=str(e))
            raise NetworkError(f"request error: {e}") from e

        if not response.is_success:
            message = _error_message(response)
            logger.error(
                "OpenRouter API error",
                model=self._model,
                status=response.status_code,
                error=message,
            )
            raise ProviderError(response.status_code, message, provider=self.name)

        try:
            data = response.json()
        except ValueError:
            logger.warning("OpenRouter returned a non-JSON body", model=self._model)
            return None
        return _first_choice(data)


def _error_message(response: httpx.Response) -> str:
    try:
        data = response.json()
    except ValueError:
        return response.reason_phrase or "Unknown error"
    error = data.get("error") if isinstance(data, dict) else None
    if isinstance(error, dict) and error.get("message"):
        return str(error["message"])
    if isinstance(error, str) and error:
        return error
    return response.reason_phrase or "Unknown error"


def _first_choice(data: Any) -> str | None:
    try:
        content = data["choices"][0]["message"]["content"]
    except (KeyError, IndexError, TypeError):
        return None
    return content if isinstance(content, str) else None
