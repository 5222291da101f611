"""Hugging Face Inference router client for text-to-image models."""

import httpx

from referent.utils.logging import get_logger

logger = get_logger(__name__)

ROUTER_URL = "https://router.huggingface.co/hf-inference/models"


class HuggingFaceImageClient:
    """Calls a single text-to-image model and hands back the raw response.

    Status codes and content types are interpreted by the caller, which decides
    whether to move on to the next model.
    """

    def __init__(
        self,
        api_key: str,
        base_url: str = ROUTER_URL,
        timeout: float = 120.0,
        inference_steps: int = 30,
        guidance_scale: float = 7.5,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._inference_steps = inference_steps
        self._guidance_scale = guidance_scale
        self._client = httpx.AsyncClient(
            timeout=timeout,
            headers={"Authorization": f"Bearer {api_key}"},
        )

    async def close(self) -> None:
        """Close the HTTP client."""
        await self._client.aclose()

    async def __aenter__(self) -> "HuggingFaceImageClient":
        return self

    async def __aexit__(self, *args: object) -> None:
        await self.close()

    def model_url(self, model: str) -> str:
        return f"{self._base_url}/{model}"

    async def text_to_image(self, model: str, prompt: str) -> httpx.Response:
        """Request an image from one model.

        Raises:
            httpx.HTTPError: If the request cannot be completed.
        """
        logger.info("Requesting image", model=model)
        return await self._client.post(
            self.model_url(model),
            json={
                "inputs": prompt,
                "parameters": {
                    "num_inference_steps": self._inference_steps,
                    "guidance_scale": self._guidance_scale,
                },
            },
        )
