"""Google Cloud Secret Manager wrapper for Referent."""

from functools import lru_cache

from google.api_core import exceptions as google_exceptions
from google.cloud import secretmanager

from referent.utils.logging import get_logger

logger = get_logger(__name__)


class SecretManagerClient:
    """Client for reading provider API keys from Google Cloud Secret Manager."""

    def __init__(self, project_id: str) -> None:
        self._project_id = project_id
        self._client = secretmanager.SecretManagerServiceClient()

    def get_secret(self, secret_id: str, version: str = "latest") -> str | None:
        """Retrieve a secret value from Secret Manager.

        Args:
            secret_id: The ID of the secret to retrieve.
            version: The version of the secret (default: "latest").

        Returns:
            The secret value, or None if the secret does not exist.
        """
        name = f"projects/{self._project_id}/secrets/{secret_id}/versions/{version}"
        logger.info("Accessing secret", secret_id=secret_id, version=version)

        try:
            response = self._client.access_secret_version(request={"name": name})
        except google_exceptions.NotFound:
            logger.warning("Secret not found", secret_id=secret_id)
            return None
        return response.payload.data.decode("UTF-8").strip()


@lru_cache(maxsize=4)
def get_secret_manager(project_id: str) -> SecretManagerClient:
    """Get or create a cached SecretManagerClient instance."""
    return SecretManagerClient(project_id)
