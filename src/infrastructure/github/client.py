"""GitHub repository listing client.

Relays the public repository list of a GitHub user. Any failure (non-2xx
status, transport error, undecodable body) is reported as "no profile".
"""

import logging
from typing import Any

import httpx

from core.config import settings
from core.exceptions import GitHubProfileNotFoundError

logger = logging.getLogger(__name__)


class GitHubClient:
    """Thin async client for the GitHub REST API."""

    def __init__(
        self,
        base_url: str = settings.github_api_url,
        client_id: str = settings.github_client_id,
        client_secret: str = settings.github_client_secret,
        timeout: float = settings.github_timeout_seconds,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._client_id = client_id
        self._client_secret = client_secret
        self._timeout = timeout

    def _params(self) -> dict[str, Any]:
        params: dict[str, Any] = {"per_page": 5, "sort": "created:asc"}
        if self._client_id and self._client_secret:
            params["client_id"] = self._client_id
            params["client_secret"] = self._client_secret
        return params

    async def list_repositories(self, username: str) -> Any:
        """
        Fetch the five oldest repositories of a GitHub user.

        Args:
            username: GitHub login

        Returns:
            The decoded JSON body, unchanged

        Raises:
            GitHubProfileNotFoundError: On any non-2xx response or transport error
        """
        url = f"{self._base_url}/users/{username}/repos"
        try:
            async with httpx.AsyncClient() as client:
                response = await client.get(
                    url,
                    params=self._params(),
                    headers={"user-agent": settings.app_name},
                    timeout=self._timeout,
                )
                response.raise_for_status()
                return response.json()
        except (httpx.HTTPError, ValueError) as e:
            logger.info("GitHub lookup failed for %s: %s", username, e)
            raise GitHubProfileNotFoundError(username) from e
