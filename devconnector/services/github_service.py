"""GitHub API client for listing a developer's public repositories."""

import logging
from typing import Any, Dict, List, Optional

import httpx

from devconnector.config import settings

logger = logging.getLogger(__name__)


class GithubProfileNotFound(Exception):
    """GitHub did not return repositories for the requested user."""


class GithubService:
    """
    Thin wrapper over the GitHub REST API.

    Authenticates with ``GITHUB_TOKEN`` when set, otherwise with the OAuth
    client id/secret pair if configured, otherwise anonymously.
    """

    def __init__(self, client: Optional[httpx.AsyncClient] = None):
        self.client = client
        self.base_url = settings.GITHUB_API_URL.rstrip("/")

    def _headers(self) -> Dict[str, str]:
        headers = {
            "Accept": "application/vnd.github+json",
            "User-Agent": "devconnector-api",
        }
        if settings.GITHUB_TOKEN:
            headers["Authorization"] = f"token {settings.GITHUB_TOKEN}"
        return headers

    def _params(self) -> Dict[str, Any]:
        params: Dict[str, Any] = {
            "per_page": settings.GITHUB_REPOS_PER_PAGE,
            "sort": "created",
            "direction": "desc",
        }
        if settings.GITHUB_CLIENT_ID and settings.GITHUB_CLIENT_SECRET:
            params["client_id"] = settings.GITHUB_CLIENT_ID
            params["client_secret"] = settings.GITHUB_CLIENT_SECRET
        return params

    async def get_user_repos(self, username: str) -> List[Dict[str, Any]]:
        """Return the user's most recently created repositories, newest first."""
        url = f"{self.base_url}/users/{username}/repos"

        if self.client is not None:
            response = await self.client.get(
                url, params=self._params(), headers=self._headers()
            )
        else:
            async with httpx.AsyncClient(timeout=settings.GITHUB_TIMEOUT_SECONDS) as client:
                response = await client.get(
                    url, params=self._params(), headers=self._headers()
                )

        if response.status_code != 200:
            logger.info(f"GitHub returned {response.status_code} for user {username}")
            raise GithubProfileNotFound(username)

        return response.json()


def get_github_service() -> GithubService:
    """Dependency returning the GitHub service."""
    return GithubService()
