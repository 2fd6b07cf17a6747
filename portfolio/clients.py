import httpx
from typing import Any, Dict, List, Optional
from urllib.parse import quote

from application_sdk.clients.base import BaseClient
from application_sdk.observability.logger_adaptor import get_logger
from pydantic import TypeAdapter
from portfolio.types import Repository, UserProfile

logger = get_logger(__name__)

DEFAULT_API_BASE = "https://api.github.com"
REPOSITORY_PAGE_SIZE = 8

_repository_list = TypeAdapter(List[Repository])


def _path_segment(value: str) -> str:
    """Percent-encode a value so it stays exactly one path segment."""
    segment = quote(value, safe="")
    # URL normalization collapses bare dot segments, so escape those too.
    if segment in (".", ".."):
        segment = segment.replace(".", "%2E")
    return segment


class GitHubClient(BaseClient):
    """Thin wrapper around the GitHub REST API for the portfolio viewer.

    Requests are anonymous. The underlying httpx client is created lazily and
    shared by every request made through one GitHubClient instance.
    """

    def __init__(
        self,
        api_base: str = DEFAULT_API_BASE,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """Create a client for the given API base URL.

        Args:
            api_base: Root URL of the provider's REST API.
            timeout: Per-request timeout in seconds, or None to wait indefinitely.
            transport: Optional httpx transport, used to substitute the network.
        """
        super().__init__()
        self.api_base = api_base
        self.timeout = timeout
        self.transport = transport
        self.client: Optional[httpx.AsyncClient] = None

    async def _get_client(self) -> httpx.AsyncClient:
        """Lazily initializes and returns the shared httpx.AsyncClient."""
        if not self.client:
            logger.warning("GitHub client is not authenticated. Rate limits will be lower.")
            self.client = httpx.AsyncClient(
                base_url=self.api_base,
                headers={"Accept": "application/vnd.github+json"},
                timeout=self.timeout,
                transport=self.transport,
            )
        return self.client

    async def close(self, *args: Any, **kwargs: Any) -> None:
        if self.client:
            await self.client.aclose()
            self.client = None

    async def _get_json(self, endpoint: str, params: Optional[Dict[str, Any]] = None) -> Any:
        client = await self._get_client()
        try:
            response = await client.get(endpoint, params=params)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            logger.error("HTTP error fetching %s: %s", endpoint, e.response.status_code)
            raise
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            logger.error("Request to %s failed: %s", endpoint, e)
            raise
        return response.json()

    async def fetch_user_profile_data(self, username: str) -> UserProfile:
        """Retrieves and validates the profile record for a GitHub user.

        Args:
            username: The GitHub login name.

        Returns:
            The validated UserProfile.
        """
        user_json = await self._get_json(f"/users/{_path_segment(username)}")
        logger.debug("Fetched raw user data for '%s'", username)
        return UserProfile.model_validate(user_json)

    async def fetch_repository_data(self, username: str) -> List[Repository]:
        """Fetches the user's most recently updated repositories.

        Only the first page is requested, so at most REPOSITORY_PAGE_SIZE
        repositories are returned, newest update first.
        """
        params = {"sort": "updated", "per_page": REPOSITORY_PAGE_SIZE}
        repos_json = await self._get_json(f"/users/{_path_segment(username)}/repos", params=params)
        logger.debug("Fetched raw repository data for '%s'", username)
        return _repository_list.validate_python(repos_json)
