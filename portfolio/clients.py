import httpx
from typing import Any, Dict, List, Optional
from urllib.parse import urlsplit

from application_sdk.clients.base import BaseClient
from application_sdk.observability.logger_adaptor import get_logger
from portfolio.config import DEFAULT_API_BASE_URL
from portfolio.types import Profile, Repository

logger = get_logger(__name__)

REPOSITORY_PAGE_SIZE = 100
SAFE_URL_SCHEMES = ("http", "https")


class NetworkError(Exception):
    """Raised when a GitHub read fails in transport, returns a non-success status or an unusable body."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


def _safe_url(value: Any) -> Optional[str]:
    """Return ``value`` only if it is an http(s) URL; anything else is dropped."""
    if not isinstance(value, str) or not value.strip():
        return None
    if urlsplit(value.strip()).scheme.lower() not in SAFE_URL_SCHEMES:
        logger.warning("Dropping URL with unsupported scheme: %r", value)
        return None
    return value.strip()


class GitHubClient(BaseClient):
    """Read-only wrapper around the two GitHub REST endpoints the gallery needs.

    Provides a lazily-initialized HTTP client and helpers that return a
    normalized Profile and an ordered list of Repository records.
    """

    def __init__(
        self,
        pat: Optional[str] = None,
        base_url: str = DEFAULT_API_BASE_URL,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """Create a client optionally configured with a Personal Access Token.

        Args:
            pat: GitHub PAT used for authenticated requests.
            base_url: Root of the GitHub REST API.
            transport: Optional httpx transport, used to substitute the network.
        """
        super().__init__()
        self.pat = pat
        self.base_url = base_url
        self.transport = transport
        self.client: Optional[httpx.AsyncClient] = None

    async def _get_client(self) -> httpx.AsyncClient:
        """Lazily initializes and returns a shared httpx.AsyncClient."""
        if not self.client:
            headers = {"Accept": "application/vnd.github.v3+json"}
            if self.pat:
                logger.info("Configuring GitHub client with Personal Access Token.")
                headers["Authorization"] = f"Bearer {self.pat}"
            else:
                logger.warning("GitHub client is not authenticated. Rate limits will be lower.")

            self.client = httpx.AsyncClient(
                base_url=self.base_url,
                headers=headers,
                timeout=30.0,
                transport=self.transport,
            )
        return self.client

    async def close(self) -> None:
        if self.client:
            await self.client.aclose()
            self.client = None

    @staticmethod
    def _normalize_profile_json(user_json: Dict[str, Any]) -> Profile:
        return Profile(
            public_repo_count=user_json.get("public_repos", 0) or 0,
            follower_count=user_json.get("followers", 0) or 0,
        )

    @staticmethod
    def _normalize_repository_json(repo: Dict[str, Any]) -> Repository:
        """Maps one raw repository object onto a Repository.

        Null counts become 0. Homepage and repository links that are empty or not
        http(s) are treated as absent.
        """
        return Repository(
            name=repo.get("name") or "",
            url=_safe_url(repo.get("html_url")) or "",
            description=repo.get("description") or None,
            language=repo.get("language") or None,
            star_count=repo.get("stargazers_count", 0) or 0,
            fork_count=repo.get("forks_count", 0) or 0,
            homepage_url=_safe_url(repo.get("homepage")),
        )

    async def _get_json(self, endpoint: str, params: Optional[Dict[str, Any]] = None) -> Any:
        client = await self._get_client()
        try:
            response = await client.get(endpoint, params=params)
            response.raise_for_status()
            return response.json()
        except ValueError as e:
            logger.error(f"Non-JSON response body from {endpoint}: {e}")
            raise NetworkError(f"GitHub returned a non-JSON body for {endpoint}") from e
        except httpx.HTTPStatusError as e:
            logger.error(
                f"HTTP error fetching {endpoint}: {e.response.status_code} - {e.response.text}"
            )
            raise NetworkError(
                f"GitHub returned {e.response.status_code} for {endpoint}",
                status_code=e.response.status_code,
            ) from e
        except httpx.HTTPError as e:
            logger.error(f"Transport error fetching {endpoint}: {e}")
            raise NetworkError(f"Request to {endpoint} failed: {e}") from e

    async def fetch_profile(self, username: str) -> Profile:
        """Retrieves the profile counts for a GitHub user.

        Args:
            username: The GitHub login name for the user or organization.

        Raises:
            NetworkError: On a transport failure, a non-success status or a
                malformed body.
        """
        user_json = await self._get_json(f"/users/{username}")
        if not isinstance(user_json, dict):
            raise NetworkError(f"Unexpected profile payload for '{username}'")
        logger.debug("Fetched raw user data for '%s'", username)
        return self._normalize_profile_json(user_json)

    async def fetch_repositories(self, username: str) -> List[Repository]:
        """Fetches one page of public repositories, most recently updated first.

        Args:
            username: The GitHub login name to retrieve repositories for.

        Raises:
            NetworkError: On a transport failure, a non-success status or a
                malformed body.
        """
        params = {"sort": "updated", "per_page": REPOSITORY_PAGE_SIZE}
        page_data = await self._get_json(f"/users/{username}/repos", params=params)
        if not isinstance(page_data, list) or not all(isinstance(repo, dict) for repo in page_data):
            logger.error(f"Unexpected repository payload for {username}: {str(page_data)[:200]}")
            raise NetworkError(f"Unexpected repository payload for '{username}'")
        repositories = [self._normalize_repository_json(repo) for repo in page_data]
        logger.debug("Fetched %d repositories for '%s'", len(repositories), username)
        return repositories
