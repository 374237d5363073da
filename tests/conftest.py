"""
Shared fixtures: repository factories and a fake GitHub API served through httpx.MockTransport.
"""
from typing import Any, Callable, Dict, List, Optional

import httpx
import pytest

from portfolio.clients import GitHubClient
from portfolio.config import PortfolioConfig
from portfolio.types import Repository

USERNAME = "octocat"

USER_JSON: Dict[str, Any] = {
    "login": USERNAME,
    "public_repos": 3,
    "followers": 42,
    "following": 1,
}

REPOS_JSON: List[Dict[str, Any]] = [
    {
        "name": "spoon-knife",
        "description": "Fork me",
        "language": "HTML",
        "stargazers_count": 3,
        "forks_count": 1,
        "html_url": "https://github.com/octocat/spoon-knife",
        "homepage": "https://octocat.github.io/spoon-knife",
    },
    {
        "name": "linguist",
        "description": None,
        "language": "Python",
        "stargazers_count": 0,
        "forks_count": 2,
        "html_url": "https://github.com/octocat/linguist",
        "homepage": "",
    },
    {
        "name": "dotfiles",
        "description": "Config",
        "language": None,
        "stargazers_count": 5,
        "forks_count": 0,
        "html_url": "https://github.com/octocat/dotfiles",
        "homepage": None,
    },
]


@pytest.fixture
def make_repo() -> Callable[..., Repository]:
    def _make(name: str = "repo", language: Optional[str] = None, **kwargs: Any) -> Repository:
        kwargs.setdefault("url", f"https://github.com/{USERNAME}/{name}")
        return Repository(name=name, language=language, **kwargs)

    return _make


@pytest.fixture
def config() -> PortfolioConfig:
    return PortfolioConfig(username=USERNAME)


class FakeGitHub:
    """Routes requests to canned responses and records what was asked for."""

    def __init__(self, user_json=None, repos_json=None):
        self.user_json = USER_JSON if user_json is None else user_json
        self.repos_json = REPOS_JSON if repos_json is None else repos_json
        self.user_status = 200
        self.repos_status = 200
        self.requests: List[httpx.Request] = []

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if request.url.path == f"/users/{USERNAME}/repos":
            return httpx.Response(self.repos_status, json=self.repos_json)
        if request.url.path == f"/users/{USERNAME}":
            return httpx.Response(self.user_status, json=self.user_json)
        return httpx.Response(404, json={"message": "Not Found"})

    def client(self) -> GitHubClient:
        return GitHubClient(transport=httpx.MockTransport(self.handler))


@pytest.fixture
def fake_github() -> FakeGitHub:
    return FakeGitHub()
