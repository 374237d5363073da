"""
Tests for GitHubClient: request shape, JSON normalization and failure mapping.
"""
import httpx
import pytest

from portfolio.clients import GitHubClient, NetworkError
from portfolio.types import Profile, Repository


@pytest.mark.asyncio
async def test_fetch_profile_normalizes_counts(fake_github):
    client = fake_github.client()
    try:
        profile = await client.fetch_profile("octocat")
    finally:
        await client.close()

    assert profile == Profile(public_repo_count=3, follower_count=42)


@pytest.mark.asyncio
async def test_fetch_profile_treats_null_counts_as_zero(fake_github):
    fake_github.user_json = {"login": "octocat", "public_repos": None, "followers": None}
    client = fake_github.client()
    try:
        profile = await client.fetch_profile("octocat")
    finally:
        await client.close()

    assert profile == Profile(public_repo_count=0, follower_count=0)


@pytest.mark.asyncio
async def test_fetch_repositories_requests_single_sorted_page(fake_github):
    client = fake_github.client()
    try:
        await client.fetch_repositories("octocat")
    finally:
        await client.close()

    (request,) = fake_github.requests
    assert request.url.path == "/users/octocat/repos"
    assert request.url.params["sort"] == "updated"
    assert request.url.params["per_page"] == "100"
    assert request.headers["Accept"] == "application/vnd.github.v3+json"
    assert "Authorization" not in request.headers


@pytest.mark.asyncio
async def test_fetch_repositories_maps_fields_in_response_order(fake_github):
    client = fake_github.client()
    try:
        repositories = await client.fetch_repositories("octocat")
    finally:
        await client.close()

    assert [repo.name for repo in repositories] == ["spoon-knife", "linguist", "dotfiles"]
    assert repositories[0] == Repository(
        name="spoon-knife",
        url="https://github.com/octocat/spoon-knife",
        description="Fork me",
        language="HTML",
        star_count=3,
        fork_count=1,
        homepage_url="https://octocat.github.io/spoon-knife",
    )
    # Empty homepage strings and missing descriptions are absent, not blank.
    assert repositories[1].homepage_url is None
    assert repositories[1].description is None
    assert repositories[2].language is None


@pytest.mark.asyncio
async def test_pat_is_sent_as_bearer_token(fake_github):
    client = GitHubClient(pat="secret", transport=httpx.MockTransport(fake_github.handler))
    try:
        await client.fetch_profile("octocat")
    finally:
        await client.close()

    assert fake_github.requests[0].headers["Authorization"] == "Bearer secret"


@pytest.mark.asyncio
@pytest.mark.parametrize("status", [403, 404, 500])
async def test_non_success_status_raises_network_error(fake_github, status):
    fake_github.user_status = status
    client = fake_github.client()
    try:
        with pytest.raises(NetworkError) as exc_info:
            await client.fetch_profile("octocat")
    finally:
        await client.close()

    assert exc_info.value.status_code == status
    assert isinstance(exc_info.value.__cause__, httpx.HTTPStatusError)


@pytest.mark.asyncio
async def test_transport_failure_raises_network_error():
    def handler(request):
        raise httpx.ConnectError("Connection refused", request=request)

    client = GitHubClient(transport=httpx.MockTransport(handler))
    try:
        with pytest.raises(NetworkError) as exc_info:
            await client.fetch_repositories("octocat")
    finally:
        await client.close()

    assert exc_info.value.status_code is None
    assert isinstance(exc_info.value.__cause__, httpx.ConnectError)


@pytest.mark.asyncio
async def test_non_json_success_body_raises_network_error():
    def handler(request):
        return httpx.Response(200, text="<html>rate limited</html>")

    client = GitHubClient(transport=httpx.MockTransport(handler))
    try:
        with pytest.raises(NetworkError) as exc_info:
            await client.fetch_repositories("octocat")
    finally:
        await client.close()

    assert isinstance(exc_info.value.__cause__, ValueError)


@pytest.mark.asyncio
@pytest.mark.parametrize("payload", [{"message": "Not Found"}, ["spoon-knife"], None])
async def test_repository_payload_of_wrong_shape_raises_network_error(fake_github, payload):
    fake_github.repos_json = payload
    client = fake_github.client()
    try:
        with pytest.raises(NetworkError):
            await client.fetch_repositories("octocat")
    finally:
        await client.close()


@pytest.mark.asyncio
async def test_profile_payload_of_wrong_shape_raises_network_error(fake_github):
    fake_github.user_json = ["not", "a", "profile"]
    client = fake_github.client()
    try:
        with pytest.raises(NetworkError):
            await client.fetch_profile("octocat")
    finally:
        await client.close()


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "homepage",
    ["javascript:alert(1)", "JavaScript:alert(1)", "data:text/html,<b>x</b>", "ftp://example.com"],
)
async def test_unsafe_homepage_schemes_are_dropped(fake_github, homepage):
    fake_github.repos_json = [dict(fake_github.repos_json[0], homepage=homepage)]
    client = fake_github.client()
    try:
        (repository,) = await client.fetch_repositories("octocat")
    finally:
        await client.close()

    assert repository.homepage_url is None
    assert repository.url == "https://github.com/octocat/spoon-knife"
