from typing import List, Sequence

from application_sdk.observability.decorators.observability_decorator import observability
from application_sdk.observability.logger_adaptor import get_logger
from application_sdk.observability.metrics_adaptor import get_metrics
from application_sdk.observability.traces_adaptor import get_traces
from portfolio.clients import GitHubClient
from portfolio.stats import compute_stats
from portfolio.types import Profile, Repository, SummaryStats

logger = get_logger(__name__)
metrics = get_metrics()
traces = get_traces()


class PortfolioActivities:
    """The units of work the page controller composes: two reads and one reduction."""

    def __init__(self, client: GitHubClient, username: str):
        if not username:
            raise ValueError("GitHub username is missing.")
        self.client = client
        self.username = username

    @observability(logger=logger, metrics=metrics, traces=traces)
    async def retrieve_user_profile_activity(self) -> Profile:
        """Retrieve the profile counts for the configured account.

        Raises:
            NetworkError: If the read fails.
        """
        profile = await self.client.fetch_profile(username=self.username)
        logger.info(
            "Fetched profile for '%s': %d public repos, %d followers",
            self.username,
            profile.public_repo_count,
            profile.follower_count,
        )
        return profile

    @observability(logger=logger, metrics=metrics, traces=traces)
    async def retrieve_repositories_activity(self) -> List[Repository]:
        """List public repositories for the account, most recently updated first.

        Raises:
            NetworkError: If the read fails.
        """
        repositories = await self.client.fetch_repositories(username=self.username)
        logger.info("Fetched %d repositories for '%s'", len(repositories), self.username)
        return repositories

    def compute_summary_stats_activity(
        self, profile: Profile, repositories: Sequence[Repository]
    ) -> SummaryStats:
        summary_stats = compute_stats(profile, repositories)
        logger.info("Computed summary stats: %s", summary_stats)
        return summary_stats
