import asyncio
from typing import Optional, Tuple

from application_sdk.observability.decorators.observability_decorator import observability
from application_sdk.observability.logger_adaptor import get_logger
from application_sdk.observability.metrics_adaptor import get_metrics
from application_sdk.observability.traces_adaptor import get_traces
from portfolio.activities import PortfolioActivities
from portfolio.clients import GitHubClient, NetworkError
from portfolio.config import PortfolioConfig
from portfolio.events import FILTER_SELECTED, PAGE_READY, RESUME_SELECTED, EventRegistry
from portfolio.filters import available_tags, filter_repositories
from portfolio.render import ProjectRenderer, RenderTarget
from portfolio.stats import StatsDisplay
from portfolio.types import Card, SummaryStats, ViewState
from portfolio.uploads import DownloadHandle, ResumeUploadHelper, UploadedFile, ValidationError

logger = get_logger(__name__)
metrics = get_metrics()
traces = get_traces()

FETCH_ERROR_MESSAGE = "Failed to load GitHub data. Please try again later."


class PortfolioWorkflow:
    """Page controller for the project gallery.

    Owns the current ViewState and the projects container. The fetch is the
    only suspending step; filter selection and uploads are synchronous.
    """

    def __init__(
        self,
        config: PortfolioConfig,
        client: Optional[GitHubClient] = None,
        renderer: Optional[ProjectRenderer] = None,
        uploads: Optional[ResumeUploadHelper] = None,
        stats_display: Optional[StatsDisplay] = None,
    ):
        self.config = config
        self.client = client or GitHubClient(pat=config.token, base_url=config.api_base_url)
        self.activities = PortfolioActivities(self.client, config.username)
        self.renderer = renderer or ProjectRenderer(
            max_projects=config.max_projects,
            animation_delay_ms=config.animation_delay_ms,
        )
        self.uploads = uploads or ResumeUploadHelper()
        self.stats_display = stats_display or StatsDisplay()
        self.target = RenderTarget()
        self.state = ViewState()
        self.stats: Optional[SummaryStats] = None
        self.is_loading = False

    async def _fetch(self):
        """Run both reads to completion and fail as a whole if either failed."""
        results = await asyncio.gather(
            self.activities.retrieve_user_profile_activity(),
            self.activities.retrieve_repositories_activity(),
            return_exceptions=True,
        )
        for result in results:
            if isinstance(result, BaseException):
                raise result
        profile, repositories = results
        return profile, repositories

    @observability(logger=logger, metrics=metrics, traces=traces)
    async def run(self) -> bool:
        """Fetch profile and repositories, then show stats and cards.

        Returns False without doing anything when a fetch is already in
        flight, and False after showing the error message when the fetch
        fails. Repositories from an earlier successful fetch are kept on
        failure.
        """
        if self.is_loading:
            logger.debug("Fetch already in progress; ignoring request.")
            return False

        self.is_loading = True
        self.renderer.show_loading(self.target)
        try:
            profile, repositories = await self._fetch()
        except NetworkError as e:
            logger.error(f"GitHub API Error: {e}")
            self.renderer.show_error(self.target, FETCH_ERROR_MESSAGE)
            return False
        finally:
            self.is_loading = False

        self.stats = self.activities.compute_summary_stats_activity(profile, repositories)
        self.stats_display.start(self.stats)

        self.state = self.state.with_repositories(repositories)
        self._render_current()
        return True

    def _render_current(self) -> Tuple[Card, ...]:
        visible = filter_repositories(self.state.repositories, self.state.active_filter)
        return self.renderer.render(visible, self.target)

    def select_filter(self, tag: str) -> Tuple[Card, ...]:
        """Make ``tag`` the active filter and re-render from the stored list."""
        self.state = self.state.with_filter(tag)
        logger.debug("Active filter set to '%s'", tag)
        return self._render_current()

    def select_resume(self, file: Optional[UploadedFile]) -> Optional[DownloadHandle]:
        """Offer ``file`` for download; a rejection only updates the upload status."""
        try:
            return self.uploads.select(file)
        except ValidationError:
            return None

    def bind(self, registry: EventRegistry) -> EventRegistry:
        registry.register(PAGE_READY, self.run)
        registry.register(FILTER_SELECTED, self.select_filter)
        registry.register(RESUME_SELECTED, self.select_resume)
        return registry

    def page_html(self) -> str:
        return self.renderer.render_page(
            username=self.config.username,
            target=self.target,
            stats=self.stats,
            tags=available_tags(self.state.repositories),
            active_filter=self.state.active_filter,
        )

    async def close(self) -> None:
        await self.client.close()
