"""HTML rendering for the project gallery.

All markup comes from the Jinja2 templates in ``portfolio/templates`` with
autoescaping on, so names, descriptions, languages and URLs from the API are
escaped as they are inserted. Python code here only decides *which* cards and
placeholders exist.
"""

from typing import Optional, Sequence, Tuple

from jinja2 import Environment, PackageLoader, select_autoescape
from markupsafe import Markup

from application_sdk.observability.logger_adaptor import get_logger
from portfolio.config import DEFAULT_ANIMATION_DELAY_MS, DEFAULT_MAX_PROJECTS
from portfolio.types import ALL_FILTER, Card, Repository, SummaryStats

logger = get_logger(__name__)

NO_DESCRIPTION = "No description available"
NO_PROJECTS_MESSAGE = "No projects found matching your criteria."
LOADING_MESSAGE = "Loading projects from GitHub..."


def create_environment() -> Environment:
    return Environment(
        loader=PackageLoader("portfolio", "templates"),
        autoescape=select_autoescape(["html"]),
        keep_trailing_newline=True,
    )


class RenderTarget:
    """The single projects container.

    Holds exactly one of three states at a time: the loading placeholder,
    an error message, or the rendered project list.
    """

    LOADING = "loading"
    ERROR = "error"
    PROJECTS = "projects"

    def __init__(self):
        self.state: Optional[str] = None
        self.html: Markup = Markup("")
        self.cards: Tuple[Card, ...] = ()

    def replace(self, state: str, html: str, cards: Tuple[Card, ...] = ()) -> None:
        self.state = state
        self.html = Markup(html)
        self.cards = cards


class ProjectRenderer:
    """Turns repository records into cards and writes them into a RenderTarget."""

    def __init__(
        self,
        max_projects: int = DEFAULT_MAX_PROJECTS,
        animation_delay_ms: int = DEFAULT_ANIMATION_DELAY_MS,
        environment: Optional[Environment] = None,
    ):
        self.max_projects = max_projects
        self.animation_delay_ms = animation_delay_ms
        self.environment = environment or create_environment()

    def build_cards(self, repositories: Sequence[Repository]) -> Tuple[Card, ...]:
        """Cards for the first ``max_projects`` repositories, in input order."""
        return tuple(
            Card(
                name=repo.name,
                description=repo.description or NO_DESCRIPTION,
                url=repo.url,
                language=repo.language,
                star_count=repo.star_count,
                fork_count=repo.fork_count,
                homepage_url=repo.homepage_url,
                delay_ms=index * self.animation_delay_ms,
            )
            for index, repo in enumerate(repositories[: self.max_projects])
        )

    def render_projects(self, repositories: Sequence[Repository]) -> Tuple[Tuple[Card, ...], str]:
        cards = self.build_cards(repositories)
        html = self.environment.get_template("projects.html").render(
            cards=cards, empty_message=NO_PROJECTS_MESSAGE
        )
        return cards, html

    def render(self, repositories: Sequence[Repository], target: RenderTarget) -> Tuple[Card, ...]:
        cards, html = self.render_projects(repositories)
        target.replace(RenderTarget.PROJECTS, html, cards)
        logger.debug("Rendered %d of %d projects", len(cards), len(repositories))
        return cards

    def show_loading(self, target: RenderTarget) -> None:
        html = self.environment.get_template("loading.html").render(message=LOADING_MESSAGE)
        target.replace(RenderTarget.LOADING, html)

    def show_error(self, target: RenderTarget, message: str) -> None:
        html = self.environment.get_template("error.html").render(message=message)
        target.replace(RenderTarget.ERROR, html)

    def render_page(
        self,
        username: str,
        target: RenderTarget,
        stats: Optional[SummaryStats] = None,
        tags: Sequence[str] = (ALL_FILTER,),
        active_filter: str = ALL_FILTER,
    ) -> str:
        """Full HTML document around the current container contents."""
        stats = stats or SummaryStats(repo_count=0, follower_count=0, star_total=0, fork_total=0)
        return self.environment.get_template("page.html").render(
            username=username,
            stats=stats,
            tags=tags,
            active_filter=active_filter,
            container=target.html,
        )
