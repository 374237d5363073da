import os
from dataclasses import dataclass
from typing import List, Mapping, Optional

from application_sdk.observability.logger_adaptor import get_logger

logger = get_logger(__name__)

REQUIRED_ENV_VARS = ["GITHUB_USERNAME"]

DEFAULT_API_BASE_URL = "https://api.github.com"
DEFAULT_MAX_PROJECTS = 12
DEFAULT_ANIMATION_DELAY_MS = 100
DEFAULT_OUTPUT_FILE = "portfolio.html"


@dataclass(frozen=True)
class PortfolioConfig:
    """Settings for one portfolio page.

    Attributes:
        username: GitHub login whose profile and repositories are shown.
        api_base_url: Root of the GitHub REST API.
        max_projects: Display cap applied to every render pass.
        animation_delay_ms: Per-card stagger delay.
        token: Optional PAT; requests are unauthenticated without it.
        output_file: Where ``main.py`` writes the rendered page.
    """

    username: str
    api_base_url: str = DEFAULT_API_BASE_URL
    max_projects: int = DEFAULT_MAX_PROJECTS
    animation_delay_ms: int = DEFAULT_ANIMATION_DELAY_MS
    token: Optional[str] = None
    output_file: str = DEFAULT_OUTPUT_FILE


def missing_env_vars(environ: Optional[Mapping[str, str]] = None) -> List[str]:
    environ = os.environ if environ is None else environ
    return [v for v in REQUIRED_ENV_VARS if not environ.get(v)]


def _int_setting(environ: Mapping[str, str], name: str, default: int) -> int:
    raw = environ.get(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = int(raw)
    except ValueError as e:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from e
    if value < 0:
        raise ValueError(f"{name} must not be negative, got {value}")
    return value


def load_config(environ: Optional[Mapping[str, str]] = None) -> PortfolioConfig:
    """Build a PortfolioConfig from environment variables.

    Evaluated at call time so tests can pass their own mapping.

    Raises:
        ValueError: If GITHUB_USERNAME is missing or a tunable is not a
            non-negative integer.
    """
    environ = os.environ if environ is None else environ
    missing = missing_env_vars(environ)
    if missing:
        raise ValueError(f"Missing required environment variables: {', '.join(missing)}")

    config = PortfolioConfig(
        username=environ["GITHUB_USERNAME"],
        api_base_url=environ.get("GITHUB_API_BASE_URL") or DEFAULT_API_BASE_URL,
        max_projects=_int_setting(environ, "PORTFOLIO_MAX_PROJECTS", DEFAULT_MAX_PROJECTS),
        animation_delay_ms=_int_setting(
            environ, "PORTFOLIO_ANIMATION_DELAY_MS", DEFAULT_ANIMATION_DELAY_MS
        ),
        token=environ.get("GITHUB_TOKEN") or environ.get("GITHUB_PAT") or None,
        output_file=environ.get("PORTFOLIO_OUTPUT") or DEFAULT_OUTPUT_FILE,
    )
    logger.debug("Loaded portfolio configuration for '%s'", config.username)
    return config
