from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Optional, Tuple

ALL_FILTER = "all"


@dataclass(frozen=True)
class Profile:
    public_repo_count: int
    follower_count: int


@dataclass(frozen=True)
class Repository:
    name: str
    url: str
    description: Optional[str] = None
    language: Optional[str] = None
    star_count: int = 0
    fork_count: int = 0
    homepage_url: Optional[str] = None


@dataclass(frozen=True)
class SummaryStats:
    repo_count: int
    follower_count: int
    star_total: int
    fork_total: int


@dataclass(frozen=True)
class Card:
    name: str
    description: str
    url: str
    language: Optional[str]
    star_count: int
    fork_count: int
    homepage_url: Optional[str]
    delay_ms: int

    @property
    def language_key(self) -> str:
        return self.language.lower() if self.language else "unknown"

    @property
    def show_stars(self) -> bool:
        return self.star_count > 0

    @property
    def show_forks(self) -> bool:
        return self.fork_count > 0


@dataclass(frozen=True)
class ViewState:
    """Snapshot of what the gallery shows.

    Each transition returns a new value; the page controller is the only
    holder of the current snapshot.
    """

    repositories: Tuple[Repository, ...] = field(default_factory=tuple)
    active_filter: str = ALL_FILTER

    def with_repositories(self, repositories) -> "ViewState":
        return replace(self, repositories=tuple(repositories))

    def with_filter(self, tag: str) -> "ViewState":
        return replace(self, active_filter=tag)
