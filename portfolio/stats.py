"""Aggregate counts for the stats strip and the count-up effect that shows them."""

import asyncio
import math
from typing import Awaitable, Callable, Iterator, List, Optional, Sequence

from application_sdk.observability.logger_adaptor import get_logger
from portfolio.types import Profile, Repository, SummaryStats

logger = get_logger(__name__)

COUNT_UP_DURATION_MS = 1000
COUNT_UP_STEPS = 30


def compute_stats(profile: Profile, repositories: Sequence[Repository]) -> SummaryStats:
    """Reduce a profile and the full fetched repository list into display counts.

    Star and fork totals always cover every fetched repository, never a
    filtered or capped subsequence.
    """
    return SummaryStats(
        repo_count=profile.public_repo_count,
        follower_count=profile.follower_count,
        star_total=sum(repo.star_count for repo in repositories),
        fork_total=sum(repo.fork_count for repo in repositories),
    )


def count_up_frames(target: int, steps: int = COUNT_UP_STEPS) -> Iterator[int]:
    """Yield the values shown while counting from 0 up to ``target``.

    Intermediate frames are floored; the last frame is always ``target``.
    """
    increment = target / steps
    current = 0.0
    while True:
        current += increment
        if current >= target:
            yield target
            return
        yield math.floor(current)


async def animate_count(
    target: int,
    on_frame: Callable[[int], None],
    duration_ms: int = COUNT_UP_DURATION_MS,
    steps: int = COUNT_UP_STEPS,
    sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
) -> int:
    """Drive ``on_frame`` through a linear count-up ending on ``target``."""
    interval = duration_ms / steps / 1000
    value = 0
    for value in count_up_frames(target, steps):
        await sleep(interval)
        on_frame(value)
    return value


class StatsDisplay:
    """Currently displayed value of each stat."""

    FIELDS = ("repo_count", "follower_count", "star_total", "fork_total")

    def __init__(self, duration_ms: int = COUNT_UP_DURATION_MS):
        self.duration_ms = duration_ms
        self.values = {name: 0 for name in self.FIELDS}
        self._tasks: List[asyncio.Future] = []

    def _setter(self, name: str) -> Callable[[int], None]:
        def _set(value: int) -> None:
            self.values[name] = value

        return _set

    def start(self, stats: SummaryStats) -> None:
        """Start one independent count-up per stat on the running loop."""
        for name in self.FIELDS:
            target = getattr(stats, name)
            task = asyncio.ensure_future(
                animate_count(target, self._setter(name), duration_ms=self.duration_ms)
            )
            self._tasks.append(task)
        logger.debug("Started count-up for %s", stats)

    async def wait(self, timeout: Optional[float] = None) -> None:
        tasks, self._tasks = self._tasks, []
        if tasks:
            await asyncio.wait_for(asyncio.gather(*tasks), timeout=timeout)
