from typing import List, Sequence, Tuple

from portfolio.types import ALL_FILTER, Repository


def filter_repositories(repositories: Sequence[Repository], tag: str) -> Tuple[Repository, ...]:
    """Select the repositories whose language contains ``tag``, ignoring case.

    ``"all"`` keeps every repository. Repositories without a language never
    match any other tag. Input order is preserved.
    """
    if tag == ALL_FILTER:
        return tuple(repositories)
    needle = tag.lower()
    return tuple(
        repo for repo in repositories if repo.language and needle in repo.language.lower()
    )


def available_tags(repositories: Sequence[Repository]) -> List[str]:
    """``"all"`` followed by each distinct language in first-seen order."""
    tags = [ALL_FILTER]
    seen = set()
    for repo in repositories:
        if repo.language and repo.language.lower() not in seen:
            seen.add(repo.language.lower())
            tags.append(repo.language)
    return tags
