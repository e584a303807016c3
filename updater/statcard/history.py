"""
Functions for summing a user's commits in a repository's history.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, ClassVar

from loguru import logger

from .consts import HISTORY_LOG_EVERY, HISTORY_PAGE_SIZE, MAX_HISTORY_PAGES
from .graphql import HISTORY_QUERY
from .paging import Page, paginate

if TYPE_CHECKING:
    from .graphql import GraphQLClient
    from .repos import Repo


@dataclass(frozen=True)
class RepoStats:
    """
    A user's authored totals, for one repository or summed over many.
    """

    ZERO: ClassVar[RepoStats]

    user_commits: int = 0
    additions: int = 0
    deletions: int = 0

    def __add__(self, other: RepoStats) -> RepoStats:
        return RepoStats(
            user_commits=self.user_commits + other.user_commits,
            additions=self.additions + other.additions,
            deletions=self.deletions + other.deletions,
        )


RepoStats.ZERO = RepoStats()


def commit_author(node: dict[str, Any]) -> str | None:
    """
    Login of the Github user a commit is attributed to, if any.
    """

    user: dict[str, Any] | None = (node.get("author") or {}).get("user")
    return user.get("login") if user else None


def scan_history(
    client: GraphQLClient,
    owner: str,
    name: str,
    login: str,
    *,
    has_default_branch: bool = True,
    max_pages: int = MAX_HISTORY_PAGES,
) -> RepoStats:
    """
    Sum the commits `login` authored on a repository's default branch.

    Only the most recent `max_pages` pages are read, so very long
    histories are undercounted rather than scanned forever.

    Args:
        client:             Client to run queries with.
        owner:              Repository owner.
        name:               Repository name.
        login:              User whose commits are counted.
        has_default_branch: Skip the scan when the repo has no branch.
        max_pages:          Page cap for the history walk.

    Return:
        RepoStats: User's commits, additions and deletions.

    Raises:
        QueryError: If any history page fails. Nothing partial is returned.

    """

    if not has_default_branch:
        return RepoStats.ZERO

    pages: int = 0

    def fetch_page(cursor: str | None) -> Page:
        nonlocal pages
        if pages % HISTORY_LOG_EVERY == 0:
            logger.info("  Page {} for {}...", pages, name)
        pages += 1

        data = client.query(
            HISTORY_QUERY,
            {
                "owner": owner,
                "name": name,
                "first": HISTORY_PAGE_SIZE,
                "cursor": cursor,
            },
        )

        branch: dict[str, Any] | None = (data.get("repository") or {}).get(
            "defaultBranchRef"
        )
        history: dict[str, Any] | None = ((branch or {}).get("target") or {}).get(
            "history"
        )
        if history is None:
            # branch was deleted, the repo went away mid-walk,
            # or the branch target is not a commit
            return Page()

        return Page.from_connection(history)

    user_commits: int = 0
    additions: int = 0
    deletions: int = 0

    for node in paginate(fetch_page, max_pages=max_pages, label=f"commits of {name}"):
        if commit_author(node) != login:
            continue

        user_commits += 1
        additions += int(node.get("additions") or 0)
        deletions += int(node.get("deletions") or 0)

    return RepoStats(user_commits, additions, deletions)


class HistoryScanner:
    """
    Scan repositories on behalf of one user with one client.
    """

    def __init__(
        self,
        client: GraphQLClient,
        login: str,
        max_pages: int = MAX_HISTORY_PAGES,
    ) -> None:
        self.client = client
        self.login = login
        self.max_pages = max_pages

    def __call__(self, repo: Repo) -> RepoStats:
        return scan_history(
            self.client,
            repo.owner,
            repo.name,
            self.login,
            has_default_branch=repo.has_default_branch,
            max_pages=self.max_pages,
        )
