"""
Functions for enumerating repositories and their statistics.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from loguru import logger

from .consts import REPO_AFFILIATIONS, REPO_PAGE_SIZE
from .graphql import REPO_QUERY
from .paging import Page, paginate

if TYPE_CHECKING:
    from collections.abc import Iterable

    from .graphql import GraphQLClient


@dataclass(frozen=True)
class Repo:
    """
    Summary of a repository as returned by the repository listing.

    Attributes:
        name_with_owner:    Qualified `owner/name`.
        stars:              Stargazer count.
        commit_count:       Commits on the default branch.
        has_default_branch: `False` for repositories without any branch.

    """

    name_with_owner: str
    stars: int = 0
    commit_count: int = 0
    has_default_branch: bool = True

    @property
    def owner(self) -> str:
        return self.name_with_owner.split("/", 1)[0]

    @property
    def name(self) -> str:
        return self.name_with_owner.split("/", 1)[-1]

    @classmethod
    def from_node(cls, node: dict[str, Any]) -> Repo:
        """
        Build a repository summary from a `REPO_QUERY` node.

        Args:
            node: Repository node of the listing.

        Return:
            Repo: Parsed summary.

        """

        branch: dict[str, Any] | None = node.get("defaultBranchRef")
        history: dict[str, Any] = ((branch or {}).get("target") or {}).get("history") or {}

        return cls(
            name_with_owner=node["nameWithOwner"],
            stars=int((node.get("stargazers") or {}).get("totalCount", 0)),
            commit_count=int(history.get("totalCount", 0)),
            has_default_branch=branch is not None,
        )


def get_affiliated_repos(client: GraphQLClient, login: str) -> list[Repo]:
    """
    Get all repositories a user owns, collaborates on, or reaches through an org.

    Args:
        client: Client to run queries with.
        login:  User to get repo data for.

    Return:
        list[Repo]: Every affiliated repository.

    Raises:
        QueryError: If any page of the listing fails.

    """

    def fetch_page(cursor: str | None) -> Page:
        data = client.query(
            REPO_QUERY,
            {
                "login": login,
                "first": REPO_PAGE_SIZE,
                "cursor": cursor,
                "ownerAffiliations": REPO_AFFILIATIONS,
            },
        )
        return Page.from_connection(data["user"]["repositories"])

    repos: list[Repo] = [
        Repo.from_node(node) for node in paginate(fetch_page, label="repos")
    ]
    logger.info("Fetched {} repos", len(repos))

    return repos


def get_owned_repos(repos: Iterable[Repo], login: str) -> list[Repo]:
    """
    Filter repositories down to the ones a user owns.

    Args:
        repos: Repositories to filter.
        login: Owner to keep.

    Return:
        list[Repo]: User's owned repos.

    """

    return [repo for repo in repos if repo.name_with_owner.startswith(f"{login}/")]


def calc_stargazers(repos: Iterable[Repo]) -> int:
    """
    Sum the stargazers of the given repositories.

    Args:
        repos: Repositories to count stars for.

    Return:
        int: Total stargazer count.

    """

    return sum(repo.stars for repo in repos)
