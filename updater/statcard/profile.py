"""
Functions for building the final set of profile statistics.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from .graphql import USER_QUERY, QueryError
from .repos import calc_stargazers, get_owned_repos
from .utils import calculate_age, from_iso_z

if TYPE_CHECKING:
    from collections.abc import Sequence
    from datetime import datetime

    from .config import Config
    from .graphql import GraphQLClient
    from .history import RepoStats
    from .repos import Repo


@dataclass(frozen=True)
class Account:
    """
    Account fields fetched directly from the API.
    """

    created_at: datetime
    followers: int
    contributions: int


@dataclass(frozen=True)
class ProfileStats:
    """
    Every statistic shown on the profile card.
    """

    uptime: str
    commits: int
    stars: int
    repos: int
    contributed: int
    followers: int
    loc: int
    loc_add: int
    loc_del: int


def fetch_account(client: GraphQLClient, login: str) -> Account:
    """
    Fetch a user's account summary.

    Args:
        client: Client to run queries with.
        login:  User to fetch.

    Return:
        Account: Creation date, followers and yearly contributions.

    Raises:
        QueryError: If the query fails or the user does not exist.

    """

    user: dict[str, Any] | None = client.query(USER_QUERY, {"login": login}).get("user")
    if user is None:
        msg = f"No such user: {login!r}"
        raise QueryError(msg)

    calendar: dict[str, Any] = user["contributionsCollection"]["contributionCalendar"]

    return Account(
        created_at=from_iso_z(user["createdAt"]),
        followers=int(user["followers"]["totalCount"]),
        contributions=int(calendar["totalContributions"]),
    )


def build_profile_stats(
    config: Config,
    account: Account,
    repos: Sequence[Repo],
    totals: RepoStats,
    now: datetime | None = None,
) -> ProfileStats:
    """
    Combine aggregated commit totals with account and repository fields.

    Args:
        config:  Run configuration.
        account: User's account summary.
        repos:   Every affiliated repository.
        totals:  Aggregated commit totals.
        now:     Point to compute the uptime at.

    Return:
        ProfileStats: Statistics ready to render.

    """

    owned: list[Repo] = get_owned_repos(repos, config.login)

    return ProfileStats(
        uptime=calculate_age(config.uptime_start or account.created_at, now),
        commits=totals.user_commits,
        stars=calc_stargazers(owned),
        repos=len(owned),
        contributed=len(repos),
        followers=account.followers,
        loc=totals.additions - totals.deletions,
        loc_add=totals.additions,
        loc_del=totals.deletions,
    )
