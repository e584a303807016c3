"""
Incremental aggregation of a user's commit statistics across repositories.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from loguru import logger

from .graphql import QueryError
from .history import RepoStats

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable

    from .cache import CacheRecord, StatsCache
    from .config import Config
    from .repos import Repo


class AggregationEngine:
    """
    Sum a user's commits, additions and deletions over many repositories.

    Repositories whose commit count matches the cache are not scanned
    again. A repository that fails to scan counts as zero and the run
    carries on with the rest.
    """

    def __init__(
        self,
        config: Config,
        scanner: Callable[[Repo], RepoStats],
        cache: StatsCache,
    ) -> None:
        self.config = config
        self.scanner = scanner
        self.cache = cache
        self.scans: int = 0

    def repo_stats(self, repo: Repo) -> RepoStats:
        """
        Get one repository's totals and stage them in the cache.

        Args:
            repo: Repository to get totals for.

        Return:
            RepoStats: User's totals for the repository.

        """

        cached: CacheRecord | None = self.cache.lookup(repo.name_with_owner)

        if self.cache.is_fresh(cached, repo.commit_count):
            logger.debug("Cache hit for {}", repo.name_with_owner)
            stats: RepoStats = cached.stats  # type: ignore[union-attr]
        elif repo.commit_count == 0:
            stats = RepoStats.ZERO
        else:
            logger.info("Fetching history for {}...", repo.name_with_owner)
            self.scans += 1
            try:
                stats = self.scanner(repo)
            except QueryError as e:
                logger.error(
                    "Failed to fetch history for {}: {}", repo.name_with_owner, e
                )
                stats = RepoStats.ZERO

        self.cache.record(repo.name_with_owner, repo.commit_count, stats)
        return stats

    def run(self, repos: Iterable[Repo]) -> RepoStats:
        """
        Aggregate totals over all repositories and persist the cache.

        Args:
            repos: Every repository the user is affiliated with.

        Return:
            RepoStats: Summed totals.

        """

        self.cache.load()

        totals: RepoStats = RepoStats.ZERO
        for repo in repos:
            totals += self.repo_stats(repo)

        self.cache.flush()

        logger.info(
            "{} commits, +{} / -{} lines for {}",
            totals.user_commits,
            totals.additions,
            totals.deletions,
            self.config.login,
        )
        return totals
