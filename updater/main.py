"""
Main entry point for script execution.
"""

from __future__ import annotations

import sys
from typing import TYPE_CHECKING

from loguru import logger

from statcard import (
    AggregationEngine,
    ConfigError,
    GraphQLClient,
    HistoryScanner,
    QueryError,
    RenderError,
    StatsCache,
    build_profile_stats,
    configure_logging,
    fetch_account,
    get_affiliated_repos,
    load_config,
    update_profile_cards,
)

if TYPE_CHECKING:
    from statcard import Config, ProfileStats, Repo, RepoStats
    from statcard.profile import Account


def run(config: Config) -> ProfileStats:
    """
    Fetch, aggregate and render a user's statistics.

    Args:
        config: Run configuration.

    Return:
        ProfileStats: Statistics written to the profile cards.

    """

    client = GraphQLClient(config.access_token)

    account: Account = fetch_account(client, config.login)
    repos: list[Repo] = get_affiliated_repos(client, config.login)

    engine = AggregationEngine(
        config=config,
        scanner=HistoryScanner(client, config.login),
        cache=StatsCache(config.cache_path, config.hash_key),
    )
    totals: RepoStats = engine.run(repos)

    stats: ProfileStats = build_profile_stats(config, account, repos, totals)
    logger.info("Stats: {}", stats)

    update_profile_cards(config, stats)
    return stats


def main() -> None:
    """
    Execute script.
    """

    try:
        config: Config = load_config()
    except ConfigError as c:
        logger.error("{}", c)
        sys.exit(1)

    configure_logging(config.log_level)
    logger.info("Starting update...")

    try:
        run(config)
    except (QueryError, RenderError) as e:
        logger.error("Update aborted: {}", e)
        sys.exit(1)

    logger.info("Done!")


if __name__ == "__main__":
    main()
