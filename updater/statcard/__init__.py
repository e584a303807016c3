"""
Aggregate a user's Github statistics and update their profile cards.
"""

from __future__ import annotations

from .cache import CacheRecord, StatsCache
from .config import Config, ConfigError, load_config
from .engine import AggregationEngine
from .graphql import GraphQLClient, QueryError
from .history import HistoryScanner, RepoStats, scan_history
from .paging import Page, paginate
from .profile import ProfileStats, build_profile_stats, fetch_account
from .repos import Repo, get_affiliated_repos
from .svg import RenderError, update_profile_cards
from .utils import configure_logging

__all__: list[str] = [
    "AggregationEngine",
    "CacheRecord",
    "Config",
    "ConfigError",
    "GraphQLClient",
    "HistoryScanner",
    "Page",
    "ProfileStats",
    "QueryError",
    "RenderError",
    "Repo",
    "RepoStats",
    "StatsCache",
    "build_profile_stats",
    "configure_logging",
    "fetch_account",
    "get_affiliated_repos",
    "load_config",
    "paginate",
    "scan_history",
    "update_profile_cards",
]
