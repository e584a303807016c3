"""
Functions for handling the caching of statistics.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from loguru import logger

from .consts import ENCODING
from .history import RepoStats
from .utils import hash_repo, parse_int

if TYPE_CHECKING:
    from pathlib import Path

CACHE_FIELDS: int = 5


@dataclass(frozen=True)
class CacheRecord:
    """
    Cached totals of one repository as of a given commit count.

    Fields that could not be parsed from the cache file are `None`.
    """

    commit_count: int | None
    user_commits: int | None = 0
    additions: int | None = 0
    deletions: int | None = 0

    @property
    def stats(self) -> RepoStats:
        return RepoStats(
            user_commits=self.user_commits or 0,
            additions=self.additions or 0,
            deletions=self.deletions or 0,
        )

    @property
    def complete(self) -> bool:
        return None not in (
            self.commit_count,
            self.user_commits,
            self.additions,
            self.deletions,
        )

    def to_line(self, key: str) -> str:
        return (
            f"{key} {self.commit_count} {self.user_commits} "
            f"{self.additions} {self.deletions}"
        )


def parse_cache(text: str) -> dict[str, CacheRecord]:
    """
    Parse cache file contents, skipping blank and short lines.

    Args:
        text: Whole cache file.

    Return:
        dict[str, CacheRecord]: Records by repository hash.

    """

    records: dict[str, CacheRecord] = {}

    for line in text.splitlines():
        parts: list[str] = line.split()
        if len(parts) < CACHE_FIELDS:
            continue

        key, commits, user_commits, additions, deletions = parts[:CACHE_FIELDS]
        records[key] = CacheRecord(
            commit_count=parse_int(commits),
            user_commits=parse_int(user_commits),
            additions=parse_int(additions),
            deletions=parse_int(deletions),
        )

    return records


class StatsCache:
    """
    Per-user store of repository totals keyed by hashed repository name.

    Records are read once with `load`, staged with `record` while a run
    proceeds, and written back together with `flush`. Only staged records
    are written, so repositories not seen this run drop out of the file.
    """

    def __init__(self, path: Path, hash_key: bytes | None = None) -> None:
        self.path = path
        self.hash_key = hash_key
        self.cached: dict[str, CacheRecord] = {}
        self.staged: dict[str, CacheRecord] = {}

    def load(self) -> dict[str, CacheRecord]:
        """
        Read a user's cached statistics.

        A missing or unreadable file means no cached records.

        Return:
            dict[str, CacheRecord]: Cached records by repository hash.

        """

        try:
            text: str = self.path.read_text(encoding=ENCODING)
        except FileNotFoundError:
            text = ""
        except (OSError, UnicodeDecodeError) as e:
            logger.warning("Could not read cache {}: {}", self.path, e)
            text = ""

        self.cached = parse_cache(text)
        logger.debug("Loaded {} cached repos", len(self.cached))
        return self.cached

    def key_for(self, name_with_owner: str) -> str:
        return hash_repo(name_with_owner, self.hash_key)

    def lookup(self, name_with_owner: str) -> CacheRecord | None:
        return self.cached.get(self.key_for(name_with_owner))

    @staticmethod
    def is_fresh(record: CacheRecord | None, commit_count: int) -> bool:
        """
        Check whether a cached record still describes a repository.

        The commit count never decreases while history is only appended,
        so an equal count means nothing changed since the record was made.

        Args:
            record:       Cached record, if any.
            commit_count: Repository's current commit count.

        Return:
            bool: `True` if the record can be reused without a scan.

        """

        return (
            record is not None
            and record.complete
            and record.commit_count == commit_count
        )

    def put(self, key: str, record: CacheRecord) -> None:
        self.staged[key] = record

    def record(self, name_with_owner: str, commit_count: int, stats: RepoStats) -> None:
        """
        Stage a repository's totals to be written by `flush`.

        Args:
            name_with_owner: Qualified repository name.
            commit_count:    Commit count the totals belong to.
            stats:           Repository totals.

        """

        self.put(
            self.key_for(name_with_owner),
            CacheRecord(
                commit_count=commit_count,
                user_commits=stats.user_commits,
                additions=stats.additions,
                deletions=stats.deletions,
            ),
        )

    def flush(self) -> bool:
        """
        Overwrite the cache file with every staged record.

        Writes to a sibling temporary file first and swaps it in, so a
        failed write never leaves a half-written cache behind.

        Return:
            bool: `False` if the cache could not be written.

        """

        tmp: Path = self.path.with_name(f"{self.path.name}.tmp")
        text: str = "\n".join(
            record.to_line(key) for key, record in self.staged.items()
        )

        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            tmp.write_text(text, encoding=ENCODING)
            tmp.replace(self.path)
        except OSError as o:
            logger.error("Failed to write cache: {}", o)
            return False

        logger.debug("Wrote {} repos to cache", len(self.staged))
        return True
