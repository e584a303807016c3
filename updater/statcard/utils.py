"""
General utilities used by the script.
"""

from __future__ import annotations

import sys
from datetime import UTC, date, datetime
from hashlib import sha256
from hmac import new as new_hash

from dateutil.relativedelta import relativedelta
from loguru import logger

from .consts import ENCODING


def calculate_age(start: date | datetime, now: datetime | None = None) -> str:
    """
    Calculate time since `start`.

    Args:
        start: Date to count from. Naive values are taken as UTC.
        now:   Point to count to. Defaults to the current UTC time.

    Returns:
        str: Elapsed years, months and days.

    """

    if not isinstance(start, datetime):
        start = datetime(start.year, start.month, start.day, tzinfo=UTC)
    elif start.tzinfo is None:
        start = start.replace(tzinfo=UTC)

    diff = relativedelta(now or datetime.now(tz=UTC), start)
    return (
        f"{diff.years} year{'s' if diff.years != 1 else ''}, "
        f"{diff.months} month{'s' if diff.months != 1 else ''}, "
        f"{diff.days} day{'s' if diff.days != 1 else ''}"
    )


def configure_logging(level: str = "INFO") -> None:
    """
    Replace loguru's default sink with a compact one on stderr.

    Args:
        level: Minimum level to emit.

    """

    logger.remove()
    logger.add(
        sys.stderr,
        level=level,
        format="<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | {message}",
    )


def from_iso_z(s: str) -> datetime:
    """
    Parse an ISO8601 Z string into a UTC-aware datetime.

    Args:
        s: String to be converted to a `datetime` object.

    Return:
        datetime: Object corresponding to IS8601 Z string.

    """

    return datetime.fromisoformat(s.replace("Z", "+00:00")).astimezone(UTC)


def hash_repo(name: str, key: bytes | None = None) -> str:
    """
    Create a one-way hash from a repository name.

    Args:
        name: Qualified repo name to hash.
        key:  Secret for a keyed `hmac` hash. Plain SHA-256 if `None`.

    Return:
        str: Hex digest.

    """

    if key is None:
        return sha256(name.encode(ENCODING)).hexdigest()

    return new_hash(key, name.encode(ENCODING), sha256).hexdigest()


def parse_int(s: str) -> int | None:
    try:
        return int(s)
    except ValueError:
        return None
