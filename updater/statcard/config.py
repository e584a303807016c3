"""
Run configuration, read once from the environment at startup.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from hashlib import sha256
from os import environ
from pathlib import Path
from typing import TYPE_CHECKING

from dotenv import load_dotenv

from .consts import CACHE_DIR, ENCODING, SVG_DIR, SVG_FILES

if TYPE_CHECKING:
    from collections.abc import Mapping


class ConfigError(Exception):
    """
    Descriptive exception for missing or invalid configuration.
    """


@dataclass(frozen=True)
class Config:
    """
    Everything a run needs to know about its environment.

    Attributes:
        login:        Account whose contributions are being counted.
        access_token: Token used to authenticate API queries.
        hash_key:     Optional secret for keyed cache hashes.
        cache_dir:    Directory holding the per-account cache file.
        svg_dir:      Directory holding the profile cards.
        svg_files:    Profile card file names inside `svg_dir`.
        uptime_start: Date to count the age from, account creation if unset.
        log_level:    Minimum level of emitted log messages.

    """

    login: str
    access_token: str
    hash_key: bytes | None = None
    cache_dir: Path = CACHE_DIR
    svg_dir: Path = SVG_DIR
    svg_files: tuple[str, ...] = SVG_FILES
    uptime_start: date | None = None
    log_level: str = "INFO"

    @property
    def cache_path(self) -> Path:
        """
        Cache file for this account, named by a hash of the login.
        """

        return self.cache_dir / f"{sha256(self.login.encode(ENCODING)).hexdigest()}.txt"


def _require(env: Mapping[str, str], key: str) -> str:
    value: str = env.get(key, "").strip()
    if not value:
        msg = f"Missing required environment variable: {key}"
        raise ConfigError(msg)

    return value


def load_config(env: Mapping[str, str] | None = None) -> Config:
    """
    Build the run configuration from environment variables.

    Args:
        env: Mapping to read from. Defaults to `os.environ`
             after loading any `.env` file.

    Return:
        Config: Frozen configuration for this run.

    Raises:
        ConfigError: When a required variable is missing or malformed.

    """

    if env is None:
        load_dotenv()
        env = environ

    uptime_raw: str = env.get("UPTIME_START", "").strip()
    try:
        uptime_start: date | None = (
            date.fromisoformat(uptime_raw) if uptime_raw else None
        )
    except ValueError as v:
        msg = f"Invalid UPTIME_START {uptime_raw!r}: {v!s}"
        raise ConfigError(msg) from v

    hash_key: str = env.get("HASH_KEY", "")

    return Config(
        login=_require(env, "USERNAME"),
        access_token=_require(env, "ACCESS_TOKEN"),
        hash_key=hash_key.encode(ENCODING) if hash_key else None,
        cache_dir=Path(env.get("CACHE_DIR") or CACHE_DIR),
        svg_dir=Path(env.get("SVG_DIR") or SVG_DIR),
        uptime_start=uptime_start,
        log_level=env.get("LOG_LEVEL", "INFO").upper(),
    )
