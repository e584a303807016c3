"""
Constants used by the script.
"""

from __future__ import annotations

from pathlib import Path

ENCODING: str = "utf-8"

REPO_PAGE_SIZE: int = 60
HISTORY_PAGE_SIZE: int = 100
MAX_HISTORY_PAGES: int = 100
HISTORY_LOG_EVERY: int = 5

REPO_AFFILIATIONS: list[str] = ["OWNER", "COLLABORATOR", "ORGANIZATION_MEMBER"]

# target visible width of a value plus its dot leader
PAD_WIDTHS: dict[str, int] = {
    "age_data": 49,
    "commit_data": 22,
    "star_data": 14,
    "repo_data": 7,
    "follower_data": 10,
    "loc_data": 15,
}

FILE_PATH: Path = Path(__file__).resolve()
ROOT_DIR: Path = FILE_PATH.parents[2]
SRC_DIR: Path = FILE_PATH.parent

CACHE_DIR: Path = Path(ROOT_DIR / "cache")
SVG_DIR: Path = Path(ROOT_DIR / ".github" / "assets")
SVG_FILES: tuple[str, ...] = ("dark.svg", "light.svg")
