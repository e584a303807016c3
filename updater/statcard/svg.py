"""
Functions for updating the SVG profile cards.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from loguru import logger
from lxml.etree import (
    ParseError,
    parse as lxml_parse,
)

from .consts import PAD_WIDTHS

if TYPE_CHECKING:
    from pathlib import Path

    from lxml.etree import _Element as LxmlElem, _ElementTree as LxmlTree

    from .config import Config
    from .profile import ProfileStats


class RenderError(Exception):
    """
    Descriptive exception for profile card update failures.
    """


def update_profile_cards(config: Config, stats: ProfileStats) -> None:
    """
    Update every configured card with new data.

    Args:
        config: Run configuration naming the cards.
        stats:  Statistics to write.

    """

    for svg_name in config.svg_files:
        _update_svg(config.svg_dir / svg_name, stats)


def _update_svg(svg_path: Path, stats: ProfileStats) -> None:
    """
    Update SVG file with new data.

    Args:
        svg_path: Image to be updated.
        stats:    Statistics to write.

    """

    try:
        tree: LxmlTree = lxml_parse(str(svg_path), parser=None)
        _update_elements(tree.getroot(), stats)
        tree.write(str(svg_path), encoding="utf-8", xml_declaration=True)  # type: ignore[reportCallIssue]
    except (OSError, ParseError, ValueError) as e:
        msg = f"SVG update failed for {svg_path.name}: {e!s}"
        raise RenderError(msg) from e

    logger.info("Updated {}", svg_path.name)


def _fmt_thousands(v: int) -> str:
    return f"{v:,}"


def dot_leader(width: int, value: str) -> str:
    """
    Dots that pad `value` out to `width` visible characters.

    Args:
        width: Target width of value plus leader.
        value: Text shown after the leader.

    Return:
        str: Leader text, with a space either side when long enough.

    """

    dots: int = max(0, width - len(value))
    if dots == 0:
        return ""
    if dots == 1:
        return " "
    if dots == 2:
        return ". "

    return f" {'.' * dots} "


def _find(root: LxmlElem, element_id: str) -> Any:
    return root.find(path=f".//*[@id='{element_id}']", namespaces=None)


def _set_text(root: LxmlElem, element_id: str, text: str) -> None:
    el: Any = _find(root, element_id)
    if el is None:
        msg = f"Invalid or nonexistent element_id: {element_id!r}"
        raise ValueError(msg)

    el.text = text

    width: int | None = PAD_WIDTHS.get(element_id)
    dots_el: Any = _find(root, f"{element_id}_dots")
    if width is not None and dots_el is not None:
        dots_el.text = dot_leader(width, text)


def _update_elements(root: LxmlElem, stats: ProfileStats) -> None:
    """
    Batch update all statistics.

    Args:
        root:  Root XML element of image.
        stats: Statistics to write.

    """

    _set_text(root, "age_data", stats.uptime)
    _set_text(root, "commit_data", _fmt_thousands(stats.commits))
    _set_text(root, "star_data", _fmt_thousands(stats.stars))
    _set_text(root, "repo_data", _fmt_thousands(stats.repos))
    _set_text(root, "contrib_data", _fmt_thousands(stats.contributed))
    _set_text(root, "follower_data", _fmt_thousands(stats.followers))
    _set_text(root, "loc_data", _fmt_thousands(stats.loc))
    _set_text(root, "loc_add", _fmt_thousands(stats.loc_add))
    _set_text(root, "loc_del", _fmt_thousands(stats.loc_del))
