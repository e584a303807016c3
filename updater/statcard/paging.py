"""
Cursor-based pagination over GraphQL connections.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from loguru import logger

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator


@dataclass(frozen=True)
class Page:
    """
    One page of a paginated query.
    """

    items: list[dict[str, Any]] = field(default_factory=list)
    end_cursor: str | None = None
    has_next_page: bool = False

    @classmethod
    def from_connection(cls, connection: dict[str, Any]) -> Page:
        """
        Read a GraphQL connection (`edges` and `pageInfo`) into a page.

        Args:
            connection: Connection object from a query response.

        Return:
            Page: Nodes of the connection plus its continuation cursor.

        """

        info: dict[str, Any] = connection.get("pageInfo") or {}
        return cls(
            items=[edge["node"] for edge in connection.get("edges") or []],
            end_cursor=info.get("endCursor"),
            has_next_page=bool(info.get("hasNextPage")),
        )


def paginate(
    fetch_page: Callable[[str | None], Page],
    *,
    max_pages: int | None = None,
    label: str = "items",
) -> Iterator[dict[str, Any]]:
    """
    Lazily yield every item across all pages of a query.

    Pages are requested strictly in cursor order, starting with no cursor.
    Errors raised by `fetch_page` are not caught.

    Args:
        fetch_page: Runs one page request for the given cursor.
        max_pages:  Stop after this many pages, unbounded if `None`.
        label:      Name of the items for progress messages.

    Yields:
        dict[str, Any]: Items in the order the source returns them.

    """

    cursor: str | None = None
    pages: int = 0
    fetched: int = 0

    while max_pages is None or pages < max_pages:
        page: Page = fetch_page(cursor)
        pages += 1
        fetched += len(page.items)
        logger.debug("Fetched {} {}...", fetched, label)

        yield from page.items

        if not page.has_next_page:
            return

        cursor = page.end_cursor
