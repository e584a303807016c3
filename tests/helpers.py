"""
Fakes and response builders shared by the tests.
"""

from __future__ import annotations

from typing import Any

from statcard.graphql import QueryError


class FakeClient:
    """Stand-in for GraphQLClient that answers from a handler function."""

    def __init__(self, handler):
        self.handler = handler
        self.calls: list[dict[str, Any]] = []

    def query(self, query: str, variables: dict[str, Any]) -> dict[str, Any]:
        self.calls.append(dict(variables))
        return self.handler(query, variables)


def commit_node(login: str | None, additions: int = 1, deletions: int = 0) -> dict:
    return {
        "additions": additions,
        "deletions": deletions,
        "author": {"user": {"login": login} if login else None},
    }


def connection(nodes: list[dict], cursor: str | None, has_next: bool) -> dict:
    return {
        "edges": [{"node": node} for node in nodes],
        "pageInfo": {"endCursor": cursor, "hasNextPage": has_next},
    }


def history_response(nodes: list[dict], cursor: str | None, has_next: bool) -> dict:
    return {
        "repository": {
            "defaultBranchRef": {
                "target": {"history": connection(nodes, cursor, has_next)}
            }
        }
    }


def paged_history(pages: list[list[dict]]):
    """Handler serving history pages, with the page index as cursor."""

    def handler(query, variables):
        index = int(variables["cursor"]) if variables["cursor"] else 0
        has_next = index + 1 < len(pages)
        return history_response(pages[index], str(index + 1), has_next)

    return handler


def failing(query, variables):
    raise QueryError("GraphQL request failed: 502 Bad Gateway")


