"""
Tests for the history module.
"""

import pytest

from statcard.graphql import QueryError
from statcard.history import HistoryScanner, RepoStats, commit_author, scan_history
from statcard.repos import Repo

from tests.helpers import (
    FakeClient,
    commit_node,
    failing,
    history_response,
    paged_history,
)


class TestRepoStats:
    """Test the totals value type."""

    def test_addition(self):
        total = RepoStats(1, 10, 2) + RepoStats(2, 5, 1)
        assert total == RepoStats(3, 15, 3)

    def test_zero(self):
        assert RepoStats.ZERO == RepoStats(0, 0, 0)


class TestCommitAuthor:
    """Test reading the attributed login of a commit."""

    def test_user_login(self):
        assert commit_author(commit_node("u")) == "u"

    def test_unresolved_user(self):
        assert commit_author(commit_node(None)) is None

    def test_missing_author(self):
        assert commit_author({"additions": 1, "deletions": 1, "author": None}) is None


class TestScanHistory:
    """Test summing a user's commits over history pages."""

    def test_counts_only_matching_login(self):
        client = FakeClient(
            paged_history(
                [
                    [commit_node("u", 10, 2), commit_node("other", 100, 50)],
                    [commit_node(None, 7, 7), commit_node("u", 5, 1)],
                ]
            )
        )

        stats = scan_history(client, "u", "r", "u")

        assert stats == RepoStats(user_commits=2, additions=15, deletions=3)
        assert len(client.calls) == 2

    def test_login_match_is_exact(self):
        client = FakeClient(paged_history([[commit_node("U"), commit_node("u2")]]))
        assert scan_history(client, "u", "r", "u") == RepoStats.ZERO

    def test_query_variables(self):
        client = FakeClient(paged_history([[], []]))
        scan_history(client, "owner", "name", "u")

        assert client.calls[0] == {
            "owner": "owner",
            "name": "name",
            "first": 100,
            "cursor": None,
        }
        assert client.calls[1]["cursor"] == "1"

    def test_no_default_branch_skips_request(self):
        client = FakeClient(failing)
        stats = scan_history(client, "u", "r", "u", has_default_branch=False)

        assert stats == RepoStats.ZERO
        assert client.calls == []

    def test_branch_disappearing_stops_walk(self):
        responses = [
            history_response([commit_node("u", 3, 1)], "1", True),
            {"repository": {"defaultBranchRef": None}},
        ]
        client = FakeClient(lambda query, variables: responses[len(client.calls) - 1])

        assert scan_history(client, "u", "r", "u") == RepoStats(1, 3, 1)
        assert len(client.calls) == 2

    def test_malformed_page_stops_walk(self):
        responses = [
            history_response([commit_node("u", 3, 1)], "1", True),
            {"repository": {"defaultBranchRef": {"target": {}}}},
        ]
        client = FakeClient(lambda query, variables: responses[len(client.calls) - 1])

        assert scan_history(client, "u", "r", "u") == RepoStats(1, 3, 1)

    def test_missing_repository_returns_zero(self):
        client = FakeClient(lambda query, variables: {"repository": None})
        assert scan_history(client, "u", "r", "u") == RepoStats.ZERO

    def test_caps_at_ten_thousand_commits(self):
        # 15,000 commits in 150 pages of 100
        pages = [[commit_node("u", 2, 1)] * 100 for _ in range(150)]
        client = FakeClient(paged_history(pages))

        stats = scan_history(client, "u", "r", "u")

        assert stats == RepoStats(user_commits=10_000, additions=20_000, deletions=10_000)
        assert len(client.calls) == 100

    def test_custom_page_cap(self):
        pages = [[commit_node("u")] for _ in range(5)]
        client = FakeClient(paged_history(pages))

        assert scan_history(client, "u", "r", "u", max_pages=2).user_commits == 2

    def test_error_propagates(self):
        with pytest.raises(QueryError):
            scan_history(FakeClient(failing), "u", "r", "u")


class TestHistoryScanner:
    """Test the scanner bound to a client and login."""

    def test_scans_repo_by_owner_and_name(self):
        client = FakeClient(paged_history([[commit_node("me", 4, 2)]]))
        scanner = HistoryScanner(client, "me")

        stats = scanner(Repo("org/tool", commit_count=1))

        assert stats == RepoStats(1, 4, 2)
        assert client.calls[0]["owner"] == "org"
        assert client.calls[0]["name"] == "tool"

    def test_repo_without_branch(self):
        client = FakeClient(failing)
        scanner = HistoryScanner(client, "me")

        assert scanner(Repo("org/empty", has_default_branch=False)) == RepoStats.ZERO
        assert client.calls == []
