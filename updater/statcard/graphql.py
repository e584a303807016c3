"""
GraphQL queries and the client that runs them.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from github import Github
from github.Auth import Token
from github.Consts import DEFAULT_BASE_URL
from github.GithubException import GithubException
from loguru import logger
from requests.exceptions import RequestException

if TYPE_CHECKING:
    from github.Requester import Requester

USER_QUERY: str = """
query($login: String!) {
  user(login: $login) {
    id
    createdAt
    followers {
      totalCount
    }
    contributionsCollection {
      contributionCalendar {
        totalContributions
      }
    }
  }
}
"""

REPO_QUERY: str = """
query($login: String!, $first: Int!, $cursor: String,
      $ownerAffiliations: [RepositoryAffiliation]) {
  user(login: $login) {
    repositories(first: $first, after: $cursor,
                 ownerAffiliations: $ownerAffiliations) {
      edges {
        node {
          nameWithOwner
          stargazers {
            totalCount
          }
          defaultBranchRef {
            target {
              ... on Commit {
                history {
                  totalCount
                }
              }
            }
          }
        }
      }
      pageInfo {
        endCursor
        hasNextPage
      }
    }
  }
}
"""

HISTORY_QUERY: str = """
query($owner: String!, $name: String!, $first: Int!, $cursor: String) {
  repository(owner: $owner, name: $name) {
    defaultBranchRef {
      target {
        ... on Commit {
          history(first: $first, after: $cursor) {
            edges {
              node {
                additions
                deletions
                author {
                  user {
                    login
                  }
                }
              }
            }
            pageInfo {
              endCursor
              hasNextPage
            }
          }
        }
      }
    }
  }
}
"""


class QueryError(Exception):
    """
    Descriptive exception for failed or rejected GraphQL queries.
    """


class GraphQLClient:
    """
    Run GraphQL queries against the Github API.

    Every call is a single blocking round trip. Nothing is retried.
    """

    def __init__(
        self,
        token: str,
        github: Github | None = None,
        base_url: str = DEFAULT_BASE_URL,
    ) -> None:
        # retry=None disables PyGithub's default GithubRetry
        self._github: Github = github or Github(
            auth=Token(token=token), base_url=base_url, per_page=100, retry=None
        )

    @property
    def requester(self) -> Requester:
        return self._github.requester

    def query(self, query: str, variables: dict[str, Any]) -> dict[str, Any]:
        """
        Execute a query and return its `data` payload.

        Args:
            query:     GraphQL document.
            variables: Values for the document's variables.

        Return:
            dict[str, Any]: The response's `data` object.

        Raises:
            QueryError: On transport failures and remote-reported errors.

        """

        try:
            _, response = self.requester.graphql_query(query=query, variables=variables)
        except (GithubException, RequestException) as e:
            logger.error("GraphQL request failed: {}", e)
            msg = f"GraphQL request failed: {e!s}"
            raise QueryError(msg) from e

        data: dict[str, Any] | None = response.get("data")
        if response.get("errors") or data is None:
            msg = f"GraphQL errors: {response.get('errors')!r}"
            raise QueryError(msg)

        return data
