"""
Shared test configuration.

Seeds the environment before the ``config`` module is imported, and provides an
in-memory repository miner.
"""

import os
import tempfile

os.environ.setdefault("GITHUB_ORGANIZATION", "test-org")
os.environ.setdefault("OPENAI_API_KEY", "test-key")
os.environ.setdefault("LOG_DIR", tempfile.mkdtemp(prefix="commit-ranker-logs-"))

from typing import Dict, List, Optional, Set, Tuple  # noqa: E402

import pytest  # noqa: E402

from exceptions import EmptyRepository, TransportFailure  # noqa: E402
from miners.base import RepositoryMiner  # noqa: E402
from miners.models import CommitDetail, RepositoryIdentity  # noqa: E402


class FakeMiner(RepositoryMiner):
    """In-memory miner with zero-based page-number cursors."""

    def __init__(
        self,
        repositories: List[str],
        commits: Dict[str, List[str]],
        page_size: int = 3,
        empty: Optional[Set[str]] = None,
        failing_repos: Optional[Set[str]] = None,
        failing_commits: Optional[Set[str]] = None,
        patches: Optional[Dict[str, List[str]]] = None,
    ):
        self.repositories = repositories
        self.commits = commits
        self.page_size = page_size
        self.empty = empty or set()
        self.failing_repos = failing_repos or set()
        self.failing_commits = failing_commits or set()
        self.patches = patches or {}
        self.page_calls: List[Tuple[str, int]] = []
        self.commit_calls: List[str] = []
        self.rate_limit_checks: List[str] = []

    @staticmethod
    def _page(items, cursor, page_size):
        page = cursor or 0
        chunk = items[page * page_size : (page + 1) * page_size]
        next_cursor = page + 1 if (page + 1) * page_size < len(items) else None
        return chunk, next_cursor

    def list_repositories_page(self, organization, cursor, page_size):
        identities = [
            RepositoryIdentity(owner=organization, name=name)
            for name in self.repositories
        ]
        return self._page(identities, cursor, page_size)

    def list_commits_page(self, owner, repo_name, cursor, page_size):
        self.page_calls.append((repo_name, cursor or 0))
        if repo_name in self.empty:
            raise EmptyRepository(f"{owner}/{repo_name}")
        if repo_name in self.failing_repos:
            raise TransportFailure("boom", repository=repo_name, status=500)
        return self._page(self.commits.get(repo_name, []), cursor, page_size)

    def get_commit(self, owner, repo_name, sha):
        self.commit_calls.append(sha)
        if sha in self.failing_commits:
            raise TransportFailure(f"cannot fetch {sha}", repository=repo_name, status=502)
        return CommitDetail(
            sha=sha,
            message=f"message for {sha}",
            patches=self.patches.get(sha, [f"@@ -1 +1 @@\n-old {sha}\n+new {sha}"]),
        )

    def check_rate_limit(self, check_name=None):
        self.rate_limit_checks.append(check_name)


@pytest.fixture
def fake_miner_factory():
    """Build in-memory miners."""
    return FakeMiner
