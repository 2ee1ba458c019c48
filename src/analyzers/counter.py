"""
Commit Counting Module.

Counts and enumerates a repository's commits by following the commit listing
to its last page. Counting is always exact; there is no estimated fast path.
"""

from typing import List, Optional

from config import logger
from exceptions import EmptyRepository
from miners.base import RepositoryMiner
from miners.pagination import iterate_pages


class CommitCounter:
    """
    Exact commit counter backed by a repository miner.

    Attributes:
        miner (RepositoryMiner): Source of commit listing pages.
    """

    def __init__(self, miner: RepositoryMiner):
        self.miner = miner

    def _pages(self, owner: str, repo_name: str):
        return iterate_pages(
            lambda cursor, size: self.miner.list_commits_page(
                owner, repo_name, cursor, size
            ),
            self.miner.page_size,
        )

    def count(self, owner: str, repo_name: str) -> int:
        """
        Count every commit of a repository.

        Args:
            owner (str): Repository owner
            repo_name (str): Repository name

        Returns:
            int: Total number of commits, 0 for an empty repository

        Raises:
            TransportFailure: If any page cannot be fetched
        """
        try:
            return sum(1 for _ in self._pages(owner, repo_name))
        except EmptyRepository:
            logger.info(
                {
                    "message": "Repository is empty",
                    "repository": f"{owner}/{repo_name}",
                }
            )
            return 0

    def list_identifiers(
        self,
        owner: str,
        repo_name: str,
        limit: Optional[int] = None,
        stop_after: Optional[int] = None,
    ) -> List[str]:
        """
        Enumerate commit identifiers in listing order.

        Enumeration stops at the end of the listing, once ``limit`` identifiers
        are held, or once more than ``stop_after`` identifiers are held. The
        ``stop_after`` bound makes any later sample an approximation over the
        first part of the history rather than the whole population.

        Args:
            owner (str): Repository owner
            repo_name (str): Repository name
            limit (Optional[int]): Known population size
            stop_after (Optional[int]): Early-stop threshold

        Returns:
            List[str]: Commit identifiers

        Raises:
            TransportFailure: If any page cannot be fetched
        """
        identifiers: List[str] = []
        try:
            for sha in self._pages(owner, repo_name):
                identifiers.append(sha)
                if limit is not None and len(identifiers) >= limit:
                    break
                if stop_after is not None and len(identifiers) > stop_after:
                    break
        except EmptyRepository:
            return []
        return identifiers
