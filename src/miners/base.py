"""
Abstract Base Class for Repository Miners.

Defines the interface for repository data mining implementations.
All repository miners (GitHub, GitLab, etc.) should implement this interface.
"""

from abc import ABC, abstractmethod
from typing import Any, List, Optional, Tuple

from miners.models import CommitDetail, RepositoryIdentity
from miners.pagination import DEFAULT_PAGE_SIZE, paginate


class RepositoryMiner(ABC):
    """
    Abstract base class for repository miners.

    Defines the contract for listing repositories and commits and for
    fetching commit details from a hosting service. Listing operations
    are single-page; callers follow the returned cursor.

    Attributes:
        page_size (int): Upper bound of items per listing page
    """

    page_size: int = DEFAULT_PAGE_SIZE

    @abstractmethod
    def list_repositories_page(
        self, organization: str, cursor: Optional[Any], page_size: int
    ) -> Tuple[List[RepositoryIdentity], Optional[Any]]:
        """
        List one page of an organization's repositories.

        Args:
            organization (str): Organization name
            cursor (Optional[Any]): Page cursor, None for the first page
            page_size (int): Upper bound of items per page

        Returns:
            Tuple[List[RepositoryIdentity], Optional[Any]]: Page items and
                the next cursor, None when the listing is exhausted

        Raises:
            TransportFailure: If the page cannot be fetched
        """
        pass

    @abstractmethod
    def list_commits_page(
        self, owner: str, repo_name: str, cursor: Optional[Any], page_size: int
    ) -> Tuple[List[str], Optional[Any]]:
        """
        List one page of commit identifiers in the service's native order.

        Args:
            owner (str): Repository owner
            repo_name (str): Repository name
            cursor (Optional[Any]): Page cursor, None for the first page
            page_size (int): Upper bound of items per page

        Returns:
            Tuple[List[str], Optional[Any]]: Commit identifiers and the next
                cursor, None when the listing is exhausted

        Raises:
            EmptyRepository: If the repository has no commits yet
            TransportFailure: If the page cannot be fetched
        """
        pass

    @abstractmethod
    def get_commit(self, owner: str, repo_name: str, sha: str) -> CommitDetail:
        """
        Fetch a commit's message and per-file patches.

        Args:
            owner (str): Repository owner
            repo_name (str): Repository name
            sha (str): Commit identifier

        Returns:
            CommitDetail: Commit message and patches in service order

        Raises:
            TransportFailure: If the commit cannot be fetched
        """
        pass

    def list_repositories(self, organization: str) -> List[RepositoryIdentity]:
        """
        List every repository of an organization.

        Args:
            organization (str): Organization name

        Returns:
            List[RepositoryIdentity]: Repositories in listing order
        """
        return paginate(
            lambda cursor, size: self.list_repositories_page(organization, cursor, size),
            self.page_size,
        )

    def check_rate_limit(self, check_name: Optional[str] = None) -> None:
        """Log the service's rate limit status, if the service has one."""
        pass
