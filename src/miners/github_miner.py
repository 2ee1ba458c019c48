"""
GitHub Repository Data Mining Module.

This module handles page-by-page listing of organization repositories and
commits, and fetching of commit details from the GitHub REST API. Raw PyGithub
objects are transformed into Pydantic models; PyGithub and network errors are
translated into pipeline exceptions.
"""

from datetime import datetime, timezone
from typing import Any, List, Optional, Tuple

from github import Auth, Github, GithubException
from github.Commit import Commit
from github.Rate import Rate
from github.Repository import Repository
from requests.exceptions import RequestException

from config import settings, logger
from exceptions import EmptyRepository, TransportFailure
from miners.base import RepositoryMiner
from miners.models import CommitDetail, RepositoryIdentity

# GitHub answers 409 Conflict when listing commits of an uninitialized repository
EMPTY_REPOSITORY_STATUS = 409


class GitHubMiner(RepositoryMiner):
    """
    GitHubMiner is responsible for mining data from GitHub repositories.
    It lists repositories and commits one page at a time and fetches commit
    details, transforming them into Pydantic models.
    """

    def __init__(
        self,
        github_token: Optional[str] = None,
        page_size: int = 100,
        github: Optional[Github] = None,
    ):
        """Initialize GitHub miner with authentication and configuration.

        Args:
            github_token (Optional[str]): GitHub API token, anonymous access when None.
            page_size (int): Items requested per listing page (GitHub caps it at 100).
            github (Optional[Github]): Preconfigured client, mainly for tests.
        """
        self.page_size = page_size
        if github is not None:
            self.github = github
        else:
            auth = Auth.Token(github_token) if github_token else None
            self.github = Github(auth=auth, per_page=page_size)

    def _get_repo(self, owner: str, repo_name: str) -> Repository:
        # Lazy repositories skip the metadata request
        return self.github.get_repo(f"{owner}/{repo_name}", lazy=True)

    def _next_cursor(self, page: int, items: List[Any], page_size: int) -> Optional[int]:
        # A short page is the last page
        if len(items) < page_size:
            return None
        return page + 1

    def check_rate_limit(self, check_name: Optional[str] = None) -> None:
        """
        Check and log the GitHub API rate limit status.

        The check never blocks or raises; an exhausted limit surfaces as the
        failure of the next request.

        Args:
            check_name (Optional[str]): Identifier for the rate limit check point.
        """
        try:
            rate_limit: Rate = self.github.get_rate_limit().resources.core
        except (GithubException, RequestException) as e:
            logger.warning(
                {
                    "message": "Could not read GitHub API rate limit",
                    "error": str(e),
                }
            )
            return

        remaining = rate_limit.remaining
        reset_time = rate_limit.reset.replace(tzinfo=timezone.utc)
        now = datetime.now(timezone.utc)

        logger.info(
            {
                "message": f"{check_name} API rate limit status",
                "remaining_points": remaining,
                "total_points": rate_limit.limit,
                "reset_time": reset_time.isoformat(),
                "minutes_to_reset": (reset_time - now).total_seconds() / 60,
            }
        )

        # If less than 10% of rate limit remains, log a warning
        if 0 < remaining < (rate_limit.limit * 0.1):
            logger.warning(
                {
                    "message": "GitHub API rate limit running low",
                    "remaining_points": remaining,
                    "reset_time": reset_time.isoformat(),
                }
            )

        if remaining == 0:
            logger.critical(
                {
                    "message": "GitHub API rate limit exhausted",
                    "reset_time": reset_time.isoformat(),
                    "wait_time_seconds": (reset_time - now).total_seconds(),
                }
            )

    def list_repositories_page(
        self, organization: str, cursor: Optional[int], page_size: int
    ) -> Tuple[List[RepositoryIdentity], Optional[int]]:
        """List one page of an organization's repositories.

        Args:
            organization (str): Organization login.
            cursor (Optional[int]): Zero-based page number, None for the first page.
            page_size (int): Items per page.

        Returns:
            Tuple[List[RepositoryIdentity], Optional[int]]: Repositories and next page.

        Raises:
            TransportFailure: If the organization or the page cannot be fetched.
        """
        page = cursor or 0
        try:
            repos = (
                self.github.get_organization(organization).get_repos().get_page(page)
            )
        except GithubException as e:
            raise TransportFailure(
                f"failed to list repositories for organization {organization}: {e}",
                status=e.status,
            ) from e
        except RequestException as e:
            raise TransportFailure(
                f"failed to list repositories for organization {organization}: {e}"
            ) from e

        identities = [
            RepositoryIdentity(owner=organization, name=repo.name)
            for repo in repos
            if repo.name
        ]
        return identities, self._next_cursor(page, repos, page_size)

    def list_commits_page(
        self, owner: str, repo_name: str, cursor: Optional[int], page_size: int
    ) -> Tuple[List[str], Optional[int]]:
        """List one page of commit SHAs on the default branch.

        Args:
            owner (str): Repository owner.
            repo_name (str): Repository name.
            cursor (Optional[int]): Zero-based page number, None for the first page.
            page_size (int): Items per page.

        Returns:
            Tuple[List[str], Optional[int]]: Commit SHAs and next page.

        Raises:
            EmptyRepository: If GitHub reports the repository as empty.
            TransportFailure: If the page cannot be fetched.
        """
        full_name = f"{owner}/{repo_name}"
        page = cursor or 0
        try:
            commits = self._get_repo(owner, repo_name).get_commits().get_page(page)
        except GithubException as e:
            if e.status == EMPTY_REPOSITORY_STATUS:
                raise EmptyRepository(full_name) from e
            raise TransportFailure(
                f"failed to list commits for {full_name}: {e}",
                repository=full_name,
                status=e.status,
            ) from e
        except RequestException as e:
            raise TransportFailure(
                f"failed to list commits for {full_name}: {e}", repository=full_name
            ) from e

        shas = [commit.sha for commit in commits if commit.sha]
        return shas, self._next_cursor(page, commits, page_size)

    def get_commit(self, owner: str, repo_name: str, sha: str) -> CommitDetail:
        """Fetch a commit's message and per-file patches.

        Files without a textual patch (binary or oversized changes) are left out.

        Args:
            owner (str): Repository owner.
            repo_name (str): Repository name.
            sha (str): Commit SHA.

        Returns:
            CommitDetail: Message and patches in the order GitHub returns them.

        Raises:
            TransportFailure: If the commit cannot be fetched.
        """
        full_name = f"{owner}/{repo_name}"
        try:
            commit: Commit = self._get_repo(owner, repo_name).get_commit(sha)
            message = commit.commit.message if commit.commit else None
            patches = [file.patch for file in commit.files if file.patch]
        except GithubException as e:
            raise TransportFailure(
                f"failed to get commit {sha} for {full_name}: {e}",
                repository=full_name,
                status=e.status,
            ) from e
        except RequestException as e:
            raise TransportFailure(
                f"failed to get commit {sha} for {full_name}: {e}", repository=full_name
            ) from e

        return CommitDetail(sha=sha, message=message or "", patches=patches)


def build_miner() -> GitHubMiner:
    """Create a GitHub miner from application settings."""
    token = settings.github_token.get_secret_value() if settings.github_token else None
    return GitHubMiner(token, settings.github_page_size)
