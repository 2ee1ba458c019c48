"""
Diff Packaging Module.

Fetches sampled commits and packages their message and patches into a
bounded-size diff snippet suitable for the qualitative evaluator.
"""

from typing import List, Optional, Sequence

from config import logger
from exceptions import TransportFailure
from miners.base import RepositoryMiner
from analyzers.models import SampledCommit

FILE_SEPARATOR = "---"
TRUNCATION_MARKER = "... (diff truncated due to line limit)"


def truncate_patches(patches: Sequence[str], line_limit: int) -> str:
    """
    Join per-file patches with a separator line and cut them at a line budget.

    Separator lines do not count against the budget. Once ``line_limit``
    content lines have been emitted and more content remains, the truncation
    marker is appended and the rest is discarded. A non-positive limit keeps
    everything.

    Args:
        patches (Sequence[str]): Per-file patches in service order
        line_limit (int): Maximum number of patch lines to keep

    Returns:
        str: Packaged diff snippet
    """
    lines: List[str] = []
    emitted = 0
    for file_index, patch in enumerate(p for p in patches if p):
        if file_index > 0 and not 0 < line_limit <= emitted:
            lines.append(FILE_SEPARATOR)
        for line in patch.split("\n"):
            if 0 < line_limit <= emitted:
                lines.append(TRUNCATION_MARKER)
                return "\n".join(lines)
            lines.append(line)
            emitted += 1
    return "\n".join(lines)


class DiffPackager:
    """
    Builds sampled commits from commit details.

    Attributes:
        miner (RepositoryMiner): Source of commit details.
        line_limit (int): Diff line budget per commit.
    """

    def __init__(self, miner: RepositoryMiner, line_limit: int = 100):
        self.miner = miner
        self.line_limit = line_limit

    def package(
        self, owner: str, repo_name: str, sha: str, line_limit: Optional[int] = None
    ) -> SampledCommit:
        """
        Fetch one commit and package its message and truncated diff.

        Args:
            owner (str): Repository owner
            repo_name (str): Repository name
            sha (str): Commit identifier
            line_limit (Optional[int]): Overrides the packager's line budget

        Returns:
            SampledCommit: Packaged commit

        Raises:
            TransportFailure: If the commit cannot be fetched
        """
        limit = self.line_limit if line_limit is None else line_limit
        detail = self.miner.get_commit(owner, repo_name, sha)
        return SampledCommit(
            sha=sha,
            message=detail.message or "",
            diff_snippet=truncate_patches(detail.patches, limit),
        )

    def package_all(
        self, owner: str, repo_name: str, shas: Sequence[str]
    ) -> List[SampledCommit]:
        """
        Package every sampled commit, skipping the ones that cannot be fetched.

        Args:
            owner (str): Repository owner
            repo_name (str): Repository name
            shas (Sequence[str]): Sampled commit identifiers

        Returns:
            List[SampledCommit]: Packaged commits, possibly fewer than requested
        """
        packaged = []
        for sha in shas:
            try:
                packaged.append(self.package(owner, repo_name, sha))
            except TransportFailure as e:
                logger.warning(
                    {
                        "message": "Skipping commit, details could not be fetched",
                        "repository": f"{owner}/{repo_name}",
                        "sha": sha,
                        "error": str(e),
                    }
                )
        return packaged
