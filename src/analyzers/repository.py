"""
Repository Commit Sampling Module.

Collects what the evaluator needs for one repository: the exact commit count
and a packaged random sample of its commits. Handles the empty-repository
short-circuit and degrades to an empty sample when identifiers cannot be listed.
"""

from typing import Optional

from config import logger
from exceptions import TransportFailure
from analyzers.counter import CommitCounter
from analyzers.diff_packager import DiffPackager
from analyzers.models import CommitSampleData
from analyzers.sampler import CommitSampler
from miners.base import RepositoryMiner
from miners.models import RepositoryIdentity


class CommitAnalyzer:
    """
    Per-repository sampling pipeline.

    Counts commits, enumerates their identifiers, draws an unbiased sample and
    packages the sampled diffs.

    Attributes:
        counter (CommitCounter): Exact commit counter
        sampler (CommitSampler): Unbiased sampler
        packager (DiffPackager): Diff packager
        sample_size (int): Commits sampled per repository
        early_stop_threshold (int): Identifier enumeration bound, 0 disables
        early_stop_max_sample (int): Early stop applies only to samples this small
    """

    def __init__(
        self,
        miner: RepositoryMiner,
        sample_size: int = 5,
        diff_lines_limit: int = 100,
        sampler: Optional[CommitSampler] = None,
        early_stop_threshold: int = 0,
        early_stop_max_sample: int = 10,
    ):
        """
        Initialize the commit analyzer.

        Args:
            miner (RepositoryMiner): Source of commit listings and details
            sample_size (int): Commits sampled per repository
            diff_lines_limit (int): Diff line budget per sampled commit
            sampler (Optional[CommitSampler]): Sampler, a strong-random one by default
            early_stop_threshold (int): Stop enumerating identifiers past this
                many, 0 samples the whole population
            early_stop_max_sample (int): Largest sample size the early stop applies to
        """
        self.counter = CommitCounter(miner)
        self.sampler = sampler or CommitSampler()
        self.packager = DiffPackager(miner, diff_lines_limit)
        self.sample_size = sample_size
        self.early_stop_threshold = early_stop_threshold
        self.early_stop_max_sample = early_stop_max_sample

    def _stop_after(self, commit_count: int) -> Optional[int]:
        if (
            self.early_stop_threshold > 0
            and self.sample_size <= self.early_stop_max_sample
            and commit_count > self.early_stop_threshold
        ):
            return self.early_stop_threshold
        return None

    def collect(
        self, repository: RepositoryIdentity, with_samples: bool = True
    ) -> CommitSampleData:
        """
        Count and sample a repository's commits.

        Args:
            repository (RepositoryIdentity): Repository to analyze
            with_samples (bool): Whether to list, sample and package commits
                after counting them

        Returns:
            CommitSampleData: Commit count and packaged samples

        Raises:
            TransportFailure: If the commits cannot be counted
        """
        owner, name = repository.owner, repository.name
        commit_count = self.counter.count(owner, name)

        if not with_samples:
            return CommitSampleData(repository_name=name, commit_count=commit_count)

        if commit_count == 0 or self.sample_size == 0:
            return CommitSampleData(
                repository_name=name,
                commit_count=commit_count,
                requested_sample_size=self.sample_size,
            )

        stop_after = self._stop_after(commit_count)
        try:
            identifiers = self.counter.list_identifiers(
                owner, name, limit=commit_count, stop_after=stop_after
            )
        except TransportFailure as e:
            logger.warning(
                {
                    "message": "Failed to list commit identifiers, proceeding with no samples",
                    "repository": repository.full_name,
                    "commit_count": commit_count,
                    "error": str(e),
                }
            )
            identifiers = []

        population_truncated = (
            stop_after is not None and 0 < len(identifiers) < commit_count
        )
        if population_truncated:
            logger.warning(
                {
                    "message": "Sampling from a truncated commit population",
                    "repository": repository.full_name,
                    "population": len(identifiers),
                    "commit_count": commit_count,
                }
            )

        selected = self.sampler.sample(identifiers, self.sample_size)
        sampled_commits = self.packager.package_all(owner, name, selected)

        if len(sampled_commits) < min(self.sample_size, commit_count):
            logger.warning(
                {
                    "message": "Packaged fewer samples than requested",
                    "repository": repository.full_name,
                    "requested": min(self.sample_size, commit_count),
                    "packaged": len(sampled_commits),
                }
            )

        logger.info(
            {
                "message": "Collected commit samples",
                "repository": repository.full_name,
                "commit_count": commit_count,
                "analyzed": len(sampled_commits),
            }
        )
        return CommitSampleData(
            repository_name=name,
            commit_count=commit_count,
            sampled_commits=sampled_commits,
            requested_sample_size=self.sample_size,
            population_truncated=population_truncated,
        )
