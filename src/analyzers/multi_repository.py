"""
Multi-Repository Ranking Module.

This module coordinates the ranking of every repository of an organization.
It processes repositories strictly one at a time, handling:

- Commit counting and sampling per repository
- Qualitative evaluation of the samples, when an evaluator is configured
- Score aggregation and ranking
- Failure containment at repository granularity
- Publishing the ranking to the configured result sinks
"""

from typing import List, Optional, Sequence

from config import logger
from analyzers.models import (
    CommitSampleData,
    EvaluationStatus,
    QualitativeScore,
    RepositoryScore,
)
from analyzers.plugins.quality_evaluator import QualityEvaluatorPlugin
from analyzers.repository import CommitAnalyzer
from analyzers.scoring import NO_SAMPLES_SCORE, ScoreAggregator
from miners.base import RepositoryMiner
from miners.models import RepositoryIdentity
from report.base import ResultSink


class MultiRepositoryAnalyzer:
    """
    Coordinates the ranking of multiple GitHub repositories.

    The same pipeline serves plain ranking (no evaluator), LLM-scored ranking
    and any combination of presentation sinks.

    Attributes:
        miner (RepositoryMiner): Repository lister.
        analyzer (CommitAnalyzer): Per-repository count and sample collector.
        aggregator (ScoreAggregator): Overall score computation and ranking.
        evaluator (Optional[QualityEvaluatorPlugin]): Qualitative scorer.
        sinks (Sequence[ResultSink]): Receivers of the final ranking.
        organization (str): Organization to rank.
    """

    def __init__(
        self,
        miner: RepositoryMiner,
        analyzer: CommitAnalyzer,
        aggregator: ScoreAggregator,
        organization: str,
        evaluator: Optional[QualityEvaluatorPlugin] = None,
        sinks: Sequence[ResultSink] = (),
    ):
        """Initialize the multi-repository analyzer.

        Args:
            miner (RepositoryMiner): Repository lister.
            analyzer (CommitAnalyzer): Per-repository count and sample collector.
            aggregator (ScoreAggregator): Overall score computation and ranking.
            organization (str): Organization to rank.
            evaluator (Optional[QualityEvaluatorPlugin]): Qualitative scorer,
                None for plain commit-count ranking.
            sinks (Sequence[ResultSink]): Receivers of the final ranking.
        """
        self.miner = miner
        self.analyzer = analyzer
        self.aggregator = aggregator
        self.organization = organization
        self.evaluator = evaluator
        self.sinks = list(sinks)

    async def _evaluate(self, sample_data: CommitSampleData) -> RepositoryScore:
        """Score a repository whose commits were counted and sampled."""
        if sample_data.commit_count == 0:
            logger.info(
                {
                    "message": "Repository has 0 commits, skipping evaluation",
                    "repository": sample_data.repository_name,
                }
            )
            return self.aggregator.score(sample_data, None, EvaluationStatus.EMPTY)

        if self.evaluator is None:
            return self.aggregator.score(sample_data, None, EvaluationStatus.SKIPPED)

        if not sample_data.sampled_commits:
            logger.warning(
                {
                    "message": "No sampled commits to analyze, assigning low scores",
                    "repository": sample_data.repository_name,
                }
            )
            return self.aggregator.score(
                sample_data, NO_SAMPLES_SCORE, EvaluationStatus.NO_SAMPLES
            )

        try:
            score: QualitativeScore = await self.evaluator.evaluate(
                sample_data.repository_name,
                sample_data.commit_count,
                list(sample_data.sampled_commits),
            )
        except Exception as e:
            logger.error(
                {
                    "message": "Evaluation failed, assigning default scores",
                    "repository": sample_data.repository_name,
                    "error": str(e),
                    "error_type": type(e).__name__,
                }
            )
            return self.aggregator.score(
                sample_data, None, EvaluationStatus.EVALUATION_FAILED
            )

        return self.aggregator.score(sample_data, score, EvaluationStatus.OK)

    async def analyze_repository(self, repository: RepositoryIdentity) -> RepositoryScore:
        """
        Count, sample, evaluate and score a single repository.

        Never raises: failures are recorded in the returned score.

        Args:
            repository (RepositoryIdentity): Repository to score.

        Returns:
            RepositoryScore: Result record for the repository.
        """
        try:
            self.miner.check_rate_limit(repository.full_name)
            # Plain ranking only needs the commit count
            sample_data = self.analyzer.collect(
                repository, with_samples=self.evaluator is not None
            )
        except Exception as e:
            logger.error(
                {
                    "message": "Failed to collect commits, recording as errored",
                    "repository": repository.full_name,
                    "error": str(e),
                    "error_type": type(e).__name__,
                }
            )
            return self.aggregator.count_failed(repository.name)

        return await self._evaluate(sample_data)

    async def analyze_repositories(self) -> List[RepositoryScore]:
        """
        Rank every repository of the organization.

        Returns:
            List[RepositoryScore]: Scores sorted by overall score, descending,
                equal scores in listing order.

        Raises:
            TransportFailure: If the repositories cannot be listed.
        """
        logger.info(
            {
                "message": "Fetching repositories for organization",
                "organization": self.organization,
            }
        )
        repositories = self.miner.list_repositories(self.organization)
        if not repositories:
            logger.warning(
                {
                    "message": "No repositories found for organization",
                    "organization": self.organization,
                }
            )

        results: List[RepositoryScore] = []
        for index, repository in enumerate(repositories, start=1):
            logger.info(
                {
                    "message": "Analyzing repository",
                    "repository": repository.full_name,
                    "progress": f"{index}/{len(repositories)}",
                }
            )
            results.append(await self.analyze_repository(repository))

        ranked = self.aggregator.rank(results)
        self.publish(ranked)
        return ranked

    def publish(self, scores: List[RepositoryScore]) -> None:
        """
        Hand the ranking to every sink. A failing sink does not stop the others.

        Args:
            scores (List[RepositoryScore]): Ranked scores.
        """
        for sink in self.sinks:
            try:
                sink.publish(scores)
            except Exception as e:
                logger.error(
                    {
                        "message": "Result sink failed",
                        "sink": type(sink).__name__,
                        "error": str(e),
                    }
                )
