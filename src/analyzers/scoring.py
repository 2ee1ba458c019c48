"""
Score Aggregation Module.

Combines the normalized commit count with the evaluator's qualitative scores
into a single overall score, builds the per-repository result records and
ranks them.
"""

from typing import Iterable, List, Optional

from analyzers.models import (
    CommitSampleData,
    EvaluationStatus,
    QualitativeScore,
    RepositoryScore,
    ScoringWeights,
)

ZERO_SCORE = QualitativeScore(technical_sophistication=0, message_appropriateness=0)
# Commits exist but none of the samples could be characterized
NO_SAMPLES_SCORE = QualitativeScore(
    technical_sophistication=1, message_appropriateness=0
)


class ScoreAggregator:
    """
    Weighted aggregation of quantitative and qualitative signals.

    Attributes:
        weights (ScoringWeights): Weights and commit count normalization cap.
    """

    def __init__(self, weights: Optional[ScoringWeights] = None):
        self.weights = weights or ScoringWeights()

    def normalize_commit_count(self, commit_count: int) -> float:
        """Map a commit count onto [0, 10], saturating at the cap."""
        cap = self.weights.commit_count_cap
        return min(max(commit_count, 0), cap) / cap * 10.0

    def overall_score(self, commit_count: int, score: QualitativeScore) -> float:
        """
        Compute the weighted overall score.

        Args:
            commit_count (int): Total commits of the repository
            score (QualitativeScore): Evaluator scores

        Returns:
            float: Overall score in [0, 10]
        """
        if commit_count == 0:
            return 0.0
        return (
            self.normalize_commit_count(commit_count) * self.weights.commit_count
            + score.technical_sophistication * self.weights.technical
            + score.message_appropriateness * self.weights.message
        )

    def score(
        self,
        sample_data: CommitSampleData,
        score: Optional[QualitativeScore],
        status: EvaluationStatus,
    ) -> RepositoryScore:
        """
        Build the result record for a repository with a known commit count.

        Args:
            sample_data (CommitSampleData): Count and packaged samples
            score (Optional[QualitativeScore]): Evaluator scores, None when
                evaluation failed or was skipped
            status (EvaluationStatus): Processing outcome

        Returns:
            RepositoryScore: Immutable result record
        """
        if sample_data.commit_count == 0:
            score, status = ZERO_SCORE, EvaluationStatus.EMPTY
        elif score is None:
            score = ZERO_SCORE

        if status == EvaluationStatus.EVALUATION_FAILED:
            overall = 0.0
        else:
            overall = self.overall_score(sample_data.commit_count, score)

        return RepositoryScore(
            name=sample_data.repository_name,
            commit_count=sample_data.commit_count,
            technical_score=score.technical_sophistication,
            message_score=score.message_appropriateness,
            overall_score=overall,
            analyzed_count=len(sample_data.sampled_commits),
            status=status,
            population_truncated=sample_data.population_truncated,
            sampled_commits=list(sample_data.sampled_commits),
        )

    @staticmethod
    def count_failed(repository_name: str) -> RepositoryScore:
        """Build the sentinel record for a repository whose commits could not be counted."""
        return RepositoryScore(
            name=repository_name,
            commit_count=-1,
            status=EvaluationStatus.COUNT_FAILED,
        )

    @staticmethod
    def rank(scores: Iterable[RepositoryScore]) -> List[RepositoryScore]:
        """
        Sort results by overall score, highest first.

        ``sorted`` is stable, so equal scores keep their enumeration order.
        """
        return sorted(scores, key=lambda s: s.overall_score, reverse=True)
