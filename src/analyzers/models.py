"""
Ranking Data Models.

Defines the models produced while sampling, evaluating and scoring repositories.
Uses Pydantic for validation and serialization.
"""

from enum import Enum
from typing import List

from pydantic import BaseModel, ConfigDict, Field


class EvaluationStatus(Enum):
    """
    Outcome of processing a single repository.

    Attributes:
        OK: Evaluator scored the sampled commits
        EMPTY: Repository has no commits, evaluation short-circuited
        NO_SAMPLES: Commits exist but none could be packaged
        SKIPPED: No evaluator configured
        EVALUATION_FAILED: Evaluator call or result parsing failed
        COUNT_FAILED: Commit counting failed
    """

    OK = "ok"
    EMPTY = "empty"
    NO_SAMPLES = "no_samples"
    SKIPPED = "skipped"
    EVALUATION_FAILED = "evaluation_failed"
    COUNT_FAILED = "count_failed"


class SampledCommit(BaseModel):
    """A sampled commit with its message and truncated diff."""

    model_config = ConfigDict(frozen=True)

    sha: str
    message: str = ""
    diff_snippet: str = ""


class QualitativeScore(BaseModel):
    """Scores returned by the qualitative evaluator."""

    model_config = ConfigDict(frozen=True)

    technical_sophistication: int = Field(..., ge=0, le=10)
    message_appropriateness: int = Field(..., ge=0, le=10)


class ScoringWeights(BaseModel):
    """Weights and normalization cap used to build the overall score."""

    model_config = ConfigDict(frozen=True)

    commit_count: float = 0.2
    technical: float = 0.4
    message: float = 0.4
    commit_count_cap: int = Field(default=1000, gt=0)


class CommitSampleData(BaseModel):
    """Commit count and packaged samples collected for one repository."""

    model_config = ConfigDict(frozen=True)

    repository_name: str
    commit_count: int = Field(..., ge=0)
    sampled_commits: List[SampledCommit] = []
    requested_sample_size: int = 0
    population_truncated: bool = False


class RepositoryScore(BaseModel):
    """Final score for a repository."""

    model_config = ConfigDict(frozen=True)

    name: str
    commit_count: int = Field(..., ge=-1)
    technical_score: int = 0
    message_score: int = 0
    overall_score: float = 0.0
    analyzed_count: int = Field(default=0, ge=0)
    status: EvaluationStatus = EvaluationStatus.OK
    population_truncated: bool = False
    sampled_commits: List[SampledCommit] = Field(default=[], repr=False)

    @property
    def failed(self) -> bool:
        return self.status in (
            EvaluationStatus.COUNT_FAILED,
            EvaluationStatus.EVALUATION_FAILED,
        )
