"""Exceptions raised by the ranking pipeline."""

from typing import Optional


class RankingError(Exception):
    """Base exception for all ranking-related errors."""

    pass


class TransportFailure(RankingError):
    """Raised when a listing or fetch against the hosting API fails."""

    def __init__(
        self, message: str, repository: Optional[str] = None, status: Optional[int] = None
    ):
        self.repository = repository
        self.status = status
        super().__init__(message)


class EvaluatorFailure(RankingError):
    """Raised when the qualitative evaluator cannot produce a score."""

    pass


class EvaluatorParseFailure(EvaluatorFailure):
    """Raised when evaluator output holds no parseable structured score."""

    def __init__(self, message: str, raw: str = ""):
        self.raw = raw
        super().__init__(message)


class ConfigurationError(RankingError):
    """Raised when required configuration for the run is missing."""

    pass


class EmptyRepository(RankingError):
    """Signals that a repository has no commits; callers treat it as a zero count."""

    def __init__(self, repository: str):
        self.repository = repository
        super().__init__(f"repository {repository} is empty")
