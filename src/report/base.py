"""
Abstract Base Class for Result Sinks.

A result sink receives the final ranked repository scores for presentation.
"""

from abc import ABC, abstractmethod
from typing import List

from analyzers.models import RepositoryScore


class ResultSink(ABC):
    """Presents the ranked repository scores."""

    @abstractmethod
    def publish(self, scores: List[RepositoryScore]) -> None:
        """
        Present the ranking.

        Args:
            scores (List[RepositoryScore]): Scores sorted by overall score, descending
        """
        pass
