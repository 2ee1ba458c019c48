"""
Console Ranking Table Module.

Renders the ranked repository scores as a fixed-width table on standard output.
"""

import sys
from typing import List, TextIO

import pandas as pd

from analyzers.models import RepositoryScore
from report.base import ResultSink

COLUMNS = [
    "Repository",
    "Commits",
    "Tech Score",
    "Msg Score",
    "Overall",
    "Analyzed Smpls",
    "Status",
]
TABLE_WIDTH = 120


def scores_to_frame(scores: List[RepositoryScore]) -> pd.DataFrame:
    """
    Convert ranked scores into a display DataFrame.

    Repositories whose commits could not be counted show ERROR and N/A.

    Args:
        scores (List[RepositoryScore]): Ranked scores

    Returns:
        pd.DataFrame: One row per repository, in ranking order
    """
    rows = []
    for score in scores:
        if score.commit_count == -1:
            rows.append(
                [score.name, "ERROR", "N/A", "N/A", "N/A", "N/A", score.status.value]
            )
            continue
        rows.append(
            [
                score.name,
                str(score.commit_count),
                str(score.technical_score),
                str(score.message_score),
                f"{score.overall_score:.2f}",
                str(score.analyzed_count),
                score.status.value,
            ]
        )
    return pd.DataFrame(rows, columns=COLUMNS)


class ConsoleTableReporter(ResultSink):
    """
    Prints the ranking as a table.

    Attributes:
        stream (TextIO): Output stream, standard output by default
    """

    def __init__(self, stream: TextIO = None):
        self.stream = stream or sys.stdout

    def render(self, scores: List[RepositoryScore]) -> str:
        """Render the ranking table as text."""
        frame = scores_to_frame(scores)
        if frame.empty:
            body = "No repositories to rank."
        else:
            body = frame.to_string(index=False, justify="left")
        return "\n".join(["=" * TABLE_WIDTH, body, "=" * TABLE_WIDTH])

    def publish(self, scores: List[RepositoryScore]) -> None:
        print(self.render(scores), file=self.stream)
