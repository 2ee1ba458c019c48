"""
Ranking Visualization Module.

Provides functionality for charting the repository ranking:
- Horizontal bar chart of overall scores in ranked order
- Axis scaled to the largest overall score of the run
- Proper file management for generated plots

The module uses matplotlib for creating the visualizations.
"""

import os
from typing import List, Optional

import matplotlib.pyplot as plt

from analyzers.models import RepositoryScore
from config import logger
from report.base import ResultSink

MIN_AXIS_MAX = 10.0


class RankingPlotter(ResultSink):
    """
    Plotter for the repository ranking.

    Attributes:
        output_dir (str): Directory for saving generated plots
        file_name (str): File name of the ranking chart
    """

    def __init__(self, output_dir: str = "plots", file_name: str = "ranking.png"):
        """
        Initialize the ranking plotter with output configuration.

        Args:
            output_dir (str): Directory path for saving generated plots.
                Defaults to "plots"
            file_name (str): Chart file name. Defaults to "ranking.png"
        """
        self.output_dir = output_dir
        self.file_name = file_name
        os.makedirs(output_dir, exist_ok=True)

    @property
    def chart_path(self) -> str:
        return os.path.join(self.output_dir, self.file_name)

    @staticmethod
    def axis_max(scores: List[RepositoryScore]) -> float:
        """Largest overall score of the run, never below the score scale maximum."""
        running_max = MIN_AXIS_MAX
        for score in scores:
            running_max = max(running_max, score.overall_score)
        return running_max

    def create_ranking_plot(self, scores: List[RepositoryScore]) -> plt.Figure:
        """Create a horizontal bar chart of overall scores.

        Repositories that failed are drawn in grey.

        Args:
            scores (List[RepositoryScore]): Ranked scores

        Returns:
            plt.Figure: Generated ranking figure
        """
        names = [score.name for score in scores]
        values = [score.overall_score for score in scores]
        colors = ["lightgrey" if score.failed else "steelblue" for score in scores]

        height = max(3.0, 0.4 * len(scores) + 1.5)
        fig, ax = plt.subplots(figsize=(12, height))
        ax.barh(names, values, color=colors)
        # Highest score on top
        ax.invert_yaxis()
        ax.set_xlim(0, self.axis_max(scores))
        ax.set_title("Repository Contribution Quality Ranking")
        ax.set_xlabel("Overall Score")
        ax.grid(True, axis="x")

        for index, value in enumerate(values):
            ax.text(value, index, f" {value:.2f}", va="center")

        plt.tight_layout()
        return fig

    def save_ranking_plot(self, scores: List[RepositoryScore]) -> Optional[str]:
        """Create the ranking chart and write it to disk.

        Args:
            scores (List[RepositoryScore]): Ranked scores

        Returns:
            Optional[str]: Path of the written chart, None when there is nothing to plot
        """
        if not scores:
            return None

        fig = self.create_ranking_plot(scores)
        try:
            fig.savefig(self.chart_path, format="png", dpi=150, bbox_inches="tight")
        finally:
            plt.close(fig)

        logger.info({"message": "Ranking chart saved", "path": self.chart_path})
        return self.chart_path

    def publish(self, scores: List[RepositoryScore]) -> None:
        self.save_ranking_plot(scores)
