"""
PDF Report Generation Module.

This module handles the generation of the PDF ranking report.
Features include:
- Ranking table of every repository with its commit count and scores
- Ranking chart produced by the plotter
- Sampled commit messages for the top ranked repositories

Uses ReportLab for PDF generation and handles both tabular data and graphical elements.
"""

import os
from datetime import datetime, timezone
from typing import List
from xml.sax.saxutils import escape

from reportlab.lib import colors
from reportlab.lib.pagesizes import letter
from reportlab.lib.styles import getSampleStyleSheet
from reportlab.lib.units import inch
from reportlab.platypus import (
    Image,
    Paragraph,
    SimpleDocTemplate,
    Spacer,
    Table,
    TableStyle,
)

from config import logger
from analyzers.models import RepositoryScore
from report.base import ResultSink
from report.console import scores_to_frame
from visualization.plotter import RankingPlotter


class PDFReportGenerator(ResultSink):
    """
    Generates the PDF ranking report.

    Attributes:
        styles (getSampleStyleSheet): ReportLab styles for document formatting.
        plotter (RankingPlotter): Instance for creating the ranking chart.
        output_dir (str): Directory the report is written to.
        organization (str): Organization named in the report title.
        top_n_samples (int): Number of top repositories whose samples are listed.
    """

    def __init__(
        self,
        plotter: RankingPlotter,
        output_dir: str,
        organization: str,
        top_n_samples: int = 3,
    ):
        """Initialize the PDF generator with visualization capabilities.

        Args:
            plotter (RankingPlotter): Instance for creating the ranking chart.
            output_dir (str): Directory the report is written to.
            organization (str): Organization named in the report title.
            top_n_samples (int): Number of top repositories whose samples are listed.
        """
        self.styles = getSampleStyleSheet()
        self.plotter = plotter
        self.output_dir = output_dir
        self.organization = organization
        self.top_n_samples = top_n_samples

    def _create_ranking_table(self, scores: List[RepositoryScore]) -> Table:
        """Create a formatted table of the ranking.

        Args:
            scores (List[RepositoryScore]): Ranked scores.

        Returns:
            Table: Formatted ReportLab table with one row per repository.
        """
        frame = scores_to_frame(scores)
        data = [["#"] + list(frame.columns)]
        for rank, row in enumerate(frame.itertuples(index=False), start=1):
            data.append([str(rank)] + list(row))

        table = Table(data, repeatRows=1)
        table.setStyle(
            TableStyle(
                [
                    ("BACKGROUND", (0, 0), (-1, 0), colors.grey),
                    ("TEXTCOLOR", (0, 0), (-1, 0), colors.whitesmoke),
                    ("ALIGN", (0, 0), (-1, -1), "CENTER"),
                    ("ALIGN", (1, 1), (1, -1), "LEFT"),
                    ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
                    ("FONTSIZE", (0, 0), (-1, -1), 8),
                    ("BACKGROUND", (0, 1), (-1, -1), colors.beige),
                    ("GRID", (0, 0), (-1, -1), 1, colors.black),
                ]
            )
        )
        return table

    def _create_sample_paragraphs(self, scores: List[RepositoryScore]) -> List:
        """List the first message line of each sample of the top repositories."""
        elements = []
        top = [s for s in scores if s.sampled_commits][: self.top_n_samples]
        for score in top:
            elements.append(
                Paragraph(
                    f"{escape(score.name)} (Overall Score: {score.overall_score:.2f})",
                    self.styles["Heading3"],
                )
            )
            for commit in score.sampled_commits:
                first_line = commit.message.split("\n", 1)[0]
                elements.append(
                    Paragraph(
                        f"<b>{escape(commit.sha[:7])}</b> {escape(first_line)}",
                        self.styles["Normal"],
                    )
                )
            elements.append(Spacer(1, 10))
        return elements

    def report_path(self, generated_at: datetime) -> str:
        return os.path.join(
            self.output_dir,
            f"{self.organization}_ranking_{generated_at.strftime('%Y-%m-%d')}.pdf",
        )

    def generate_report(self, scores: List[RepositoryScore]) -> str:
        """Generate the PDF ranking report.

        Args:
            scores (List[RepositoryScore]): Ranked scores.

        Returns:
            str: Path of the written report.

        Raises:
            Exception: If report generation fails.
        """
        generated_at = datetime.now(timezone.utc)
        output_path = self.report_path(generated_at)
        try:
            logger.info(
                {
                    "message": "Starting PDF report generation",
                    "organization": self.organization,
                    "output_path": output_path,
                }
            )
            os.makedirs(self.output_dir, exist_ok=True)
            doc = SimpleDocTemplate(output_path, pagesize=letter)
            elements = [
                Paragraph(
                    f"Commit Ranking: {escape(self.organization)}",
                    self.styles["Heading1"],
                ),
                Paragraph(
                    f"Generated {generated_at.strftime('%Y-%m-%d %H:%M:%S')} UTC",
                    self.styles["Normal"],
                ),
                Spacer(1, 20),
                Paragraph("Ranking", self.styles["Heading2"]),
                Spacer(1, 10),
                self._create_ranking_table(scores),
                Spacer(1, 30),
            ]

            chart_path = self.plotter.save_ranking_plot(scores)
            if chart_path:
                elements.extend(
                    [
                        Paragraph("Overall Scores", self.styles["Heading2"]),
                        Spacer(1, 10),
                        Image(chart_path, width=7 * inch, height=4 * inch),
                        Spacer(1, 30),
                    ]
                )

            samples = self._create_sample_paragraphs(scores)
            if samples:
                elements.append(
                    Paragraph("Sampled Commits of Top Repositories", self.styles["Heading2"])
                )
                elements.extend(samples)

            doc.build(elements)
            logger.info(
                {
                    "message": "PDF report generated successfully",
                    "output_path": output_path,
                }
            )
            return output_path

        except Exception as e:
            logger.error(
                {
                    "message": "PDF report generation failed",
                    "error": str(e),
                    "output_path": output_path,
                }
            )
            raise

    def publish(self, scores: List[RepositoryScore]) -> None:
        self.generate_report(scores)
