"""
Main Application Entry Point.

This module serves as the primary entry point for the commit ranking system.
It orchestrates the ranking workflow, including:
- GitHub miner and evaluator initialization
- Result sink selection (console table, chart, PDF report)
- Ranking execution
- Fatal error handling and logging

The application can be run directly to rank the repositories of the
configured organization.
"""

import asyncio
import os
import sys
from typing import List, Optional

import tiktoken
from openai import AsyncOpenAI

from config import settings, logger
from analyzers.multi_repository import MultiRepositoryAnalyzer
from analyzers.plugins.quality_evaluator import (
    LLMQualityEvaluatorPlugin,
    QualityEvaluatorPlugin,
)
from analyzers.repository import CommitAnalyzer
from analyzers.scoring import ScoreAggregator
from exceptions import ConfigurationError, TransportFailure
from miners.github_miner import build_miner
from report.base import ResultSink
from report.console import ConsoleTableReporter
from report.pdf_generator import PDFReportGenerator
from visualization.plotter import RankingPlotter


def build_evaluator() -> Optional[QualityEvaluatorPlugin]:
    """
    Create the qualitative evaluator from settings.

    Returns:
        Optional[QualityEvaluatorPlugin]: LLM evaluator, None when AI analysis is off

    Raises:
        ConfigurationError: If AI analysis is on but no OpenAI API key is set
    """
    if not settings.ai_based:
        return None

    if settings.openai_api_key is None:
        raise ConfigurationError(
            "OPENAI_API_KEY is required when AI_BASED is enabled"
        )

    logger.debug("initializing openai client...")
    client = AsyncOpenAI(api_key=settings.openai_api_key.get_secret_value())
    encoding = tiktoken.get_encoding(settings.openai_encoding_name)
    return LLMQualityEvaluatorPlugin(
        client,
        encoding,
        settings.openai_llm_model,
        settings.openai_max_prompt_tokens,
        settings.diff_lines_limit,
    )


def build_sinks() -> List[ResultSink]:
    """Create the result sinks enabled in settings."""
    sinks: List[ResultSink] = [ConsoleTableReporter()]
    if not (settings.generate_pdf or settings.generate_chart):
        return sinks

    os.makedirs(settings.report_output_dir, exist_ok=True)
    plotter = RankingPlotter(
        settings.report_output_dir, f"{settings.github_organization}_ranking.png"
    )
    # The PDF report embeds the chart itself
    if settings.generate_pdf:
        sinks.append(
            PDFReportGenerator(
                plotter, settings.report_output_dir, settings.github_organization
            )
        )
    else:
        sinks.append(plotter)
    return sinks


async def main() -> int:
    """
    Execute the main application workflow.

    Performs the following steps:
    1. Initializes the GitHub miner and, when enabled, the LLM evaluator
    2. Lists the organization's repositories
    3. Counts, samples, evaluates and scores each repository in turn
    4. Ranks the repositories and publishes the ranking to the sinks

    Returns:
        int: Process exit status

    Note:
        - Failures of a single repository are recorded and do not stop the run
        - Failing to list repositories or missing configuration is fatal
    """
    logger.info("Starting commit ranking...")
    logger.info(f"AI_BASED: {settings.ai_based}")

    try:
        evaluator = build_evaluator()
    except ConfigurationError as e:
        logger.critical({"message": "Invalid configuration", "error": str(e)})
        return 1

    logger.debug("initializing github miner...")
    miner = build_miner()

    analyzer = CommitAnalyzer(
        miner,
        sample_size=settings.sample_size,
        diff_lines_limit=settings.diff_lines_limit,
        early_stop_threshold=settings.early_stop_threshold,
        early_stop_max_sample=settings.early_stop_max_sample,
    )
    multi_analyzer = MultiRepositoryAnalyzer(
        miner,
        analyzer,
        ScoreAggregator(settings.weights),
        settings.github_organization,
        evaluator=evaluator,
        sinks=build_sinks(),
    )

    try:
        await multi_analyzer.analyze_repositories()
    except TransportFailure as e:
        logger.critical(
            {
                "message": "Failed to list repositories",
                "organization": settings.github_organization,
                "error": str(e),
            }
        )
        return 1

    logger.info("application finished")
    return 0


def run() -> None:
    """Console script entry point."""
    logger.info("Starting application ...")
    sys.exit(asyncio.run(main()))


if __name__ == "__main__":
    run()
