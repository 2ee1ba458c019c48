"""
Application Entry Point Test Suite.

Covers evaluator and sink selection and the fatal exit paths.
"""

from unittest.mock import Mock, patch

import pytest

import app
from analyzers.plugins.quality_evaluator import LLMQualityEvaluatorPlugin
from exceptions import ConfigurationError, TransportFailure
from report.console import ConsoleTableReporter
from report.pdf_generator import PDFReportGenerator
from visualization.plotter import RankingPlotter


def test_build_evaluator_disabled(monkeypatch):
    """Plain ranking builds no evaluator."""
    monkeypatch.setattr(app.settings, "ai_based", False)
    assert app.build_evaluator() is None


def test_build_evaluator_requires_key(monkeypatch):
    """The evaluator credential is required when AI analysis is on."""
    monkeypatch.setattr(app.settings, "ai_based", True)
    monkeypatch.setattr(app.settings, "openai_api_key", None)

    with pytest.raises(ConfigurationError):
        app.build_evaluator()


def test_build_evaluator(monkeypatch):
    """The LLM evaluator is built from settings."""
    monkeypatch.setattr(app.settings, "ai_based", True)
    with patch("app.tiktoken.get_encoding") as get_encoding:
        evaluator = app.build_evaluator()

    assert isinstance(evaluator, LLMQualityEvaluatorPlugin)
    get_encoding.assert_called_once_with(app.settings.openai_encoding_name)


def test_build_sinks_pdf(monkeypatch, tmp_path):
    """The PDF report replaces the standalone chart."""
    monkeypatch.setattr(app.settings, "report_output_dir", str(tmp_path))
    monkeypatch.setattr(app.settings, "generate_pdf", True)

    sinks = app.build_sinks()

    assert [type(s) for s in sinks] == [ConsoleTableReporter, PDFReportGenerator]


def test_build_sinks_chart_only(monkeypatch, tmp_path):
    """The chart is a sink of its own without the PDF report."""
    monkeypatch.setattr(app.settings, "report_output_dir", str(tmp_path))
    monkeypatch.setattr(app.settings, "generate_pdf", False)
    monkeypatch.setattr(app.settings, "generate_chart", True)

    sinks = app.build_sinks()

    assert [type(s) for s in sinks] == [ConsoleTableReporter, RankingPlotter]


@pytest.mark.asyncio
async def test_main_missing_credential_exits(monkeypatch):
    """Missing evaluator credential is fatal."""
    monkeypatch.setattr(app.settings, "ai_based", True)
    monkeypatch.setattr(app.settings, "openai_api_key", None)

    assert await app.main() == 1


@pytest.mark.asyncio
async def test_main_listing_failure_exits(monkeypatch, fake_miner_factory):
    """Failing to list repositories is fatal."""
    monkeypatch.setattr(app.settings, "ai_based", False)
    miner = fake_miner_factory(repositories=[], commits={})
    miner.list_repositories_page = Mock(side_effect=TransportFailure("no org", status=404))

    with patch("app.build_miner", return_value=miner), patch(
        "app.build_sinks", return_value=[]
    ):
        assert await app.main() == 1


@pytest.mark.asyncio
async def test_main_success(monkeypatch, fake_miner_factory):
    """A full run over an in-memory organization succeeds."""
    monkeypatch.setattr(app.settings, "ai_based", False)
    miner = fake_miner_factory(repositories=["a", "b"], commits={"a": ["1", "2"]})
    sink = Mock()

    with patch("app.build_miner", return_value=miner), patch(
        "app.build_sinks", return_value=[sink]
    ):
        assert await app.main() == 0

    ranked = sink.publish.call_args.args[0]
    assert [s.name for s in ranked] == ["a", "b"]
