"""
Commit Analyzer Test Suite.

This module contains tests for the CommitAnalyzer class, covering:
- Count, sample and package flow for a repository
- Empty repository short-circuit
- Degraded sampling when identifiers cannot be listed
- Early-stop approximation flagging
"""

from unittest.mock import patch

import pytest

from analyzers.repository import CommitAnalyzer
from exceptions import TransportFailure
from miners.models import RepositoryIdentity


def identity(name):
    return RepositoryIdentity(owner="test-org", name=name)


@pytest.fixture
def miner(fake_miner_factory):
    """Miner with repositories of various shapes."""
    return fake_miner_factory(
        repositories=["active", "tiny", "empty", "broken"],
        commits={
            "active": [f"sha{i}" for i in range(20)],
            "tiny": ["only"],
        },
        page_size=3,
        empty={"empty"},
        failing_repos={"broken"},
        failing_commits={"sha7"},
    )


def test_collect_samples_requested_size(miner):
    """The sample holds sample_size distinct commits of the repository."""
    data = CommitAnalyzer(miner, sample_size=5).collect(identity("active"))

    assert data.repository_name == "active"
    assert data.commit_count == 20
    shas = [c.sha for c in data.sampled_commits]
    assert len(shas) <= 5
    assert len(set(shas)) == len(shas)
    assert set(shas) <= {f"sha{i}" for i in range(20)}
    assert not data.population_truncated


def test_collect_partial_sample(miner):
    """A failing commit fetch shrinks the sample and does not abort."""
    analyzer = CommitAnalyzer(miner, sample_size=5)

    with patch.object(
        analyzer.sampler, "sample", return_value=["sha5", "sha6", "sha7", "sha8", "sha9"]
    ):
        data = analyzer.collect(identity("active"))

    assert [c.sha for c in data.sampled_commits] == ["sha5", "sha6", "sha8", "sha9"]


def test_collect_small_repository(miner):
    """A repository smaller than the sample size is sampled whole."""
    data = CommitAnalyzer(miner, sample_size=5).collect(identity("tiny"))

    assert data.commit_count == 1
    assert [c.sha for c in data.sampled_commits] == ["only"]


def test_collect_empty_repository(miner):
    """An empty repository is a zero count with no commit fetches."""
    data = CommitAnalyzer(miner, sample_size=5).collect(identity("empty"))

    assert data.commit_count == 0
    assert data.sampled_commits == []
    assert miner.commit_calls == []


def test_collect_count_failure_propagates(miner):
    """Counting failures are left to the caller."""
    with pytest.raises(TransportFailure):
        CommitAnalyzer(miner).collect(identity("broken"))


def test_collect_identifier_listing_failure(miner):
    """Listing failure after a successful count yields no samples."""
    analyzer = CommitAnalyzer(miner, sample_size=5)

    with patch.object(
        analyzer.counter,
        "list_identifiers",
        side_effect=TransportFailure("listing failed", status=502),
    ):
        data = analyzer.collect(identity("active"))

    assert data.commit_count == 20
    assert data.sampled_commits == []


def test_collect_early_stop_flags_truncated_population(miner):
    """Early stop samples from a prefix of the history and says so."""
    analyzer = CommitAnalyzer(
        miner, sample_size=2, early_stop_threshold=6, early_stop_max_sample=10
    )

    data = analyzer.collect(identity("active"))

    assert data.population_truncated
    assert all(int(c.sha[3:]) <= 6 for c in data.sampled_commits)


def test_early_stop_ignored_for_large_samples(miner):
    """Large samples always use the whole population."""
    analyzer = CommitAnalyzer(
        miner, sample_size=12, early_stop_threshold=6, early_stop_max_sample=10
    )

    data = analyzer.collect(identity("active"))

    assert not data.population_truncated


def test_collect_count_only(miner):
    """Counting alone lists the history once and fetches no commits."""
    data = CommitAnalyzer(miner, sample_size=5).collect(
        identity("active"), with_samples=False
    )

    assert data.commit_count == 20
    assert data.sampled_commits == []
    assert miner.commit_calls == []
    assert [page for _, page in miner.page_calls] == list(range(7))
