"""
Diff Packager Test Suite.

Covers patch concatenation, the line budget, the truncation marker and
partial-failure containment.
"""

import pytest

from analyzers.diff_packager import (
    FILE_SEPARATOR,
    TRUNCATION_MARKER,
    DiffPackager,
    truncate_patches,
)
from analyzers.models import SampledCommit


def numbered_patch(count, prefix="line"):
    return "\n".join(f"{prefix}{i}" for i in range(1, count + 1))


def test_truncation_keeps_exactly_limit_lines():
    """M content lines, then the marker, nothing beyond line M."""
    snippet = truncate_patches([numbered_patch(10)], 4)

    assert snippet.split("\n") == ["line1", "line2", "line3", "line4", TRUNCATION_MARKER]


def test_truncation_across_files():
    """The budget is cumulative over files; separators do not count."""
    snippet = truncate_patches([numbered_patch(2, "a"), numbered_patch(5, "b")], 4)

    assert snippet.split("\n") == ["a1", "a2", FILE_SEPARATOR, "b1", "b2", TRUNCATION_MARKER]


def test_truncation_at_file_boundary_has_no_dangling_separator():
    """A budget used up by earlier files ends on the marker, not a separator."""
    snippet = truncate_patches([numbered_patch(2, "a"), numbered_patch(3, "b")], 2)

    assert snippet.split("\n") == ["a1", "a2", TRUNCATION_MARKER]


def test_no_marker_when_within_limit():
    """Content that fits the budget is kept whole."""
    snippet = truncate_patches([numbered_patch(3)], 3)

    assert snippet == "line1\nline2\nline3"


def test_non_positive_limit_disables_truncation():
    """A limit of zero or less keeps every line."""
    patches = [numbered_patch(50), numbered_patch(50, "x")]

    for limit in (0, -1):
        snippet = truncate_patches(patches, limit)
        assert TRUNCATION_MARKER not in snippet
        assert snippet == patches[0] + "\n" + FILE_SEPARATOR + "\n" + patches[1]


def test_empty_patches():
    """No patches package to an empty snippet."""
    assert truncate_patches([], 100) == ""
    assert truncate_patches(["", ""], 100) == ""


@pytest.fixture
def miner(fake_miner_factory):
    """Miner whose commit 'bad' cannot be fetched."""
    return fake_miner_factory(
        repositories=["repo"],
        commits={"repo": ["c1", "c2", "bad", "c4", "c5"]},
        failing_commits={"bad"},
        patches={"c1": [numbered_patch(8)]},
    )


def test_package_single_commit(miner):
    """Message and truncated diff are packaged together."""
    packaged = DiffPackager(miner, line_limit=5).package("org", "repo", "c1")

    assert isinstance(packaged, SampledCommit)
    assert packaged.sha == "c1"
    assert packaged.message == "message for c1"
    assert packaged.diff_snippet.split("\n")[-1] == TRUNCATION_MARKER


def test_package_all_skips_failed_fetch(miner):
    """One failed fetch out of five leaves four packaged commits."""
    packaged = DiffPackager(miner).package_all(
        "org", "repo", ["c1", "c2", "bad", "c4", "c5"]
    )

    assert [p.sha for p in packaged] == ["c1", "c2", "c4", "c5"]
    assert miner.commit_calls == ["c1", "c2", "bad", "c4", "c5"]
