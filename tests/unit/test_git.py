"""Tests for reading recent commits."""

from __future__ import annotations

import shutil
import subprocess
from pathlib import Path

import pytest

from hawk_sourcemaps.exceptions import HawkGitError
from hawk_sourcemaps.git import get_recent_commits, parse_log_output

requires_git = pytest.mark.skipif(shutil.which("git") is None, reason="git not installed")


def _git(repo: Path, *args: str) -> None:
    subprocess.run(
        [
            "git",
            "-c",
            "user.name=Dev",
            "-c",
            "user.email=dev@example.com",
            "-c",
            "commit.gpgsign=false",
            *args,
        ],
        cwd=repo,
        check=True,
        capture_output=True,
    )


@pytest.fixture
def repo(tmp_path: Path) -> Path:
    _git(tmp_path, "init", "-q")
    for title in ("Initial commit", "Add source maps", "Fix login redirect"):
        _git(tmp_path, "commit", "-q", "--allow-empty", "-m", title)
    return tmp_path


class TestParseLogOutput:
    def test_parses_entries(self):
        output = (
            "aaa\x1fFirst\x1fa@example.com\x1f2026-10-02T10:00:00+02:00\x1e\n"
            "bbb\x1fSecond\x1fb@example.com\x1f2026-10-01T10:00:00+02:00\x1e\n"
        )
        commits = parse_log_output(output)
        assert [c.hash for c in commits] == ["aaa", "bbb"]
        assert commits[0].title == "First"
        assert commits[0].author_email == "a@example.com"
        assert commits[1].date == "2026-10-01T10:00:00+02:00"

    def test_skips_malformed_entries(self):
        output = "broken\x1e\nccc\x1fOk\x1fc@example.com\x1f2026-10-01T00:00:00Z\x1e"
        commits = parse_log_output(output)
        assert [c.hash for c in commits] == ["ccc"]

    def test_empty(self):
        assert parse_log_output("") == []


@requires_git
class TestGetRecentCommits:
    def test_most_recent_first(self, repo: Path):
        commits = get_recent_commits(repo, 5)
        assert [c.title for c in commits] == [
            "Fix login redirect",
            "Add source maps",
            "Initial commit",
        ]
        assert all(c.author_email == "dev@example.com" for c in commits)
        assert all(len(c.hash) == 40 for c in commits)

    def test_max_count(self, repo: Path):
        commits = get_recent_commits(repo, 2)
        assert len(commits) == 2
        assert commits[0].title == "Fix login redirect"

    def test_not_a_repository(self, tmp_path: Path):
        plain = tmp_path / "plain"
        plain.mkdir()
        with pytest.raises(HawkGitError) as exc_info:
            get_recent_commits(plain, 5)
        assert exc_info.value.repo == str(plain)


def test_missing_directory(tmp_path: Path):
    with pytest.raises(HawkGitError, match="not a directory"):
        get_recent_commits(tmp_path / "nope", 5)
