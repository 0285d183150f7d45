"""Read recent commits from a git repository."""

from __future__ import annotations

import logging
import os
import subprocess
from pathlib import Path

from .exceptions import HawkGitError
from .models.release import CommitRecord

logger = logging.getLogger(__name__)

# hash, subject, author email, author date (strict ISO 8601); fields split by
# unit separator, commits by record separator.
LOG_FORMAT = "%H%x1f%s%x1f%ae%x1f%aI%x1e"
GIT_TIMEOUT = 30


def parse_log_output(output: str) -> list[CommitRecord]:
    commits = []
    for entry in output.split("\x1e"):
        entry = entry.strip("\n")
        if not entry:
            continue
        parts = entry.split("\x1f")
        if len(parts) != 4:
            logger.warning("Skipping malformed git log entry: %r", entry)
            continue
        commit_hash, subject, author_email, author_date = parts
        commits.append(
            CommitRecord(
                hash=commit_hash,
                title=subject,
                author_email=author_email,
                date=author_date,
            )
        )
    return commits


def get_recent_commits(repo: str | os.PathLike[str], max_count: int) -> list[CommitRecord]:
    """Return up to *max_count* commits reachable from HEAD, most recent first.

    Raises:
        HawkGitError: If *repo* is not a readable git work tree or git is missing.
    """
    repo_path = Path(repo)
    if not repo_path.is_dir():
        raise HawkGitError(str(repo), "not a directory")

    cmd = ["git", "log", f"--max-count={max_count}", f"--format={LOG_FORMAT}"]
    try:
        result = subprocess.run(
            cmd,
            cwd=repo_path,
            check=True,
            capture_output=True,
            text=True,
            timeout=GIT_TIMEOUT,
        )
    except FileNotFoundError as e:
        raise HawkGitError(str(repo), "git executable not found") from e
    except subprocess.CalledProcessError as e:
        raise HawkGitError(str(repo), (e.stderr or "").strip()) from e
    except subprocess.TimeoutExpired as e:
        raise HawkGitError(str(repo), f"git log timed out after {GIT_TIMEOUT}s") from e

    return parse_log_output(result.stdout)
