"""Concurrent, best-effort upload of source maps and recent commits."""

from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path

import httpx

from .client import CollectorClient
from .config import CommitsConfig
from .exceptions import HawkError, HawkUnparsedResponseError
from .git import get_recent_commits
from .models.release import SourceMapRecord
from .reporter import Reporter

logger = logging.getLogger(__name__)

UNKNOWN_ERROR = "unknown error"


@dataclass
class UploadSummary:
    """What happened during one upload phase. Informational only."""

    sent: list[str]
    failed: list[str]
    commits_sent: bool
    elapsed: float


class UploadCoordinator:
    """Uploads every source map and the commit list, tolerating individual failures.

    Each upload catches and reports its own errors, and the two tasks are
    joined with ``return_exceptions=True``, so nothing raised by one upload can
    cancel or hide another.
    """

    def __init__(
        self,
        client: CollectorClient,
        reporter: Reporter,
        commits: CommitsConfig | None = None,
    ) -> None:
        self.client = client
        self.reporter = reporter
        self.commits = commits

    async def upload_commits(self, release: str) -> bool:
        if self.commits is None:
            return False

        loop = asyncio.get_running_loop()
        try:
            commits = await loop.run_in_executor(
                None, get_recent_commits, self.commits.repo, self.commits.number
            )
            if not commits:
                self.reporter.warning(f"No commits found in {self.commits.repo}")
                return False
            resp = await self.client.send_commits(release, commits)
        except HawkUnparsedResponseError as e:
            self.reporter.warning(f"Commits: unparsed response: {e.body}")
            return False
        except (HawkError, httpx.HTTPError) as e:
            self.reporter.failure(f"Commits failed: {e}")
            return False

        if not resp.ok:
            self.reporter.failure(f"Commits failed: {resp.message or UNKNOWN_ERROR}")
            return False
        self.reporter.success(f"{len(commits)} commit(s) sent")
        return True

    async def upload_source_map(self, record: SourceMapRecord, release: str) -> bool:
        loop = asyncio.get_running_loop()
        try:
            content = await loop.run_in_executor(None, Path(record.path).read_bytes)
        except OSError as e:
            self.reporter.failure(f"{record.name} failed: cannot read {record.path}: {e}")
            return False

        try:
            resp = await self.client.send_source_map(record.name, content, release)
        except HawkUnparsedResponseError as e:
            self.reporter.warning(f"{record.name}: unparsed response: {e.body}")
            return False
        except httpx.HTTPError as e:
            self.reporter.failure(f"{record.name} failed: {e!r}")
            return False

        if not resp.ok:
            self.reporter.failure(f"{record.name} failed: {resp.message or UNKNOWN_ERROR}")
            return False
        self.reporter.success(f"{record.name} sent")
        return True

    async def upload_source_maps(
        self, records: Sequence[SourceMapRecord], release: str
    ) -> tuple[list[str], list[str]]:
        results = await asyncio.gather(
            *(self.upload_source_map(record, release) for record in records),
            return_exceptions=True,
        )
        sent, failed = [], []
        for record, result in zip(records, results):
            if isinstance(result, BaseException):
                logger.error("Upload of %s raised", record.name, exc_info=result)
                failed.append(record.name)
            elif result:
                sent.append(record.name)
            else:
                failed.append(record.name)
        return sent, failed

    async def upload(self, records: Sequence[SourceMapRecord], release: str) -> UploadSummary:
        """Run the commit upload and all source-map uploads concurrently; wait for both."""
        started = time.perf_counter()
        commits_result, maps_result = await asyncio.gather(
            self.upload_commits(release),
            self.upload_source_maps(records, release),
            return_exceptions=True,
        )
        elapsed = time.perf_counter() - started

        if isinstance(commits_result, BaseException):
            logger.error("Commit upload raised", exc_info=commits_result)
            commits_result = False
        if isinstance(maps_result, BaseException):
            logger.error("Source map upload raised", exc_info=maps_result)
            maps_result = ([], [record.name for record in records])

        sent, failed = maps_result
        self.reporter.info(
            f"Release {release}: {len(sent)}/{len(records)} source map(s) sent in {elapsed:.2f}s"
        )
        return UploadSummary(
            sent=sent, failed=failed, commits_sent=commits_result, elapsed=elapsed
        )
