"""Post-build release hook: upload source maps and commits, record the release."""

from __future__ import annotations

import asyncio
import enum
import logging
from collections.abc import Callable, Sequence
from pathlib import Path

from .client import CollectorClient
from .config import HawkReleaseConfig
from .exceptions import HawkConfigError, HawkWorkflowBusyError
from .hooks import BuildResult, HostAdapter
from .models.release import SourceMapRecord
from .release import (
    ResolveOnce,
    remove_source_maps,
    resolve_release_id,
    write_release_descriptor,
)
from .reporter import Reporter
from .scanner import scan_source_maps
from .uploader import UploadCoordinator, UploadSummary

logger = logging.getLogger(__name__)


class WorkflowState(enum.Enum):
    IDLE = "idle"
    SCANNING = "scanning"
    NO_MAPS_FOUND = "no_maps_found"
    UPLOADING = "uploading"
    FINALIZING = "finalizing"
    DONE = "done"


class HawkReleasePlugin:
    """Sends a build's source maps and recent commits to Hawk after the build emits.

    Register it with a host through :meth:`apply`, or await :meth:`after_emit`
    directly. Upload, descriptor and cleanup errors are reported and never
    raised, so the host build always continues.
    """

    name = "HawkReleasePlugin"

    def __init__(
        self,
        config: HawkReleaseConfig | None = None,
        *,
        reporter: Reporter | None = None,
        client_factory: Callable[[HawkReleaseConfig], CollectorClient] = CollectorClient,
    ) -> None:
        self.config = config or HawkReleaseConfig.from_env()
        self.reporter = reporter or Reporter()
        self._client_factory = client_factory
        self._release = ResolveOnce[str]()
        self._release_info_dir = ResolveOnce[Path]()
        self._running = False
        self.state = WorkflowState.IDLE
        self.transitions: list[WorkflowState] = []
        self.last_summary: UploadSummary | None = None

    def apply(self, host: HostAdapter) -> None:
        host.tap_after_emit(self.name, self.after_emit)

    def release_id(self, build: BuildResult) -> str:
        """The configured release, else the build's content hash; fixed after the first call."""
        return self._release.get(
            lambda: resolve_release_id(self.config.release, lambda: build.hash)
        )

    def release_info_dir(self, build: BuildResult) -> Path:
        return self._release_info_dir.get(
            lambda: self.config.release_info_dir(build.output_path)
        )

    def run(self, build: BuildResult) -> None:
        """Blocking entry point for hosts without an event loop."""
        asyncio.run(self.after_emit(build))

    def _enter(self, state: WorkflowState) -> None:
        logger.debug("%s: %s -> %s", self.name, self.state.value, state.value)
        self.state = state
        self.transitions.append(state)

    async def after_emit(self, build: BuildResult) -> None:
        if self._running:
            raise HawkWorkflowBusyError
        self._running = True
        self.state = WorkflowState.IDLE
        self.transitions = []
        self.last_summary = None
        try:
            await self._run(build)
        except Exception:
            logger.exception("Hawk release workflow failed")
            self.reporter.failure("Release upload aborted, see log for details")
        finally:
            self._running = False
            self._enter(WorkflowState.DONE)

    async def _run(self, build: BuildResult) -> None:
        self._enter(WorkflowState.SCANNING)
        records = scan_source_maps(build.output_path, build.assets)
        if not records:
            self._enter(WorkflowState.NO_MAPS_FOUND)
            return

        try:
            self.config.validate()
        except HawkConfigError as e:
            self.reporter.failure(f"Configuration error: {e}")
            return

        release = self.release_id(build)
        self._enter(WorkflowState.UPLOADING)
        async with self._client_factory(self.config) as client:
            coordinator = UploadCoordinator(client, self.reporter, self.config.commits_config)
            self.last_summary = await coordinator.upload(records, release)

        self._enter(WorkflowState.FINALIZING)
        self._finalize(build, records, release)

    def _finalize(
        self, build: BuildResult, records: Sequence[SourceMapRecord], release: str
    ) -> None:
        if self.config.writes_release_info:
            try:
                path = write_release_descriptor(self.release_info_dir(build), release)
            except OSError as e:
                self.reporter.failure(f"Cannot write release info: {e}")
                return
            self.reporter.success(f"Release info saved to {path}")

        # Failed uploads are removed too; disable remove_source_maps to retry them.
        if self.config.remove_source_maps:
            remove_source_maps(records, self.reporter)
