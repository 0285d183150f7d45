"""Release id resolution, the release descriptor file, and source-map cleanup."""

from __future__ import annotations

import json
import logging
import os
import time
from collections.abc import Callable, Iterable
from pathlib import Path
from typing import Generic, TypeVar

from .models.release import ReleaseDescriptor, SourceMapRecord
from .reporter import Reporter

logger = logging.getLogger(__name__)

RELEASE_INFO_FILENAME = "release.json"

T = TypeVar("T")


class ResolveOnce(Generic[T]):
    """A value that is either given up front or computed on first access and then kept."""

    def __init__(self, value: T | None = None) -> None:
        self._value = value

    @property
    def resolved(self) -> bool:
        return self._value is not None

    def get(self, compute: Callable[[], T]) -> T:
        if self._value is None:
            self._value = compute()
        return self._value


def resolve_release_id(explicit: str | None, fallback: Callable[[], str]) -> str:
    """Return *explicit* when it is non-empty, otherwise the result of *fallback*."""
    if explicit:
        return explicit
    return fallback()


def now_ms() -> int:
    return int(time.time() * 1000)


def write_release_descriptor(
    directory: str | os.PathLike[str], release: str, *, date: int | None = None
) -> Path:
    """Overwrite ``<directory>/release.json`` with ``{"release", "date"}``.

    Creates *directory* when missing. Raises ``OSError`` when the file cannot
    be written.
    """
    descriptor = ReleaseDescriptor(release=release, date=now_ms() if date is None else date)
    target = Path(directory)
    target.mkdir(parents=True, exist_ok=True)
    path = target / RELEASE_INFO_FILENAME
    path.write_text(json.dumps(descriptor.to_dict()), encoding="utf-8")
    logger.debug("Wrote %s for release %s", path, release)
    return path


def read_release_descriptor(directory: str | os.PathLike[str]) -> ReleaseDescriptor:
    """Read back ``<directory>/release.json``, e.g. to stamp the release into a deploy step.

    Public counterpart of :func:`write_release_descriptor`; the hook itself never reads it.
    """
    path = Path(directory) / RELEASE_INFO_FILENAME
    return ReleaseDescriptor.model_validate_json(path.read_text(encoding="utf-8"))


def remove_source_maps(records: Iterable[SourceMapRecord], reporter: Reporter) -> list[str]:
    """Delete each record's file. Returns the paths actually removed.

    Files that are already gone or cannot be removed are reported and skipped.
    """
    removed = []
    for record in records:
        try:
            os.remove(record.path)
        except FileNotFoundError:
            reporter.warning(f"{record.name}: already removed")
        except OSError as e:
            reporter.failure(f"{record.name}: could not be removed: {e}")
        else:
            removed.append(record.path)
    if removed:
        reporter.info(f"Removed {len(removed)} source map(s) from disk")
    return removed
