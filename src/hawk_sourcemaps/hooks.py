"""Host build-tool adapter: what a build hands the release hook, and how hooks are registered."""

from __future__ import annotations

import os
from collections.abc import Awaitable, Callable, Mapping
from dataclasses import dataclass, field
from typing import Any, Protocol


@dataclass
class BuildResult:
    """Post-emit data from the host build.

    ``assets`` maps each emitted asset name to whatever descriptor the host
    keeps for it; only the names are used. ``hash`` is the build's content hash.
    """

    assets: Mapping[str, Any]
    hash: str
    output_path: str | os.PathLike[str]


AfterEmitCallback = Callable[[BuildResult], Awaitable[None]]


class HostAdapter(Protocol):
    def tap_after_emit(self, name: str, callback: AfterEmitCallback) -> None: ...


@dataclass
class BuildHooks:
    """In-process host adapter for Python-driven builds.

    Callbacks run in registration order; ``emit`` returns once all of them finished.
    """

    after_emit: list[tuple[str, AfterEmitCallback]] = field(default_factory=list)

    def tap_after_emit(self, name: str, callback: AfterEmitCallback) -> None:
        self.after_emit.append((name, callback))

    async def emit(self, build: BuildResult) -> None:
        for _name, callback in self.after_emit:
            await callback(build)
