"""User-facing status lines for the release hook."""

from __future__ import annotations

import logging

from rich.console import Console
from rich.markup import escape

logger = logging.getLogger("hawk_sourcemaps")

PREFIX = "[bold magenta]Hawk[/bold magenta]"


class Reporter:
    """Prints colored status lines to the console and mirrors them to the logger.

    While the console is printing, lines are logged at DEBUG only so a host
    with root logging configured does not show each line twice. With
    ``quiet=True`` nothing is printed and lines are logged at their own level,
    e.g. inside a build that captures stdout.
    """

    def __init__(self, console: Console | None = None, *, quiet: bool = False) -> None:
        self.console = console or Console(stderr=True, highlight=False)
        self.quiet = quiet

    def _emit(self, level: int, style: str, text: str) -> None:
        if self.quiet:
            logger.log(level, text)
            return
        logger.debug(text)
        self.console.print(f"{PREFIX} [{style}]{escape(text)}[/{style}]")

    def info(self, text: str) -> None:
        self._emit(logging.INFO, "cyan", text)

    def success(self, text: str) -> None:
        self._emit(logging.INFO, "green", text)

    def warning(self, text: str) -> None:
        self._emit(logging.WARNING, "yellow", text)

    def failure(self, text: str) -> None:
        self._emit(logging.ERROR, "bold red", text)
