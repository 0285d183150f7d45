"""Tests for console status lines."""

from __future__ import annotations

import io
import logging

from conftest import output_of
from rich.console import Console

from hawk_sourcemaps.reporter import Reporter


def test_lines_are_prefixed(reporter):
    reporter.success("main.js.map sent")
    reporter.failure("vendor.js.map failed: invalid token")
    lines = output_of(reporter).splitlines()
    assert lines == ["Hawk main.js.map sent", "Hawk vendor.js.map failed: invalid token"]


def test_markup_in_message_is_printed_literally(reporter):
    reporter.warning("unparsed response: [bold]nope[/bold]")
    assert "[bold]nope[/bold]" in output_of(reporter)


def test_quiet_only_logs(caplog):
    console = Console(file=io.StringIO(), color_system=None)
    quiet = Reporter(console, quiet=True)
    with caplog.at_level(logging.INFO, logger="hawk_sourcemaps"):
        quiet.info("Removed 1 source map(s) from disk")
        quiet.failure("Cannot write release info")
    assert console.file.getvalue() == ""
    assert [r.levelno for r in caplog.records] == [logging.INFO, logging.ERROR]


def test_console_lines_logged_at_debug_only(reporter, caplog):
    with caplog.at_level(logging.DEBUG, logger="hawk_sourcemaps"):
        reporter.success("main.js.map sent")
        reporter.failure("vendor.js.map failed: invalid token")
    assert output_of(reporter).count("Hawk ") == 2
    assert [r.levelno for r in caplog.records] == [logging.DEBUG, logging.DEBUG]
    assert [r.getMessage() for r in caplog.records] == [
        "main.js.map sent",
        "vendor.js.map failed: invalid token",
    ]
