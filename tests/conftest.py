"""Shared test fixtures for hawk-sourcemaps."""

from __future__ import annotations

import base64
import io
import json
from pathlib import Path

import pytest
import respx
from rich.console import Console

from hawk_sourcemaps.config import HawkReleaseConfig
from hawk_sourcemaps.hooks import BuildResult
from hawk_sourcemaps.reporter import Reporter

COLLECTOR_BASE = "https://collector.example.com"
COLLECTOR_URL = f"{COLLECTOR_BASE}/release"
INTEGRATION_ID = "4f1c2a9e-integration"


def make_token(payload: object) -> str:
    return base64.b64encode(json.dumps(payload).encode()).decode()


TEST_TOKEN = make_token({"integrationId": INTEGRATION_ID, "secret": "s3cr3t"})


@pytest.fixture
def config() -> HawkReleaseConfig:
    return HawkReleaseConfig(
        integration_token=TEST_TOKEN,
        collector_endpoint=COLLECTOR_URL,
        commits=False,
    )


@pytest.fixture
def reporter() -> Reporter:
    console = Console(file=io.StringIO(), width=200, color_system=None, soft_wrap=True)
    return Reporter(console)


def output_of(reporter: Reporter) -> str:
    return reporter.console.file.getvalue()


@pytest.fixture
def build_dir(tmp_path: Path) -> Path:
    out = tmp_path / "dist"
    out.mkdir()
    (out / "main.js").write_text("console.log(1)")
    (out / "main.js.map").write_text('{"version":3,"sources":["main.ts"]}')
    (out / "vendor.js.map").write_text('{"version":3,"sources":["vendor.ts"]}')
    return out


@pytest.fixture
def build(build_dir: Path) -> BuildResult:
    return BuildResult(
        assets={"main.js": object(), "main.js.map": object(), "vendor.js.map": object()},
        hash="a1b2c3d4e5f6",
        output_path=str(build_dir),
    )


@pytest.fixture
def mock_collector() -> respx.MockRouter:
    with respx.mock(base_url=COLLECTOR_BASE) as router:
        yield router
