"""Hawk collector client using httpx."""

from __future__ import annotations

import json
from collections.abc import Sequence
from typing import Any

import httpx
from pydantic import ValidationError

from .config import HawkReleaseConfig
from .exceptions import HawkUnparsedResponseError
from .models.collector import CollectorResponse
from .models.release import CommitRecord

SOURCE_MAP_CONTENT_TYPE = "application/json"


class CollectorClient:
    """Async HTTP client for the collector's release endpoint.

    httpx picks plain or TLS transport from the endpoint scheme.
    """

    def __init__(self, config: HawkReleaseConfig, *, endpoint: str | None = None) -> None:
        self.config = config
        self.endpoint = endpoint or config.endpoint
        self._client = httpx.AsyncClient(
            headers={"Authorization": f"Bearer {config.integration_token}"},
            timeout=config.timeout,
        )

    async def __aenter__(self) -> CollectorClient:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.close()

    async def close(self) -> None:
        await self._client.aclose()

    # ── HTTP helpers ──────────────────────────────────────────────

    @staticmethod
    def _parse(resp: httpx.Response) -> CollectorResponse:
        """Parse the collector's ``{error, message}`` body.

        The status code is not checked: the collector reports rejections in the
        body, e.g. ``{"error": true, "message": "invalid token"}`` with a 4xx.
        """
        try:
            body = resp.json()
        except ValueError as e:
            raise HawkUnparsedResponseError(resp.status_code, resp.text) from e
        if not isinstance(body, dict):
            raise HawkUnparsedResponseError(resp.status_code, resp.text)
        try:
            return CollectorResponse.model_validate(body)
        except ValidationError as e:
            raise HawkUnparsedResponseError(resp.status_code, resp.text) from e

    async def _post(self, files: dict[str, Any]) -> CollectorResponse:
        resp = await self._client.post(self.endpoint, files=files)
        return self._parse(resp)

    # ── Release uploads ───────────────────────────────────────────

    async def send_source_map(self, name: str, content: bytes, release: str) -> CollectorResponse:
        return await self._post(
            {
                "file": (name, content, SOURCE_MAP_CONTENT_TYPE),
                "release": (None, release),
            }
        )

    async def send_commits(
        self, release: str, commits: Sequence[CommitRecord]
    ) -> CollectorResponse:
        payload = json.dumps([commit.to_dict() for commit in commits])
        return await self._post(
            {
                "release": (None, release),
                "commits": (None, payload),
            }
        )
