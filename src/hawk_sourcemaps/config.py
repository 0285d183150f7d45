"""Hawk release plugin configuration."""

from __future__ import annotations

import base64
import binascii
import json
import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import find_dotenv, load_dotenv

from .exceptions import HawkConfigError

COLLECTOR_URL_TEMPLATE = "https://{integration_id}.k1.hawk.so/release"
DEFAULT_COMMITS_NUMBER = 5


def decode_integration_id(token: str) -> str:
    """Extract the integration id from a base64-encoded JSON integration token."""
    token = token.strip()
    try:
        decoded = base64.b64decode(token + "=" * (-len(token) % 4), validate=True)
        payload = json.loads(decoded)
    except (binascii.Error, ValueError) as e:
        msg = "Integration token is malformed: expected base64-encoded JSON"
        raise HawkConfigError(msg) from e

    integration_id = payload.get("integrationId") if isinstance(payload, dict) else None
    if not integration_id:
        msg = "Integration token does not contain an integrationId"
        raise HawkConfigError(msg)
    return str(integration_id)


@dataclass(frozen=True)
class CommitsConfig:
    """Which repository to read commits from and how many to send."""

    repo: str = field(default_factory=os.getcwd)
    number: int = DEFAULT_COMMITS_NUMBER


@dataclass
class HawkReleaseConfig:
    """Configuration for the release hook.

    ``release_info_file`` is ``None`` to write ``release.json`` into the build
    output directory, a directory path to write it there, or ``False`` to skip it.
    ``commits`` is a :class:`CommitsConfig`, ``True`` for the defaults, or
    ``False`` to skip the commit upload.
    """

    integration_token: str = ""
    release: str | None = None
    release_info_file: str | os.PathLike[str] | bool | None = None
    remove_source_maps: bool = True
    commits: CommitsConfig | bool = True
    collector_endpoint: str | None = None
    timeout: float = 10.0

    @classmethod
    def from_env(cls, *, dotenv: bool = True) -> HawkReleaseConfig:
        if dotenv:
            load_dotenv(find_dotenv(usecwd=True))
        token = os.getenv("HAWK_TOKEN") or os.getenv("HAWK_INTEGRATION_TOKEN", "")
        release = os.getenv("HAWK_RELEASE") or None
        endpoint = os.getenv("HAWK_COLLECTOR_ENDPOINT", "").rstrip("/") or None
        remove_source_maps = os.getenv("HAWK_REMOVE_SOURCE_MAPS", "true").lower() not in (
            "false",
            "0",
            "no",
        )
        timeout = float(os.getenv("HAWK_TIMEOUT", "10"))

        return cls(
            integration_token=token,
            release=release,
            remove_source_maps=remove_source_maps,
            collector_endpoint=endpoint,
            timeout=timeout,
        )

    @property
    def commits_config(self) -> CommitsConfig | None:
        """Resolved commit settings, or None when commit upload is disabled."""
        if self.commits is False:
            return None
        if self.commits is True:
            return CommitsConfig()
        return self.commits

    @property
    def writes_release_info(self) -> bool:
        return self.release_info_file is not False

    @property
    def integration_id(self) -> str:
        return decode_integration_id(self.integration_token)

    @property
    def endpoint(self) -> str:
        if self.collector_endpoint:
            return self.collector_endpoint
        return COLLECTOR_URL_TEMPLATE.format(integration_id=self.integration_id)

    def release_info_dir(self, output_path: str | os.PathLike[str]) -> Path:
        """Directory for ``release.json``: the configured one, else the build output."""
        if isinstance(self.release_info_file, (str, os.PathLike)):
            return Path(self.release_info_file)
        return Path(output_path)

    def validate(self) -> None:
        if not self.integration_token:
            msg = (
                "Integration token is required. Pass integration_token or set "
                "HAWK_TOKEN in the environment"
            )
            raise HawkConfigError(msg)
        if self.timeout <= 0:
            msg = "timeout must be a positive number of seconds"
            raise HawkConfigError(msg)
        commits = self.commits_config
        if commits is not None and commits.number < 1:
            msg = "commits.number must be at least 1"
            raise HawkConfigError(msg)
        if not self.collector_endpoint:
            decode_integration_id(self.integration_token)
