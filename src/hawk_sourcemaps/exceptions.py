"""Hawk release upload exceptions."""

from __future__ import annotations


class HawkError(Exception):
    """Base exception for Hawk release operations."""


class HawkConfigError(HawkError, ValueError):
    """Raised when the plugin configuration is missing or malformed."""


class HawkApiError(HawkError):
    """Raised when the collector rejects an upload."""

    def __init__(self, status_code: int, message: str, body: str = "") -> None:
        self.status_code = status_code
        self.message = message
        self.body = body
        super().__init__(f"Collector error {status_code}: {message}")


class HawkUnparsedResponseError(HawkApiError):
    """Raised when the collector answers with something other than a JSON object."""

    def __init__(self, status_code: int, body: str = "") -> None:
        super().__init__(status_code, "unparsed response", body)


class HawkGitError(HawkError):
    """Raised when recent commits cannot be read from the repository."""

    def __init__(self, repo: str, detail: str = "") -> None:
        self.repo = repo
        self.detail = detail
        msg = f"Cannot read commits from {repo}"
        if detail:
            msg = f"{msg}: {detail}"
        super().__init__(msg)


class HawkWorkflowBusyError(HawkError):
    """Raised when the release workflow is triggered while a previous run is in flight."""

    def __init__(self) -> None:
        super().__init__("Release workflow is already running for this build")
