"""Upload build source maps and recent commits to Hawk as a release."""

from .config import CommitsConfig, HawkReleaseConfig
from .hooks import BuildHooks, BuildResult
from .plugin import HawkReleasePlugin, WorkflowState

__version__ = "0.1.0"

__all__ = [
    "BuildHooks",
    "BuildResult",
    "CommitsConfig",
    "HawkReleaseConfig",
    "HawkReleasePlugin",
    "WorkflowState",
]
