"""Collector response model."""

from __future__ import annotations

from pydantic import StrictBool, StrictStr

from .base import HawkModel


class CollectorResponse(HawkModel):
    error: StrictBool | None = None
    message: StrictStr | None = None

    @property
    def ok(self) -> bool:
        """True only when the collector explicitly reported ``error: false``."""
        return self.error is False
