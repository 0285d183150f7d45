"""Release models: source maps, commits, the on-disk descriptor."""

from __future__ import annotations

from pydantic import Field

from .base import HawkModel


class SourceMapRecord(HawkModel):
    name: str
    path: str


class CommitRecord(HawkModel):
    hash: str
    title: str = ""
    author_email: str = Field(default="", alias="authorEmail")
    date: str = ""


class ReleaseDescriptor(HawkModel):
    release: str
    date: int
