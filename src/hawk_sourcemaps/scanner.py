"""Find source maps among the assets a build emitted."""

from __future__ import annotations

import os
from collections.abc import Iterable

from .models.release import SourceMapRecord

MAP_EXTENSION = "map"


def _strip_query(name: str) -> str:
    return name.split("?", 1)[0]


def is_source_map(name: str, extension: str = MAP_EXTENSION) -> bool:
    """True when *name*, with any ``?query`` suffix removed, ends in ``.<extension>``.

    A name without a dot has no extension and is never selected.
    """
    base = _strip_query(name)
    if "." not in base:
        return False
    return base.rsplit(".", 1)[1] == extension


def scan_source_maps(
    output_path: str | os.PathLike[str],
    asset_names: Iterable[str],
    extension: str = MAP_EXTENSION,
) -> list[SourceMapRecord]:
    """Return one record per source-map asset, in the order the names were given.

    The record keeps the asset name as emitted; its path points at the file on
    disk, so a ``?query`` suffix is not part of it.
    """
    return [
        SourceMapRecord(name=name, path=os.path.join(output_path, _strip_query(name)))
        for name in asset_names
        if is_source_map(name, extension)
    ]
