"""Concat demuxer manifest (``file '<path>'`` per line).

ffmpeg's concat demuxer parses each line with shell-like quoting, so a single
quote inside a path has to be written as ``'\\''``: close the quoted string,
emit an escaped quote, reopen.

The format has no escape for line breaks, so a path containing ``\\n`` or
``\\r`` cannot be listed and is rejected before the file is created.
"""

from __future__ import annotations

import logging
from typing import Iterable, List, Optional, Sequence

from traffic_stitcher.core.exceptions import ManifestError

logger = logging.getLogger(__name__)

MANIFEST_DIRECTIVE = "file"
LINE_BREAKS = ("\n", "\r")


def find_unlistable_path(clip_paths: Iterable[str]) -> Optional[str]:
    """First path that would split its manifest line, or None."""
    for path in clip_paths:
        if any(ch in str(path) for ch in LINE_BREAKS):
            return str(path)
    return None


def escape_concat_path(path: str) -> str:
    return path.replace("'", "'\\''")


def build_manifest_lines(clip_paths: Iterable[str]) -> List[str]:
    """One ``file '<escaped path>'`` line per clip, input order preserved."""
    return [f"{MANIFEST_DIRECTIVE} '{escape_concat_path(str(p))}'" for p in clip_paths]


def render_manifest(clip_paths: Iterable[str]) -> str:
    return "".join(f"{line}\n" for line in build_manifest_lines(clip_paths))


def write_manifest(manifest_path: str, clip_paths: Sequence[str]) -> str:
    """Create ``manifest_path`` and write every clip line to it.

    Raises:
        ManifestError: If a path contains a line break, or the file cannot be
            created or a write fails.
    """
    bad_path = find_unlistable_path(clip_paths)
    if bad_path is not None:
        raise ManifestError(
            f"Clip path contains a line break: {bad_path!r}", manifest_path
        )

    try:
        f = open(manifest_path, "w", encoding="utf-8", errors="replace", newline="\n")
    except OSError as e:
        raise ManifestError(f"Failed to create temp file: {e}", manifest_path) from e

    # buffered writes can surface their error on close, so the close is covered too
    try:
        with f:
            for line in build_manifest_lines(clip_paths):
                f.write(f"{line}\n")
    except OSError as e:
        raise ManifestError("Failed to write concat list", manifest_path) from e
    logger.debug("Wrote concat manifest %s (%d clips)", manifest_path, len(clip_paths))
    return manifest_path
