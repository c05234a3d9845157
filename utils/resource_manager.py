"""
Resource management for the concat manifest temp file
"""

import os
import logging
from contextlib import contextmanager
from typing import Iterator, Sequence

from traffic_stitcher.core.exceptions import ManifestError
from utils.concat_manifest import write_manifest

logger = logging.getLogger(__name__)


def remove_quietly(path: str) -> bool:
    """Delete a file, logging instead of raising. Returns True if it is gone."""
    try:
        if os.path.exists(path):
            os.remove(path)
            logger.debug("✅ Removed file: %s", path)
        return True
    except (OSError, PermissionError) as e:
        logger.warning("Failed to remove file %s: %s", path, str(e))
        return False


@contextmanager
def managed_manifest(manifest_path: str, clip_paths: Sequence[str]) -> Iterator[str]:
    """Write the concat manifest, yield its path, always delete it afterwards.

    The file is fully written and closed before the body runs. Deletion
    failures are logged and never propagate.

    Raises:
        ManifestError: If the manifest could not be created or written; no
            partial file is left behind in that case.
    """
    try:
        write_manifest(manifest_path, clip_paths)
    except ManifestError:
        remove_quietly(manifest_path)
        raise
    try:
        yield manifest_path
    finally:
        remove_quietly(manifest_path)
