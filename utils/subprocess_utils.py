"""
Shared subprocess utilities for the ffmpeg/ffprobe boundary
"""

import subprocess
import logging
from dataclasses import dataclass
from typing import Optional, Any, Sequence

from traffic_stitcher.core.exceptions import (
    EngineLaunchError,
    EngineNotFoundError,
    EngineTimeoutError,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EngineRun:
    """Captured outcome of one external process."""

    returncode: int
    stdout: str
    stderr: str

    @property
    def ok(self) -> bool:
        return self.returncode == 0


def run_engine(
    cmd: Sequence[str],
    operation_name: str = "FFmpeg operation",
    timeout: Optional[float] = None,
    custom_logger: Optional[Any] = None,
) -> EngineRun:
    """
    Run an external command to completion and capture both streams.

    A non-zero exit is not an error here; callers inspect ``returncode``.
    Output is decoded as UTF-8 with replacement characters for bad bytes.

    Args:
        cmd: Command to run as list of strings
        operation_name: Descriptive name for the operation (for logging)
        timeout: Seconds to wait, None waits indefinitely
        custom_logger: Optional logger to use instead of default

    Returns:
        EngineRun with exit status, stdout and stderr

    Raises:
        EngineNotFoundError: If the executable does not exist
        EngineLaunchError: If the OS could not start the process
        EngineTimeoutError: If ``timeout`` elapsed
    """
    active_logger = custom_logger or logger
    cmd = [str(x) for x in cmd]
    executable = cmd[0] if cmd else "<empty>"

    active_logger.debug("Running %s: %s", operation_name, " ".join(cmd))
    try:
        result = subprocess.run(
            cmd,
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            encoding="utf-8",
            errors="replace",
            timeout=timeout,
            check=False,
        )
    except FileNotFoundError as e:
        error_msg = f"{operation_name} failed: {executable} not found ({e})"
        active_logger.error(error_msg)
        raise EngineNotFoundError(error_msg, cmd) from e
    except subprocess.TimeoutExpired as e:
        error_msg = f"{operation_name} timed out after {timeout}s"
        active_logger.error(error_msg)
        raise EngineTimeoutError(error_msg, cmd, timeout) from e
    except (OSError, PermissionError) as e:
        error_msg = f"{operation_name} failed with OS/Permission error: {e}"
        active_logger.error(error_msg)
        raise EngineLaunchError(error_msg, cmd) from e

    run = EngineRun(
        returncode=result.returncode,
        stdout=result.stdout or "",
        stderr=result.stderr or "",
    )
    if not run.ok:
        active_logger.warning(
            "%s exited with code %d: %s",
            operation_name,
            run.returncode,
            run.stderr.strip()[-500:],
        )
    return run
