from __future__ import annotations

import logging
from typing import Optional, Sequence

from traffic_stitcher.application.interfaces.engine import IMediaEngine
from traffic_stitcher.core.config import settings
from traffic_stitcher.core.exceptions import (
    EngineError,
    EngineTimeoutError,
    EngineUnavailableError,
)
from utils.subprocess_utils import EngineRun, run_engine

logger = logging.getLogger(__name__)


class FFmpegEngine(IMediaEngine):
    """
    Runs an ffmpeg-family executable (``ffmpeg`` or ``ffprobe``) as a subprocess.

    The call blocks until the process exits. There is no timeout unless one
    is passed in (or configured through ``FFMPEG_TIMEOUT``).

    Examples:
        engine = FFmpegEngine()
        run = engine.run(["-y", "-i", "in.wav", "out.mp3"])
        if not run.ok:
            print(run.stderr)
    """

    def __init__(
        self,
        binary: Optional[str] = None,
        *,
        timeout: Optional[float] = None,
        display_name: str = "FFmpeg",
    ) -> None:
        self.binary = binary or settings.ffmpeg_binary_path
        self.timeout = timeout if timeout is not None else settings.ffmpeg_timeout
        self.display_name = display_name

    def command(self, args: Sequence[str]) -> list[str]:
        return [self.binary, *[str(a) for a in args]]

    def run(self, args: Sequence[str], operation_name: str = "FFmpeg") -> EngineRun:
        return run_engine(self.command(args), operation_name, timeout=self.timeout)

    def version(self) -> str:
        """Return the first line of ``<binary> -version``.

        Raises:
            EngineUnavailableError: ``installed`` is False when the binary
                could not be started, True when it ran and exited non-zero.
        """
        try:
            result = self.run(["-version"], f"{self.display_name} version check")
        except EngineTimeoutError as e:
            raise EngineUnavailableError(
                f"{self.display_name} found but returned an error", installed=True
            ) from e
        except EngineError as e:
            raise EngineUnavailableError(
                f"{self.display_name} is not installed or not in PATH"
            ) from e

        if not result.ok:
            raise EngineUnavailableError(
                f"{self.display_name} found but returned an error", installed=True
            )
        lines = result.stdout.strip().splitlines()
        first_line = lines[0].strip() if lines else ""
        return first_line or f"{self.display_name} installed"
