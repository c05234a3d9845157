from __future__ import annotations

import logging
import os
from typing import Optional

from traffic_stitcher.application.interfaces.engine import IMediaEngine
from traffic_stitcher.application.interfaces.media_probe import IMediaProbe
from traffic_stitcher.core.config import settings
from traffic_stitcher.core.exceptions import EngineError, EngineTimeoutError
from traffic_stitcher.core.pyd_schemas import AudioInfo, ImageInfo
from traffic_stitcher.infrastructure.adapters.engine_ffmpeg import FFmpegEngine

logger = logging.getLogger(__name__)

MISSING_FILE_ERROR = "File does not exist"
BAD_DIMENSIONS_ERROR = "Could not parse image dimensions"


class FFmpegMediaProbe(IMediaProbe):
    """ffprobe-backed metadata queries. Never raises for bad input."""

    def __init__(self, engine: Optional[IMediaEngine] = None) -> None:
        self._engine = engine or FFmpegEngine(
            settings.ffprobe_binary_path, display_name="ffprobe"
        )

    def _launch_error(self, e: EngineError) -> str:
        if isinstance(e, EngineTimeoutError):
            return f"FFprobe error: {e.message}"
        return f"Failed to run ffprobe: {e.message}. Is FFmpeg installed?"

    def audio_info(self, path: str) -> AudioInfo:
        if not os.path.exists(path):
            return AudioInfo.invalid(MISSING_FILE_ERROR)

        try:
            size = os.path.getsize(path)
        except OSError:
            size = 0

        args = [
            "-v",
            "error",
            "-show_entries",
            "format=duration",
            "-of",
            "default=noprint_wrappers=1:nokey=1",
            path,
        ]
        try:
            result = self._engine.run(args, f"Probe duration for {path}")
        except EngineError as e:
            return AudioInfo.invalid(self._launch_error(e), size=size)

        if not result.ok:
            return AudioInfo.invalid(f"FFprobe error: {result.stderr}", size=size)

        duration_str = result.stdout.strip()
        try:
            duration = float(duration_str)
        except ValueError:
            # lenient: the file probed fine, its duration just is not numeric (e.g. "N/A")
            logger.warning(
                "Unparseable duration %r for %s, using 0.0", duration_str, path
            )
            duration = 0.0
        return AudioInfo.ok(duration=duration, size=size)

    def image_info(self, path: str) -> ImageInfo:
        if not os.path.exists(path):
            return ImageInfo.invalid(MISSING_FILE_ERROR)

        args = [
            "-v",
            "error",
            "-select_streams",
            "v:0",
            "-show_entries",
            "stream=width,height",
            "-of",
            "csv=s=x:p=0",
            path,
        ]
        try:
            result = self._engine.run(args, f"Probe dimensions for {path}")
        except EngineError as e:
            return ImageInfo.invalid(self._launch_error(e))

        if not result.ok:
            return ImageInfo.invalid(f"FFprobe error: {result.stderr}")

        dims = parse_dimensions(result.stdout)
        if dims is None:
            return ImageInfo.invalid(BAD_DIMENSIONS_ERROR)
        return ImageInfo.ok(*dims)


def parse_dimensions(text: str) -> Optional[tuple[int, int]]:
    """Parse ``WxH``; None unless both sides are positive integers."""
    parts = text.strip().split("x")
    if len(parts) != 2 or not all(p.isdecimal() and p.isascii() for p in parts):
        return None
    width, height = int(parts[0]), int(parts[1])
    if width <= 0 or height <= 0:
        return None
    return width, height
