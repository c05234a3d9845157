from __future__ import annotations

import asyncio
import logging
import os
from typing import Iterable, Optional, Sequence, Union

from traffic_stitcher.application.interfaces.stitch_adapters import IStitchAdapters
from traffic_stitcher.core.config import settings
from traffic_stitcher.core.exceptions import EngineUnavailableError
from traffic_stitcher.core.pyd_schemas import (
    AudioInfo,
    BackgroundImage,
    BackgroundSelection,
    Clip,
    ClipBatch,
    ClipError,
    EngineStatus,
    ExportFormat,
    ImageInfo,
    StitchResult,
    VideoConfig,
)
from utils.clip_utils import is_supported_audio, is_supported_image

logger = logging.getLogger(__name__)

ClipLike = Union[Clip, str]


def _bitrate_or_default(bitrate: Optional[str]) -> str:
    # only a missing bitrate is defaulted; anything else goes to ffmpeg as given
    return settings.default_bitrate if bitrate is None else bitrate


class StitchService:
    """The caller-facing operations of the stitcher.

    Every method returns a value describing success or failure; none of the
    expected failures (missing files, empty clip lists, ffmpeg missing or
    rejecting its input) are raised.

    Stitching blocks until ffmpeg exits, which can take tens of seconds.
    Async callers should use ``astitch_audio`` / ``astitch_video``, which run
    the same work in a worker thread.
    """

    def __init__(self, adapters: IStitchAdapters) -> None:
        self._adapters = adapters

    # ----- probes -----
    def probe_audio(self, path: str) -> AudioInfo:
        return self._adapters.media_probe.audio_info(path)

    def probe_image(self, path: str) -> ImageInfo:
        return self._adapters.media_probe.image_info(path)

    # ----- stitching -----
    def stitch_audio(
        self,
        clips: Sequence[ClipLike],
        output_path: str,
        bitrate: Optional[str] = None,
    ) -> StitchResult:
        return self._adapters.stitcher.stitch_audio(
            clips, output_path, _bitrate_or_default(bitrate)
        )

    def stitch_video(
        self,
        clips: Sequence[ClipLike],
        output_path: str,
        bitrate: Optional[str] = None,
        video_config: Optional[VideoConfig] = None,
    ) -> StitchResult:
        return self._adapters.stitcher.stitch_video(
            clips,
            output_path,
            _bitrate_or_default(bitrate),
            video_config or VideoConfig(),
        )

    async def astitch_audio(
        self,
        clips: Sequence[ClipLike],
        output_path: str,
        bitrate: Optional[str] = None,
    ) -> StitchResult:
        return await asyncio.to_thread(self.stitch_audio, clips, output_path, bitrate)

    async def astitch_video(
        self,
        clips: Sequence[ClipLike],
        output_path: str,
        bitrate: Optional[str] = None,
        video_config: Optional[VideoConfig] = None,
    ) -> StitchResult:
        return await asyncio.to_thread(
            self.stitch_video, clips, output_path, bitrate, video_config
        )

    def export(
        self,
        clips: Sequence[ClipLike],
        output_dir: str,
        *,
        name: Optional[str] = None,
        fmt: ExportFormat = ExportFormat.mp3,
        bitrate: Optional[str] = None,
        video_config: Optional[VideoConfig] = None,
    ) -> StitchResult:
        """Stitch into ``<output_dir>/<name>.<mp3|mp4>``, picking the kind from ``fmt``."""
        fmt = ExportFormat(fmt)
        base = name or settings.default_output_name
        output_path = os.path.join(output_dir, f"{base}{fmt.extension}")
        if fmt.is_video:
            return self.stitch_video(clips, output_path, bitrate, video_config)
        return self.stitch_audio(clips, output_path, bitrate)

    # ----- engine -----
    def check_engine(self) -> EngineStatus:
        try:
            version = self._adapters.engine.version()
        except EngineUnavailableError as e:
            logger.warning("Engine check failed: %s", e.message)
            return EngineStatus(installed=e.installed, error=e.message)
        return EngineStatus(installed=True, version=version)

    # ----- clip list building -----
    def add_clips(self, paths: Iterable[str]) -> ClipBatch:
        """Probe each path and build clips from the valid ones, keeping order."""
        batch = ClipBatch()
        for path in paths:
            filename = os.path.basename(path) or path
            if not is_supported_audio(filename):
                batch.errors.append(
                    ClipError(path=path, error=f"Unsupported format: {filename}")
                )
                continue

            info = self.probe_audio(path)
            if not info.valid:
                batch.errors.append(
                    ClipError(path=path, error=info.error or f"Invalid audio: {filename}")
                )
                continue

            batch.clips.append(
                Clip(path=path, name=filename, duration=info.duration, size=info.size)
            )

        logger.info(
            "Added %d clip(s), rejected %d", len(batch.clips), len(batch.errors)
        )
        return batch

    def select_background(self, path: str) -> BackgroundSelection:
        filename = os.path.basename(path) or path
        if not is_supported_image(filename):
            return BackgroundSelection(error=f"Unsupported image format: {filename}")

        info = self.probe_image(path)
        if not info.valid:
            return BackgroundSelection(error=info.error or f"Invalid image: {filename}")
        return BackgroundSelection(
            image=BackgroundImage(
                path=path, name=filename, width=info.width, height=info.height
            )
        )
