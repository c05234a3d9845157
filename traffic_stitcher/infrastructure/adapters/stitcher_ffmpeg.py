from __future__ import annotations

import logging
import os
from typing import Callable, List, Optional, Sequence, Union

from traffic_stitcher.application.interfaces.engine import IMediaEngine
from traffic_stitcher.application.interfaces.stitcher import IStitcher
from traffic_stitcher.core.config import Settings, settings as default_settings
from traffic_stitcher.core.exceptions import (
    EngineError,
    EngineNotFoundError,
    EngineTimeoutError,
    ManifestError,
)
from traffic_stitcher.core.pyd_schemas import Clip, StitchResult, VideoConfig
from traffic_stitcher.infrastructure.adapters.engine_ffmpeg import FFmpegEngine
from traffic_stitcher.infrastructure.adapters.renderer.utils.ffmpeg_args import (
    build_audio_args,
    build_video_args,
)
from utils.resource_manager import managed_manifest
from utils.subprocess_utils import EngineRun

logger = logging.getLogger(__name__)

NO_CLIPS_ERROR = "No clips provided"
NO_OUTPUT_ERROR = "No output path provided"

ClipLike = Union[Clip, str]


def clip_paths(clips: Sequence[ClipLike]) -> List[str]:
    return [clip.path if isinstance(clip, Clip) else str(clip) for clip in clips]


def engine_error_message(e: EngineError) -> str:
    """Human readable text for an engine that could not be run to completion."""
    if isinstance(e, EngineNotFoundError):
        return f"Failed to run FFmpeg: {e.message}. Is FFmpeg installed?"
    if isinstance(e, EngineTimeoutError):
        return f"FFmpeg error: {e.message}"
    return f"Failed to run FFmpeg: {e.message}"


class FFmpegStitcher(IStitcher):
    """
    Concatenates clips with ffmpeg's concat demuxer.

    Each call writes a manifest to a fixed temp path (one per stitch kind),
    runs ffmpeg once, then deletes the manifest. Audio and video stitches can
    run side by side; two stitches of the same kind must not, because they
    share the manifest path.

    Public entry points:
        - stitch_audio(...): clips -> MP3
        - stitch_video(...): clips + still image (or black) -> MP4
    """

    def __init__(
        self,
        engine: Optional[IMediaEngine] = None,
        *,
        temp_dir: Optional[str] = None,
        cfg: Optional[Settings] = None,
    ) -> None:
        self._cfg = cfg or default_settings
        self._engine = engine or FFmpegEngine(self._cfg.ffmpeg_binary_path)
        self._temp_dir = temp_dir or self._cfg.resolved_temp_dir

    @property
    def audio_manifest_path(self) -> str:
        return os.path.join(self._temp_dir, self._cfg.audio_manifest_name)

    @property
    def video_manifest_path(self) -> str:
        return os.path.join(self._temp_dir, self._cfg.video_manifest_name)

    def stitch_audio(
        self, clips: Sequence[ClipLike], output_path: str, bitrate: str
    ) -> StitchResult:
        if not clips:
            return StitchResult.fail(NO_CLIPS_ERROR)
        if not output_path:
            return StitchResult.fail(NO_OUTPUT_ERROR)

        logger.info("Stitching %d clips -> %s (mp3 %s)", len(clips), output_path, bitrate)
        return self._stitch(
            clips,
            self.audio_manifest_path,
            lambda manifest: build_audio_args(manifest, output_path, bitrate, self._cfg),
            output_path,
            "Stitch audio",
        )

    def stitch_video(
        self,
        clips: Sequence[ClipLike],
        output_path: str,
        bitrate: str,
        video_config: Optional[VideoConfig] = None,
    ) -> StitchResult:
        if not clips:
            return StitchResult.fail(NO_CLIPS_ERROR)
        if not output_path:
            return StitchResult.fail(NO_OUTPUT_ERROR)

        video_config = video_config or VideoConfig()
        logger.info(
            "Stitching %d clips -> %s (mp4 %s, background=%s, fit=%s)",
            len(clips),
            output_path,
            bitrate,
            video_config.image_path or "black",
            video_config.fit_mode.value,
        )
        return self._stitch(
            clips,
            self.video_manifest_path,
            lambda manifest: build_video_args(
                manifest, output_path, bitrate, video_config, self._cfg
            ),
            output_path,
            "Stitch video",
        )

    def _stitch(
        self,
        clips: Sequence[ClipLike],
        manifest_path: str,
        build_args: Callable[[str], List[str]],
        output_path: str,
        operation_name: str,
    ) -> StitchResult:
        try:
            with managed_manifest(manifest_path, clip_paths(clips)) as manifest:
                run = self._engine.run(build_args(manifest), operation_name)
        except ManifestError as e:
            logger.error("%s: %s", operation_name, e.message)
            return StitchResult.fail(e.message)
        except EngineError as e:
            return StitchResult.fail(engine_error_message(e))
        return self._to_result(run, output_path, operation_name)

    def _to_result(
        self, run: EngineRun, output_path: str, operation_name: str
    ) -> StitchResult:
        if not run.ok:
            return StitchResult.fail(f"FFmpeg error: {run.stderr}")
        if not os.path.exists(output_path):
            logger.warning(
                "%s exited 0 but %s was not found", operation_name, output_path
            )
        else:
            logger.info("✅ %s done: %s", operation_name, output_path)
        return StitchResult.ok(str(output_path))
