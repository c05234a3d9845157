"""Argument vectors for the two stitch kinds (without the ffmpeg binary itself)."""

from __future__ import annotations

from typing import List, Optional

from traffic_stitcher.core.config import Settings, settings as default_settings
from traffic_stitcher.core.pyd_schemas import VideoConfig
from traffic_stitcher.infrastructure.adapters.renderer.utils.filter_graph import (
    black_background_filter,
    build_fit_filter,
)

OVERWRITE_FLAG = "-y"


def concat_input_args(manifest_path: str) -> List[str]:
    # -safe 0: the manifest holds absolute paths
    return ["-f", "concat", "-safe", "0", "-i", str(manifest_path)]


def build_audio_args(
    manifest_path: str,
    output_path: str,
    bitrate: str,
    cfg: Optional[Settings] = None,
) -> List[str]:
    """Concatenate the manifest into an MP3."""
    cfg = cfg or default_settings
    return [
        OVERWRITE_FLAG,
        *concat_input_args(manifest_path),
        "-c:a",
        cfg.mp3_audio_codec,
        "-b:a",
        bitrate,
        str(output_path),
    ]


def video_input_args(
    video_config: VideoConfig, cfg: Optional[Settings] = None
) -> List[str]:
    """The single video input: a looped still, or a generated black canvas."""
    cfg = cfg or default_settings
    if video_config.image_path:
        return ["-loop", "1", "-i", str(video_config.image_path)]
    return [
        "-f",
        "lavfi",
        "-i",
        f"color=black:s={cfg.video_size}:r={cfg.video_background_fps}",
    ]


def video_filter(video_config: VideoConfig, cfg: Optional[Settings] = None) -> str:
    cfg = cfg or default_settings
    if video_config.image_path:
        return build_fit_filter(
            video_config.fit_mode,
            cfg.video_width,
            cfg.video_height,
            cfg.video_pixel_format_image,
        )
    return black_background_filter(cfg.video_pixel_format_black)


def build_video_args(
    manifest_path: str,
    output_path: str,
    bitrate: str,
    video_config: VideoConfig,
    cfg: Optional[Settings] = None,
) -> List[str]:
    """Pair the concatenated audio with a still background in an MP4.

    Encoding policy is fixed by settings; only the audio bitrate comes from
    the caller and is passed through verbatim.
    """
    cfg = cfg or default_settings
    return [
        OVERWRITE_FLAG,
        *video_input_args(video_config, cfg),
        *concat_input_args(manifest_path),
        "-vf",
        video_filter(video_config, cfg),
        "-c:v",
        cfg.video_codec,
        "-crf",
        str(cfg.video_crf),
        "-preset",
        cfg.video_preset,
        "-tune",
        cfg.video_tune,
        "-c:a",
        cfg.mp4_audio_codec,
        "-b:a",
        bitrate,
        # the looped image never ends on its own
        "-shortest",
        "-movflags",
        "+faststart",
        str(output_path),
    ]
