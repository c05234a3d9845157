from .filter_graph import (
    black_background_filter,
    build_fit_filter,
    fill_output_size,
    fit_output_size,
    fit_scale_factor,
)
from .ffmpeg_args import build_audio_args, build_video_args

__all__ = [
    "black_background_filter",
    "build_fit_filter",
    "fill_output_size",
    "fit_output_size",
    "fit_scale_factor",
    "build_audio_args",
    "build_video_args",
]
