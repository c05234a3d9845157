from .engine_ffmpeg import FFmpegEngine
from .media_probe_ffmpeg import FFmpegMediaProbe
from .stitcher_ffmpeg import FFmpegStitcher

__all__ = [
    "FFmpegEngine",
    "FFmpegMediaProbe",
    "FFmpegStitcher",
]
