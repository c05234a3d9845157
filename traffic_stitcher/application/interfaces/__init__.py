from .media_probe import IMediaProbe
from .engine import IMediaEngine
from .stitcher import IStitcher
from .stitch_adapters import IStitchAdapters

__all__ = [
    "IMediaProbe",
    "IMediaEngine",
    "IStitcher",
    "IStitchAdapters",
]
