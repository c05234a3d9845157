from __future__ import annotations

from typing import Protocol, runtime_checkable

from .engine import IMediaEngine
from .media_probe import IMediaProbe
from .stitcher import IStitcher


@runtime_checkable
class IStitchAdapters(Protocol):
    engine: IMediaEngine
    media_probe: IMediaProbe
    stitcher: IStitcher
