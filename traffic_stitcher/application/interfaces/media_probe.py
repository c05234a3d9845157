from __future__ import annotations

from typing import Protocol

from traffic_stitcher.core.pyd_schemas import AudioInfo, ImageInfo


class IMediaProbe(Protocol):
    def audio_info(self, path: str) -> AudioInfo:
        """Return duration and size of an audio file.
        Never raises; problems are reported through ``valid``/``error``.
        """
        ...

    def image_info(self, path: str) -> ImageInfo:
        """Return pixel dimensions of the first video stream of an image."""
        ...
