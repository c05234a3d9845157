from __future__ import annotations

from typing import Protocol, Sequence

from traffic_stitcher.core.pyd_schemas import Clip, StitchResult, VideoConfig


class IStitcher(Protocol):
    """Joins clips, in list order, into one output file."""

    def stitch_audio(
        self, clips: Sequence[Clip], output_path: str, bitrate: str
    ) -> StitchResult:
        ...

    def stitch_video(
        self,
        clips: Sequence[Clip],
        output_path: str,
        bitrate: str,
        video_config: VideoConfig,
    ) -> StitchResult:
        ...
