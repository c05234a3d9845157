from typing import List, Optional

from pydantic import BaseModel, Field

from traffic_stitcher.core.pyd_schemas import BitrateOption, Clip, ExportFormat, VideoConfig


class PathRequest(BaseModel):
    path: str


class ClipPathsRequest(BaseModel):
    paths: List[str]


class StitchAudioRequest(BaseModel):
    # an empty list is answered with a failed StitchResult, not a 422
    clips: List[Clip] = Field(default_factory=list)
    output_path: str
    bitrate: Optional[str] = None


class StitchVideoRequest(StitchAudioRequest):
    video_config: VideoConfig = Field(default_factory=VideoConfig)


class OptionsResponse(BaseModel):
    audio_extensions: List[str]
    image_extensions: List[str]
    bitrate_options: List[BitrateOption]
    export_formats: List[ExportFormat]
    default_bitrate: str
    default_output_name: str
