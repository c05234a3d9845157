from __future__ import annotations

import os
import uuid
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field, constr, model_validator


def generate_clip_id() -> str:
    return uuid.uuid4().hex[:9]


class FitMode(str, Enum):
    fit = "fit"  # letterbox/pillarbox with black bars, never upscale
    fill = "fill"  # scale to cover, crop the overflow


class ExportFormat(str, Enum):
    mp3 = "mp3"
    mp4 = "mp4"

    @property
    def extension(self) -> str:
        return f".{self.value}"

    @property
    def is_video(self) -> bool:
        return self is ExportFormat.mp4


class Clip(BaseModel):
    """One audio clip; list position is concatenation position."""

    id: str = Field(default_factory=generate_clip_id)
    path: constr(min_length=1)
    name: str = ""
    duration: float = 0.0
    size: int = 0

    @model_validator(mode="after")
    def _default_name(self) -> "Clip":
        if not self.name:
            self.name = os.path.basename(self.path)
        return self


class VideoConfig(BaseModel):
    image_path: Optional[str] = None
    fit_mode: FitMode = FitMode.fit


class StitchResult(BaseModel):
    """Outcome of a stitch; exactly one of output_path / error is set."""

    success: bool
    output_path: Optional[str] = None
    error: Optional[str] = None

    @model_validator(mode="after")
    def _exactly_one_field(self) -> "StitchResult":
        if self.success:
            if not self.output_path or self.error is not None:
                raise ValueError("successful result needs output_path and no error")
        elif not self.error or self.output_path is not None:
            raise ValueError("failed result needs error and no output_path")
        return self

    @classmethod
    def ok(cls, output_path: str) -> "StitchResult":
        return cls(success=True, output_path=output_path)

    @classmethod
    def fail(cls, error: str) -> "StitchResult":
        return cls(success=False, error=error)


class AudioInfo(BaseModel):
    duration: float = 0.0
    size: int = 0
    valid: bool
    error: Optional[str] = None

    @model_validator(mode="after")
    def _metrics_or_error(self) -> "AudioInfo":
        if self.valid and self.error is not None:
            raise ValueError("valid AudioInfo cannot carry an error")
        if not self.valid and (not self.error or self.duration != 0.0):
            raise ValueError("invalid AudioInfo needs an error and zero duration")
        return self

    @classmethod
    def ok(cls, duration: float, size: int) -> "AudioInfo":
        return cls(duration=duration, size=size, valid=True)

    @classmethod
    def invalid(cls, error: str, size: int = 0) -> "AudioInfo":
        # size stays best-effort: a readable file that ffprobe rejects keeps it
        return cls(duration=0.0, size=size, valid=False, error=error)


class ImageInfo(BaseModel):
    width: int = 0
    height: int = 0
    valid: bool
    error: Optional[str] = None

    @model_validator(mode="after")
    def _metrics_or_error(self) -> "ImageInfo":
        if self.valid:
            if self.error is not None or self.width <= 0 or self.height <= 0:
                raise ValueError("valid ImageInfo needs positive dimensions and no error")
        elif not self.error or self.width or self.height:
            raise ValueError("invalid ImageInfo needs an error and zero dimensions")
        return self

    @classmethod
    def ok(cls, width: int, height: int) -> "ImageInfo":
        return cls(width=width, height=height, valid=True)

    @classmethod
    def invalid(cls, error: str) -> "ImageInfo":
        return cls(width=0, height=0, valid=False, error=error)


class BackgroundImage(BaseModel):
    path: str
    name: str
    width: int
    height: int


class ClipError(BaseModel):
    path: str
    error: str


class ClipBatch(BaseModel):
    """Result of adding files to the clip list."""

    clips: List[Clip] = Field(default_factory=list)
    errors: List[ClipError] = Field(default_factory=list)


class EngineStatus(BaseModel):
    """ffmpeg availability.

    ``installed`` is True with an ``error`` when the binary started but exited
    non-zero; only a ``version`` means it is usable.
    """

    installed: bool
    version: Optional[str] = None
    error: Optional[str] = None

    @property
    def available(self) -> bool:
        return self.version is not None


class BitrateOption(BaseModel):
    label: str
    value: str


class BackgroundSelection(BaseModel):
    """A validated background image, or why it was rejected."""

    image: Optional[BackgroundImage] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.image is not None
