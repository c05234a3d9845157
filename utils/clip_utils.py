"""
Clip list helpers: supported formats, bitrate presets and display formatting
"""

import os
from typing import Iterable, List

from traffic_stitcher.core.pyd_schemas import BitrateOption, Clip

SUPPORTED_AUDIO_EXTENSIONS = (
    ".mp3",
    ".wav",
    ".ogg",
    ".flac",
    ".m4a",
    ".aac",
    ".wma",
    ".opus",
)

SUPPORTED_IMAGE_EXTENSIONS = (".png", ".jpg", ".jpeg", ".webp", ".gif")

BITRATE_OPTIONS: List[BitrateOption] = [
    BitrateOption(label="128 kbps", value="128k"),
    BitrateOption(label="192 kbps", value="192k"),
    BitrateOption(label="256 kbps", value="256k"),
    BitrateOption(label="320 kbps", value="320k"),
]


def _extension(filename: str) -> str:
    return os.path.splitext(filename)[1].lower()


def is_supported_audio(filename: str) -> bool:
    return _extension(filename) in SUPPORTED_AUDIO_EXTENSIONS


def is_supported_image(filename: str) -> bool:
    return _extension(filename) in SUPPORTED_IMAGE_EXTENSIONS


def total_duration(clips: Iterable[Clip]) -> float:
    return sum(clip.duration for clip in clips)


def total_size(clips: Iterable[Clip]) -> int:
    return sum(clip.size for clip in clips)


def format_duration(seconds: float) -> str:
    """Format seconds as ``m:ss`` (minutes are not wrapped into hours).

    Example:
        >>> format_duration(125.7)
        '2:05'
    """
    seconds = max(0.0, float(seconds))
    mins = int(seconds // 60)
    secs = int(seconds % 60)
    return f"{mins}:{secs:02d}"


def format_size(num_bytes: int) -> str:
    """Human readable size with one decimal for KB and MB.

    Example:
        >>> format_size(1536)
        '1.5 KB'
    """
    if num_bytes < 1024:
        return f"{num_bytes} B"
    if num_bytes < 1024 * 1024:
        return f"{num_bytes / 1024:.1f} KB"
    return f"{num_bytes / (1024 * 1024):.1f} MB"
