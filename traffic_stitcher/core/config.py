"""
Application configuration using Pydantic Settings
"""

import tempfile
from typing import Optional

from pydantic import field_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings with environment variable support"""

    # API Settings
    api_title: str = "Radio Traffic Stitcher API"
    api_description: str = "Stitch audio clips into a single MP3 or a still-image MP4"
    api_version: str = "1.0.0"

    # Server Settings
    host: str = "127.0.0.1"
    port: int = 8000
    debug: bool = False

    # Logging Settings
    log_level: str = "INFO"
    log_format: str = "[%(asctime)s] %(levelname)s %(name)s: %(message)s"
    log_date_format: str = "%Y-%m-%d %H:%M:%S"
    log_file: Optional[str] = None  # enables a rotating file handler

    # FFmpeg Settings
    ffmpeg_binary_path: str = "ffmpeg"
    ffprobe_binary_path: str = "ffprobe"
    # None = wait forever; a hung ffmpeg hangs the call unless this is set
    ffmpeg_timeout: Optional[float] = None

    # Concat manifest Settings
    temp_dir: Optional[str] = None  # None = system temp directory
    audio_manifest_name: str = "ffmpeg_concat_list.txt"
    video_manifest_name: str = "ffmpeg_video_concat_list.txt"
    stitch_lock_timeout: float = 5.0

    # Video Output Settings
    video_width: int = 1920
    video_height: int = 1080
    video_background_fps: int = 1
    video_codec: str = "libx264"
    video_crf: int = 12
    video_preset: str = "slow"
    video_tune: str = "stillimage"
    # yuv444p keeps flat-colour graphics sharp; the black canvas only needs yuv420p
    video_pixel_format_image: str = "yuv444p"
    video_pixel_format_black: str = "yuv420p"

    # Audio Output Settings
    mp3_audio_codec: str = "libmp3lame"
    mp4_audio_codec: str = "aac"
    default_bitrate: str = "256k"
    default_output_name: str = "combined_audio"

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
        "extra": "ignore",
    }

    @field_validator("video_width", "video_height", "video_background_fps")
    @classmethod
    def must_be_positive(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("must be a positive integer")
        return v

    @property
    def resolved_temp_dir(self) -> str:
        """Directory that holds the concat manifests."""
        return self.temp_dir or tempfile.gettempdir()

    @property
    def video_size(self) -> str:
        """Target canvas as ffmpeg's WxH size string."""
        return f"{self.video_width}x{self.video_height}"


# Global settings instance
settings = Settings()
