import tempfile

import pytest
from pydantic import ValidationError

from traffic_stitcher.core.config import Settings


def test_defaults():
    cfg = Settings(_env_file=None)
    assert cfg.audio_manifest_name == "ffmpeg_concat_list.txt"
    assert cfg.video_manifest_name == "ffmpeg_video_concat_list.txt"
    assert cfg.video_size == "1920x1080"
    assert cfg.default_bitrate == "256k"
    assert cfg.ffmpeg_timeout is None


def test_temp_dir_falls_back_to_system(monkeypatch):
    monkeypatch.delenv("TEMP_DIR", raising=False)
    assert Settings(_env_file=None).resolved_temp_dir == tempfile.gettempdir()
    assert Settings(temp_dir="/var/spool/stitch", _env_file=None).resolved_temp_dir == (
        "/var/spool/stitch"
    )


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("FFMPEG_BINARY_PATH", "/opt/ffmpeg/bin/ffmpeg")
    monkeypatch.setenv("VIDEO_WIDTH", "1280")
    monkeypatch.setenv("FFMPEG_TIMEOUT", "600")
    cfg = Settings(_env_file=None)
    assert cfg.ffmpeg_binary_path == "/opt/ffmpeg/bin/ffmpeg"
    assert cfg.video_width == 1280
    assert cfg.ffmpeg_timeout == 600.0


@pytest.mark.parametrize("field", ["video_width", "video_height", "video_background_fps"])
def test_canvas_must_be_positive(field):
    with pytest.raises(ValidationError):
        Settings(**{field: 0}, _env_file=None)
