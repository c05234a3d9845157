from __future__ import annotations

from types import SimpleNamespace

from traffic_stitcher.application.interfaces.stitch_adapters import IStitchAdapters
from traffic_stitcher.core.config import Settings, settings as default_settings
from traffic_stitcher.infrastructure.adapters import (
    FFmpegEngine,
    FFmpegMediaProbe,
    FFmpegStitcher,
)


def get_stitch_adapter_bundle(
    *, temp_dir: str | None = None, cfg: Settings | None = None
) -> IStitchAdapters:
    """Provide the ffmpeg-backed adapters for StitchService.

    ``temp_dir`` overrides where the concat manifests are written.
    """
    cfg = cfg or default_settings
    engine = FFmpegEngine(cfg.ffmpeg_binary_path, timeout=cfg.ffmpeg_timeout)
    probe_engine = FFmpegEngine(
        cfg.ffprobe_binary_path, timeout=cfg.ffmpeg_timeout, display_name="ffprobe"
    )
    return SimpleNamespace(
        engine=engine,
        media_probe=FFmpegMediaProbe(probe_engine),
        stitcher=FFmpegStitcher(engine, temp_dir=temp_dir, cfg=cfg),
    )
