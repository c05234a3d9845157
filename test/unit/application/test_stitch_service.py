import os
import subprocess
from types import SimpleNamespace

import pytest

from traffic_stitcher.application.use_cases.stitch_service import StitchService
from traffic_stitcher.core.exceptions import EngineUnavailableError
from traffic_stitcher.core.pyd_schemas import (
    AudioInfo,
    ExportFormat,
    FitMode,
    ImageInfo,
    StitchResult,
    VideoConfig,
)
from traffic_stitcher.infrastructure.adapters.bundles.stitch import get_stitch_adapter_bundle
from traffic_stitcher.infrastructure.adapters.stitcher_ffmpeg import FFmpegStitcher


class StubProbe:
    def __init__(self, audio=None, image=None):
        self.audio = audio or {}
        self.image = image or {}
        self.probed = []

    def audio_info(self, path):
        self.probed.append(path)
        return self.audio.get(path, AudioInfo.invalid("File does not exist"))

    def image_info(self, path):
        self.probed.append(path)
        return self.image.get(path, ImageInfo.invalid("File does not exist"))


class RecordingStitcher:
    def __init__(self):
        self.calls = []

    def stitch_audio(self, clips, output_path, bitrate):
        self.calls.append(("audio", list(clips), output_path, bitrate, None))
        return StitchResult.ok(output_path)

    def stitch_video(self, clips, output_path, bitrate, video_config=None):
        self.calls.append(("video", list(clips), output_path, bitrate, video_config))
        return StitchResult.ok(output_path)


@pytest.fixture
def probe():
    return StubProbe(
        audio={
            "/clips/intro.mp3": AudioInfo.ok(duration=10.0, size=100),
            "/clips/spot.WAV": AudioInfo.ok(duration=30.0, size=300),
        },
        image={"/img/cover.png": ImageInfo.ok(1280, 720)},
    )


@pytest.fixture
def stitcher():
    return RecordingStitcher()


@pytest.fixture
def service(fake_engine, probe, stitcher):
    return StitchService(
        SimpleNamespace(engine=fake_engine, media_probe=probe, stitcher=stitcher)
    )


# ----- stitching -----
def test_bitrate_defaults(service, stitcher):
    service.stitch_audio(["/clips/intro.mp3"], "/out/a.mp3")
    service.stitch_video(["/clips/intro.mp3"], "/out/a.mp4")
    assert stitcher.calls[0][3] == "256k"
    assert stitcher.calls[1][3] == "256k"
    assert stitcher.calls[1][4] == VideoConfig()


def test_bitrate_passed_through(service, stitcher):
    service.stitch_audio(["/clips/intro.mp3"], "/out/a.mp3", "128k")
    assert stitcher.calls[0][3] == "128k"


@pytest.mark.parametrize("bitrate", ["", "loud", "999999k"])
def test_bitrate_not_defaulted_unless_missing(service, stitcher, bitrate):
    service.stitch_audio(["/clips/intro.mp3"], "/out/a.mp3", bitrate)
    service.stitch_video(["/clips/intro.mp3"], "/out/a.mp4", bitrate)
    service.export(["/clips/intro.mp3"], "/out", bitrate=bitrate)
    assert [call[3] for call in stitcher.calls] == [bitrate] * 3


def test_empty_bitrate_reaches_engine(fake_engine, probe, stitch_settings):
    service = StitchService(
        SimpleNamespace(
            engine=fake_engine,
            media_probe=probe,
            stitcher=FFmpegStitcher(fake_engine, cfg=stitch_settings),
        )
    )
    service.stitch_audio(["/clips/intro.mp3"], "/out/a.mp3", "")
    service.stitch_video(["/clips/intro.mp3"], "/out/a.mp4", "")
    for args in fake_engine.calls:
        assert args[args.index("-b:a") + 1] == ""


@pytest.mark.asyncio
async def test_async_variants(service, stitcher):
    result = await service.astitch_audio(["/clips/intro.mp3"], "/out/a.mp3", "192k")
    assert result.output_path == "/out/a.mp3"
    video_config = VideoConfig(image_path="/img/cover.png", fit_mode=FitMode.fill)
    await service.astitch_video(["/clips/intro.mp3"], "/out/a.mp4", None, video_config)
    assert stitcher.calls[1][0] == "video"
    assert stitcher.calls[1][4] is video_config


def test_export_mp3(service, stitcher):
    result = service.export(["/clips/intro.mp3"], "/out")
    assert result.output_path == os.path.join("/out", "combined_audio.mp3")
    assert stitcher.calls[0][0] == "audio"


def test_export_mp4_named(service, stitcher):
    video_config = VideoConfig(image_path="/img/cover.png")
    service.export(
        ["/clips/intro.mp3"],
        "/out",
        name="morning_block",
        fmt="mp4",
        bitrate="320k",
        video_config=video_config,
    )
    kind, _, output_path, bitrate, cfg = stitcher.calls[0]
    assert kind == "video"
    assert output_path == os.path.join("/out", "morning_block.mp4")
    assert bitrate == "320k"
    assert cfg is video_config


def test_export_rejects_unknown_format(service):
    with pytest.raises(ValueError):
        service.export(["/clips/intro.mp3"], "/out", fmt="ogg")


def test_stitch_failure_is_returned(fake_engine, probe, stitch_settings):
    service = StitchService(
        SimpleNamespace(
            engine=fake_engine,
            media_probe=probe,
            stitcher=FFmpegStitcher(fake_engine, cfg=stitch_settings),
        )
    )
    assert service.stitch_audio([], "/out/a.mp3").error == "No clips provided"
    assert service.export([], "/out", fmt=ExportFormat.mp4).error == "No clips provided"


# ----- engine -----
def test_check_engine_installed(service):
    status = service.check_engine()
    assert status.installed is True
    assert status.version.startswith("ffmpeg version")
    assert status.error is None


@pytest.mark.parametrize(
    "error,installed",
    [
        (EngineUnavailableError("FFmpeg is not installed or not in PATH"), False),
        (
            EngineUnavailableError("FFmpeg found but returned an error", installed=True),
            True,
        ),
    ],
)
def test_check_engine_unavailable(make_engine, probe, stitcher, error, installed):
    service = StitchService(
        SimpleNamespace(
            engine=make_engine(version_error=error), media_probe=probe, stitcher=stitcher
        )
    )
    status = service.check_engine()
    assert status.installed is installed
    assert status.version is None
    assert status.error == error.message


# ----- clip list -----
def test_add_clips_keeps_order_and_reports_rejects(service, probe):
    batch = service.add_clips(
        ["/clips/spot.WAV", "/docs/notes.txt", "/clips/missing.mp3", "/clips/intro.mp3"]
    )
    assert [c.path for c in batch.clips] == ["/clips/spot.WAV", "/clips/intro.mp3"]
    assert batch.clips[0].name == "spot.WAV"
    assert batch.clips[0].duration == 30.0
    assert batch.clips[1].size == 100
    assert [(e.path, e.error) for e in batch.errors] == [
        ("/docs/notes.txt", "Unsupported format: notes.txt"),
        ("/clips/missing.mp3", "File does not exist"),
    ]
    # unsupported files are never probed
    assert "/docs/notes.txt" not in probe.probed


def test_add_clips_empty(service):
    batch = service.add_clips([])
    assert batch.clips == [] and batch.errors == []


def test_select_background(service):
    selection = service.select_background("/img/cover.png")
    assert selection.ok
    assert (selection.image.width, selection.image.height) == (1280, 720)
    assert selection.image.name == "cover.png"


def test_select_background_unsupported(service, probe):
    selection = service.select_background("/img/cover.bmp")
    assert not selection.ok
    assert selection.error == "Unsupported image format: cover.bmp"
    assert probe.probed == []


def test_select_background_unreadable(service):
    selection = service.select_background("/img/missing.jpg")
    assert selection.error == "File does not exist"


def test_probes_delegate(service):
    assert service.probe_audio("/clips/intro.mp3").duration == 10.0
    assert service.probe_image("/img/cover.png").width == 1280


def test_check_engine_binary_exits_nonzero(fake_completed, stitch_settings):
    fake_completed(returncode=1, stderr="error while loading shared libraries")
    service = StitchService(get_stitch_adapter_bundle(cfg=stitch_settings))

    status = service.check_engine()
    assert status.installed is True
    assert status.version is None
    assert status.error == "FFmpeg found but returned an error"


def test_check_engine_binary_missing(monkeypatch, stitch_settings):
    def fake_run(*args, **kwargs):
        raise FileNotFoundError("ffmpeg")

    monkeypatch.setattr(subprocess, "run", fake_run)
    service = StitchService(get_stitch_adapter_bundle(cfg=stitch_settings))

    status = service.check_engine()
    assert status.installed is False
    assert status.error == "FFmpeg is not installed or not in PATH"
