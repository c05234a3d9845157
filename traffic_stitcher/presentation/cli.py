#!/usr/bin/env python3
"""
Command line front end for the stitcher.

Usage:
  traffic-stitcher check
  traffic-stitcher probe-audio clip.mp3
  traffic-stitcher probe-image cover.png
  traffic-stitcher audio -o out.mp3 intro.mp3 spot1.wav spot2.flac --bitrate 192k
  traffic-stitcher video -o out.mp4 intro.mp3 spot1.wav --image cover.png --fit-mode fill
  traffic-stitcher serve --port 8000
"""
from __future__ import annotations

import argparse
import logging
import os
from typing import List, Optional, Sequence

from traffic_stitcher.application.use_cases.stitch_service import StitchService
from traffic_stitcher.core.config import settings
from traffic_stitcher.core.logging_config import configure_logging
from traffic_stitcher.core.pyd_schemas import Clip, FitMode, StitchResult, VideoConfig
from traffic_stitcher.presentation.api.v1.dependencies.stitch import get_stitch_service
from utils.clip_utils import format_duration, format_size, total_duration, total_size

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="traffic-stitcher",
        description="Stitch audio clips into one MP3, or an MP4 with a still background",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("check", help="Check that ffmpeg is installed")

    p = sub.add_parser("probe-audio", help="Show duration and size of an audio file")
    p.add_argument("path")
    p = sub.add_parser("probe-image", help="Show dimensions of an image file")
    p.add_argument("path")

    for kind, help_text in (("audio", "Stitch clips into an MP3"), ("video", "Stitch clips into an MP4")):
        p = sub.add_parser(kind, help=help_text)
        p.add_argument("clips", nargs="+", help="Clip files, in playback order")
        p.add_argument("-o", "--output", required=True, help="Output file path")
        p.add_argument(
            "--bitrate",
            default=settings.default_bitrate,
            help=f"Audio bitrate passed to ffmpeg (default: {settings.default_bitrate})",
        )
        if kind == "video":
            p.add_argument("--image", help="Background image (black if omitted)")
            p.add_argument(
                "--fit-mode",
                choices=[m.value for m in FitMode],
                default=FitMode.fit.value,
                help="fit: letterbox without upscaling; fill: scale and crop",
            )

    p = sub.add_parser("serve", help="Run the HTTP API")
    p.add_argument("--host", default=None)
    p.add_argument("--port", type=int, default=None)
    return parser


def _collect_clips(service: StitchService, paths: Sequence[str]) -> List[Clip]:
    batch = service.add_clips([os.path.abspath(p) for p in paths])
    for err in batch.errors:
        print(f"Skipping {err.path}: {err.error}")
    if batch.clips:
        print(
            f"{len(batch.clips)} clip(s), "
            f"{format_duration(total_duration(batch.clips))}, "
            f"{format_size(total_size(batch.clips))}"
        )
    return batch.clips


def _report(result: StitchResult) -> int:
    if result.success:
        print(f"Exported: {result.output_path}")
        return 0
    print(f"Export failed: {result.error}")
    return 1


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(level="DEBUG" if args.verbose else None)

    if args.command == "serve":
        from traffic_stitcher.presentation.main import run_server

        run_server(args.host, args.port)
        return 0

    service = get_stitch_service()

    if args.command == "check":
        status = service.check_engine()
        if status.available:
            print(status.version)
            return 0
        print(status.error)
        return 1

    if args.command == "probe-audio":
        info = service.probe_audio(args.path)
        if not info.valid:
            print(f"Invalid: {info.error}")
            return 1
        print(f"duration={format_duration(info.duration)} ({info.duration:.3f}s) size={format_size(info.size)}")
        return 0

    if args.command == "probe-image":
        info = service.probe_image(args.path)
        if not info.valid:
            print(f"Invalid: {info.error}")
            return 1
        print(f"{info.width}x{info.height}")
        return 0

    clips = _collect_clips(service, args.clips)
    output_path = os.path.abspath(args.output)

    if args.command == "audio":
        return _report(service.stitch_audio(clips, output_path, args.bitrate))

    image_path = None
    if args.image:
        selection = service.select_background(os.path.abspath(args.image))
        if not selection.ok:
            print(f"Background rejected: {selection.error}")
            return 1
        image_path = selection.image.path
    video_config = VideoConfig(image_path=image_path, fit_mode=FitMode(args.fit_mode))
    return _report(service.stitch_video(clips, output_path, args.bitrate, video_config))


if __name__ == "__main__":
    raise SystemExit(main())
