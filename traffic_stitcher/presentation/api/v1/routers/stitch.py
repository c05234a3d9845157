import asyncio
import logging
import os

from fastapi import APIRouter, Depends, HTTPException
from filelock import FileLock, Timeout

from traffic_stitcher.application.use_cases.stitch_service import StitchService
from traffic_stitcher.core.config import settings
from traffic_stitcher.core.pyd_schemas import (
    AudioInfo,
    BackgroundImage,
    ClipBatch,
    ExportFormat,
    ImageInfo,
    StitchResult,
)
from traffic_stitcher.presentation.api.v1.dependencies.stitch import get_stitch_service
from traffic_stitcher.presentation.api.v1.schemas.stitch import (
    ClipPathsRequest,
    OptionsResponse,
    PathRequest,
    StitchAudioRequest,
    StitchVideoRequest,
)
from utils.clip_utils import (
    BITRATE_OPTIONS,
    SUPPORTED_AUDIO_EXTENSIONS,
    SUPPORTED_IMAGE_EXTENSIONS,
)

logger = logging.getLogger(__name__)

router = APIRouter()


def _lock_path(manifest_name: str) -> str:
    return os.path.join(settings.resolved_temp_dir, f"{manifest_name}.lock")


def _run_locked(manifest_name: str, fn, *args):
    # stitches of one kind share a manifest path, so they run one at a time
    with FileLock(_lock_path(manifest_name), timeout=settings.stitch_lock_timeout):
        return fn(*args)


async def _stitch_serialized(manifest_name: str, fn, *args) -> StitchResult:
    try:
        return await asyncio.to_thread(_run_locked, manifest_name, fn, *args)
    except Timeout:
        logger.warning("Stitch lock %s busy", manifest_name)
        raise HTTPException(
            status_code=409,
            detail={"error": "Another stitch of this kind is already running"},
        )


@router.get("/options", response_model=OptionsResponse)
async def get_options():
    """Supported input formats, bitrate presets and defaults."""
    return OptionsResponse(
        audio_extensions=list(SUPPORTED_AUDIO_EXTENSIONS),
        image_extensions=list(SUPPORTED_IMAGE_EXTENSIONS),
        bitrate_options=BITRATE_OPTIONS,
        export_formats=list(ExportFormat),
        default_bitrate=settings.default_bitrate,
        default_output_name=settings.default_output_name,
    )


@router.post("/probe/audio", response_model=AudioInfo)
async def probe_audio(
    body: PathRequest, service: StitchService = Depends(get_stitch_service)
):
    return await asyncio.to_thread(service.probe_audio, body.path)


@router.post("/probe/image", response_model=ImageInfo)
async def probe_image(
    body: PathRequest, service: StitchService = Depends(get_stitch_service)
):
    return await asyncio.to_thread(service.probe_image, body.path)


@router.post("/clips", response_model=ClipBatch)
async def add_clips(
    body: ClipPathsRequest, service: StitchService = Depends(get_stitch_service)
):
    """Probe audio files and return them as clips, in request order."""
    return await asyncio.to_thread(service.add_clips, body.paths)


@router.post("/background", response_model=BackgroundImage)
async def select_background(
    body: PathRequest, service: StitchService = Depends(get_stitch_service)
):
    selection = await asyncio.to_thread(service.select_background, body.path)
    if not selection.ok:
        raise HTTPException(status_code=400, detail={"error": selection.error})
    return selection.image


@router.post("/stitch/audio", response_model=StitchResult)
async def stitch_audio(
    body: StitchAudioRequest, service: StitchService = Depends(get_stitch_service)
):
    """Concatenate the clips into an MP3. Blocks until ffmpeg finishes."""
    return await _stitch_serialized(
        settings.audio_manifest_name,
        service.stitch_audio,
        body.clips,
        body.output_path,
        body.bitrate,
    )


@router.post("/stitch/video", response_model=StitchResult)
async def stitch_video(
    body: StitchVideoRequest, service: StitchService = Depends(get_stitch_service)
):
    """Concatenate the clips under a still background into an MP4."""
    return await _stitch_serialized(
        settings.video_manifest_name,
        service.stitch_video,
        body.clips,
        body.output_path,
        body.bitrate,
        body.video_config,
    )
