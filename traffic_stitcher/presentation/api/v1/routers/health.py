"""
Health check and engine availability endpoints
"""

import asyncio

from fastapi import APIRouter, Depends

from traffic_stitcher.application.use_cases.stitch_service import StitchService
from traffic_stitcher.core.monitoring import SystemHealth, health_checker
from traffic_stitcher.core.pyd_schemas import EngineStatus
from traffic_stitcher.presentation.api.v1.dependencies.stitch import get_stitch_service

router = APIRouter(tags=["health"])


@router.get("/health", response_model=SystemHealth)
async def health_check(service: StitchService = Depends(get_stitch_service)):
    """
    Health check endpoint that returns system status, metrics and ffmpeg status
    """
    engine = await asyncio.to_thread(service.check_engine)
    return await asyncio.to_thread(health_checker.get_system_health, engine)


@router.get("/engine", response_model=EngineStatus)
async def engine_status(service: StitchService = Depends(get_stitch_service)):
    """Report whether ffmpeg is installed and its version banner."""
    return await asyncio.to_thread(service.check_engine)
