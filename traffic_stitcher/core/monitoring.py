"""
Health check utilities: host metrics plus ffmpeg availability
"""

import os
import time
from datetime import datetime
from typing import Any, Dict, Optional

import psutil
from pydantic import BaseModel

from traffic_stitcher.core.config import settings
from traffic_stitcher.core.pyd_schemas import EngineStatus


class SystemHealth(BaseModel):
    """System health status model"""

    status: str
    timestamp: datetime
    uptime: float
    memory_usage: Dict[str, Any]
    temp_space: Dict[str, Any]
    cpu_usage: float
    engine: EngineStatus


class HealthChecker:
    """Health checking with system metrics"""

    def __init__(self):
        self.start_time = time.time()

    def get_memory_info(self) -> Dict[str, Any]:
        memory = psutil.virtual_memory()
        return {
            "total": memory.total,
            "available": memory.available,
            "percentage": memory.percent,
        }

    def get_cpu_info(self) -> float:
        return psutil.cpu_percent(interval=0.1)

    def check_temp_directory_space(self, temp_dir: Optional[str] = None) -> Dict[str, Any]:
        """Manifests are tiny, but ffmpeg output usually lands on the same disk"""
        temp_dir = temp_dir or settings.resolved_temp_dir
        if os.path.exists(temp_dir):
            try:
                disk = psutil.disk_usage(temp_dir)
            except OSError:
                pass
            else:
                free_gb = disk.free / (1024**3)
                return {
                    "path": temp_dir,
                    "free_space_gb": round(free_gb, 2),
                    "sufficient": free_gb > 1.0,
                }
        return {"path": temp_dir, "free_space_gb": 0, "sufficient": False}

    def get_system_health(self, engine: EngineStatus) -> SystemHealth:
        memory = self.get_memory_info()
        temp_space = self.check_temp_directory_space()
        cpu = self.get_cpu_info()

        status = "healthy"
        if not engine.available or memory["percentage"] > 90:
            status = "unhealthy"
        elif not temp_space["sufficient"] or memory["percentage"] > 80 or cpu > 80:
            status = "warning"

        return SystemHealth(
            status=status,
            timestamp=datetime.now(),
            uptime=time.time() - self.start_time,
            memory_usage=memory,
            temp_space=temp_space,
            cpu_usage=cpu,
            engine=engine,
        )


# Global health checker instance
health_checker = HealthChecker()
