"""
Logging setup shared by the API server and the CLI
"""

import logging
import os
from logging.handlers import RotatingFileHandler
from typing import Optional

from traffic_stitcher.core.config import Settings, settings as default_settings


def configure_logging(
    cfg: Optional[Settings] = None, level: Optional[str] = None
) -> None:
    """Log to the console, and to a rotating file when ``log_file`` is set."""
    cfg = cfg or default_settings
    handlers: list[logging.Handler] = [logging.StreamHandler()]
    if cfg.log_file:
        log_dir = os.path.dirname(cfg.log_file)
        if log_dir:
            os.makedirs(log_dir, exist_ok=True)
        handlers.append(
            RotatingFileHandler(
                cfg.log_file, maxBytes=5 * 1024 * 1024, backupCount=2, encoding="utf-8"
            )
        )
    logging.basicConfig(
        level=getattr(logging, (level or cfg.log_level).upper(), logging.INFO),
        format=cfg.log_format,
        datefmt=cfg.log_date_format,
        handlers=handlers,
        force=True,
    )
