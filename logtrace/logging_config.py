"""
Logging configuration for the service.
"""

import logging
import sys
from typing import Optional

from logtrace.config import get_settings


def configure_logging(log_level: Optional[str] = None) -> None:
    """
    Configure console logging for the application.
    
    Args:
        log_level: Level name overriding ``Settings.log_level``
    """
    level = (log_level or get_settings().log_level).upper()
    
    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    
    # Remove existing handlers
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)
        
    handler = logging.StreamHandler(sys.stdout)
    formatter = logging.Formatter(
        fmt="%(asctime)s [%(levelname)s] [%(name)s] %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S%z"
    )
    handler.setFormatter(formatter)
    root_logger.addHandler(handler)
    
    # Silence noise
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)
