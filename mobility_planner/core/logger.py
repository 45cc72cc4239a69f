# mobility_planner/core/logger.py
from loguru import logger

from mobility_planner.core.config import settings
from mobility_planner.core.logging_config import setup_logging

setup_logging(settings.LOG_LEVEL)

__all__ = ["logger"]
