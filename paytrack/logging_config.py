"""
Logging Configuration
Console and rotating file handlers for the service
"""
import logging
import logging.config
import os
from typing import Optional

from paytrack.config import settings


def build_logging_config(level: str, log_file: Optional[str]) -> dict:
    handlers = {
        'console': {
            'class': 'logging.StreamHandler',
            'formatter': 'standard',
            'level': level,
        },
    }
    if log_file:
        handlers['file'] = {
            'class': 'logging.handlers.RotatingFileHandler',
            'formatter': 'standard',
            'filename': log_file,
            'maxBytes': 1024 * 1024 * 5,  # 5 MB
            'backupCount': 5,
            'level': level,
            'encoding': 'utf-8',
        }

    return {
        'version': 1,
        'disable_existing_loggers': False,
        'formatters': {
            'standard': {
                'format': '%(asctime)s - %(name)s - %(levelname)s - %(module)s.%(funcName)s:%(lineno)d - %(message)s',
            },
        },
        'handlers': handlers,
        'root': {
            'handlers': list(handlers),
            'level': level,
        },
    }


def setup_logging(level: Optional[str] = None, log_file: Optional[str] = None):
    """Configure root logging from settings unless overridden"""
    level = (level or settings.LOG_LEVEL).upper()
    log_file = settings.LOG_FILE if log_file is None else log_file

    if log_file:
        log_dir = os.path.dirname(log_file)
        if log_dir:
            os.makedirs(log_dir, exist_ok=True)

    logging.config.dictConfig(build_logging_config(level, log_file))
    logging.getLogger(__name__).info("Logging configured at %s", level)
