# pkikeys/log.py
from __future__ import annotations
import logging
from typing import Optional

from .config import settings


def configure_logging(level: Optional[str] = None) -> logging.Logger:
    ''' Set up root logging from settings; returns the package logger. '''
    logging.basicConfig(
        level=(level or settings.log_level).upper(),
        format=settings.log_format,
    )
    return logging.getLogger("pkikeys")
