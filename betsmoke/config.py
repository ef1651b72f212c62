"""
Configuration constants for the BetSmoke competition browser
Centralizes timeouts and logger wiring for maintainability
"""

import logging
import os
from logging.handlers import RotatingFileHandler

from .settings import BETSMOKE_MAX_RETRIES, BETSMOKE_TIMEOUT_MS

API_TIMEOUT = BETSMOKE_TIMEOUT_MS / 1000.0
"""Default timeout (seconds) for calls to the BetSmoke proxy."""

API_MAX_RETRIES = BETSMOKE_MAX_RETRIES
"""Maximum attempts per proxy call (1 disables automatic retries)."""

API_RETRY_BACKOFF = float(os.getenv("API_RETRY_BACKOFF", 0.5))
"""Backoff factor between attempts when retries are enabled."""


def setup_logger(name: str) -> logging.Logger:
    """Create or retrieve a configured logger for the application."""

    logger = logging.getLogger(name)

    log_level_str = os.getenv("LOG_LEVEL", "INFO").upper()
    log_level = getattr(logging, log_level_str, logging.INFO)
    logger.setLevel(log_level)

    if logging.getLogger().handlers:
        logger.propagate = True
        return logger

    if not logger.handlers:
        log_file = os.path.join(os.path.dirname(os.path.dirname(__file__)), "betsmoke.log")
        os.makedirs(os.path.dirname(log_file), exist_ok=True)
        handler = RotatingFileHandler(log_file, maxBytes=5 * 1024 * 1024, backupCount=3)
        formatter = logging.Formatter('%(asctime)s [%(levelname)s] %(name)s: %(message)s')
        handler.setFormatter(formatter)
        handler.setLevel(log_level)
        logger.addHandler(handler)
        logger.propagate = False

    return logger
