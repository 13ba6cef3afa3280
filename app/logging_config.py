"""Structured logging configuration (Loguru)."""

from __future__ import annotations

import sys

from loguru import logger

from app.config import Settings, settings as default_settings


def setup_logging(settings: Settings | None = None) -> None:
    """Configure Loguru sinks for the CLI."""
    settings = settings or default_settings
    logger.remove()

    fmt = (
        "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
        "<level>{level: <8}</level> | "
        "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> — "
        "<level>{message}</level>"
    )

    logger.add(
        sys.stderr,
        format=fmt,
        level=settings.log_level,
        colorize=True,
        backtrace=True,
        diagnose=settings.debug,
    )

    if settings.log_file:
        logger.add(
            settings.log_file,
            format=fmt,
            level="DEBUG",
            rotation="10 MB",
            retention=5,
        )

    logger.debug(
        "Logging ready  |  level={}  version={}",
        settings.log_level,
        settings.app_version,
    )
