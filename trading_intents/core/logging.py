"""Loguru sink configuration for services using trading intents."""

from __future__ import annotations

import sys

from loguru import logger

from trading_intents.core.config import IntentSettings


def setup_logging(settings: IntentSettings) -> None:
    """Replace loguru's handlers with the sinks described by ``settings``.

    Args:
        settings: Intent settings providing level, log directory and format
    """
    logger.remove()

    logger.add(
        sys.stderr,
        format="<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
        "<level>{level: <8}</level> | "
        "<cyan>{name}</cyan>:<cyan>{function}</cyan> - "
        "<level>{message}</level>",
        level=settings.log_level,
        serialize=settings.log_serialize,
    )

    if settings.log_dir is not None:
        settings.log_dir.mkdir(parents=True, exist_ok=True)
        logger.add(
            settings.log_dir / "intents_{time}.log",
            rotation="1 day",
            retention="7 days",
            level="DEBUG",
            serialize=settings.log_serialize,
        )
