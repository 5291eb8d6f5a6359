"""Logging configuration for the service and the replay engine."""

import logging
import sys
from typing import Optional

from ledgerfolio.config.settings import Settings, get_settings

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

ENGINE_LOGGER = "ledgerfolio.engine"


def _level(name: str) -> int:
    level = logging.getLevelName(name.upper())
    if not isinstance(level, int):
        raise ValueError(f"Unknown log level: {name!r}")
    return level


def setup_logging(settings: Optional[Settings] = None) -> None:
    """
    Configure application logging from settings.

    The replay engine reports every per-record data issue at DEBUG. Its
    level is set separately through ``engine_log_level`` so those issues
    can be traced without turning on DEBUG for the whole service.
    """
    settings = settings or get_settings()

    logging.basicConfig(
        level=_level(settings.log_level),
        format=LOG_FORMAT,
        handlers=[logging.StreamHandler(sys.stdout)],
    )

    engine_level = settings.engine_log_level or settings.log_level
    logging.getLogger(ENGINE_LOGGER).setLevel(_level(engine_level))

    # SQL echo and per-request access lines drown out replay summaries
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
