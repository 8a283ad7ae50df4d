"""
Mini-HIDS — Agent Logging

Provides a single logger for the whole agent.
All modules should use:
    from agent.logging_config import logger
"""

import logging
import os

LOG_LEVEL = os.environ.get("MINIHIDS_LOG_LEVEL", "INFO").upper()

# ── Create the logger ───────────────────────────────────────
logger = logging.getLogger("minihids")
logger.setLevel(getattr(logging, LOG_LEVEL, logging.INFO))

# ── Console handler (stderr) ────────────────────────────────
_handler = logging.StreamHandler()
_handler.setFormatter(
    logging.Formatter(
        "[%(asctime)s] [%(levelname)-5s] [%(name)s] %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
)
logger.addHandler(_handler)

logger.propagate = False


def set_level(level: str) -> None:
    """Apply a level name from configuration ("debug", "info", ...)."""
    resolved = getattr(logging, str(level).upper(), None)
    if not isinstance(resolved, int):
        logger.warning("Unknown log level %r, keeping %s", level,
                       logging.getLevelName(logger.level))
        return
    logger.setLevel(resolved)
