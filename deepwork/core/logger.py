"""
Logging setup.

All modules obtain their logger through setup_logger so that handlers and
format are configured once per logger name.
"""

import logging
import sys

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def _resolve_level() -> int:
    from deepwork.core.config import get_settings

    level_name = get_settings().LOG_LEVEL.upper()
    return getattr(logging, level_name, logging.INFO)


def setup_logger(name: str) -> logging.Logger:
    """
    Get a configured logger.

    Args:
        name: Logger name (usually __name__)

    Returns:
        Logger with a single stdout handler attached
    """
    log = logging.getLogger(name)
    if not log.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        log.addHandler(handler)
        log.setLevel(_resolve_level())
        log.propagate = False
    return log


logger = setup_logger("deepwork")
