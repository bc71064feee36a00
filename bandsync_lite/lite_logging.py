"""
Central logging configuration for bandsync_lite.

Sets root and package logger levels, honours environment overrides for
troubleshooting, and installs a colourised console handler when the host
application has not configured one.
"""

import logging
import os
import sys
from typing import Optional

from colorlog import ColoredFormatter

# Readable colorized format: HH:MM:SS  LEVEL   logger.name: message
LOG_FORMAT = "%(asctime)s %(log_color)s%(levelname)-7s%(reset)s %(name)s: %(message)s"
LOG_COLORS = {
    "DEBUG": "cyan",
    "INFO": "green",
    "WARNING": "yellow",
    "ERROR": "red",
    "CRITICAL": "bold_red",
}

LITE_MODULES = [
    "bandsync_lite",
    "bandsync_lite.lite_recurrence_expander",
    "bandsync_lite.lite_event_parser",
    "bandsync_lite.lite_event_merger",
    "bandsync_lite.config_loader",
]


def configure_lite_logging(
    debug_mode: bool = False,
    force_debug: Optional[bool] = None,
    log_level: Optional[str] = None,
) -> None:
    """
    Configure logging levels for bandsync_lite.

    Args:
        debug_mode: Whether to enable debug logging for bandsync_lite modules
        force_debug: Override debug mode setting (None to use env var detection)
        log_level: Root level name, typically ``Config.log_level``

    Environment Variables:
        BANDSYNC_DEBUG: Set to '1', 'true', 'yes' to force debug logging
        BANDSYNC_LOG_LEVEL: Override root log level (DEBUG, INFO, WARNING, ERROR)
    """
    env_debug = os.getenv("BANDSYNC_DEBUG", "").lower() in ("1", "true", "yes")
    env_log_level = os.getenv("BANDSYNC_LOG_LEVEL", "").upper()

    if force_debug is not None:
        final_debug = force_debug
    elif env_debug:
        final_debug = True
    else:
        final_debug = debug_mode

    root_level = logging.DEBUG if final_debug else logging.INFO
    for candidate in (log_level.upper() if log_level else "", env_log_level):
        if candidate in ("DEBUG", "INFO", "WARNING", "ERROR"):
            root_level = getattr(logging, candidate)

    root_logger = logging.getLogger()
    root_logger.setLevel(root_level)

    # Only add a handler if the host application has not configured one
    if not root_logger.handlers:
        handler = logging.StreamHandler(stream=sys.stderr)
        handler.setFormatter(ColoredFormatter(LOG_FORMAT, datefmt="%H:%M:%S", log_colors=LOG_COLORS))
        root_logger.addHandler(handler)

    lite_level = logging.DEBUG if final_debug else logging.INFO
    for module in LITE_MODULES:
        logging.getLogger(module).setLevel(lite_level)

    if final_debug:
        root_logger.info("Debug logging enabled for bandsync_lite modules.")
    else:
        root_logger.info("Production logging configuration applied.")


def reset_logging_to_debug() -> None:
    """
    Reset root and bandsync_lite loggers to DEBUG level for troubleshooting.
    """
    logging.getLogger().setLevel(logging.DEBUG)
    for module in LITE_MODULES:
        logging.getLogger(module).setLevel(logging.DEBUG)

    logging.getLogger().info("All loggers reset to DEBUG level for troubleshooting")


def get_logging_status() -> dict[str, str]:
    """
    Get current logging configuration status.

    Returns:
        Dictionary mapping logger names to their current levels
    """
    status = {"root": logging.getLevelName(logging.getLogger().level)}
    for logger_name in LITE_MODULES:
        status[logger_name] = logging.getLevelName(logging.getLogger(logger_name).level)
    return status
