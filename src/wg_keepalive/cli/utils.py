"""
Shared utilities for CLI commands.
"""

import logging

from wg_keepalive.config.logging import LoggingSettings

TIMESTAMP_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
PLAIN_FORMAT = "[%(levelname)s] %(message)s"


def setup_logging(settings: LoggingSettings | None = None) -> None:
    """
    Configure logging for CLI.

    Args:
        settings: Log level and timestamp preference (default: LoggingSettings())
    """
    settings = settings or LoggingSettings()
    logging.basicConfig(
        level=getattr(logging, settings.level.upper()),
        format=TIMESTAMP_FORMAT if settings.timestamps else PLAIN_FORMAT,
        datefmt="%Y-%m-%d %H:%M:%S",
        force=True,
    )
