"""
wg-keepalive CLI entry point.
"""

import logging
import sys

import click

from wg_keepalive import __version__
from wg_keepalive.config.app import get_config_dir, load_config
from wg_keepalive.config.logging import LoggingSettings
from wg_keepalive.watchdog import StallMonitor

from .utils import setup_logging

logger = logging.getLogger(__name__)

LOG_LEVELS = ["debug", "info", "warning", "error", "critical"]


@click.command()
@click.argument("interface")
@click.option(
    "--config-dir",
    "-d",
    type=click.Path(file_okay=False, path_type=str),
    default=lambda: str(get_config_dir()),
    show_default="/etc/wg-keepalive",
    help="Directory containing <interface>.yaml configuration files",
)
@click.option(
    "--loglevel",
    type=click.Choice(LOG_LEVELS, case_sensitive=False),
    default="info",
    show_default=True,
    help="Log level",
)
@click.option(
    "--no-log-timestamp",
    is_flag=True,
    help="Disable log timestamps (useful under journald)",
)
@click.option(
    "--interval",
    type=click.IntRange(min=1),
    default=None,
    help="Override the sampling interval in seconds",
)
@click.option(
    "--timeout",
    type=click.IntRange(min=1),
    default=None,
    help="Override the stall timeout in seconds",
)
@click.version_option(__version__, prog_name="wg-keepalive")
def main(
    interface: str,
    config_dir: str,
    loglevel: str,
    no_log_timestamp: bool,
    interval: int | None,
    timeout: int | None,
) -> None:
    """Restart WireGuard INTERFACE when it stops receiving traffic."""
    setup_logging(LoggingSettings(level=loglevel.lower(), timestamps=not no_log_timestamp))

    try:
        config = load_config(
            interface,
            config_dir=config_dir,
            cli_overrides={"interval": interval, "timeout": timeout},
        )
        monitor = StallMonitor(config)
        monitor.install_signal_handlers()
        monitor.run()
    except Exception as e:
        logger.error(f"Error: {e}")
        sys.exit(1)
