"""
WireGuard keepalive watchdog.

Samples an interface's received-byte counter and runs the configured restart
sequence when the counter has not changed for longer than the timeout.

Usage:
    wg-keepalive wg0 [--config-dir /etc/wg-keepalive] [--loglevel debug]
"""

from __future__ import annotations

import logging
import signal
import time
from collections.abc import Callable
from dataclasses import dataclass

from wg_keepalive.commands import CommandRunner, ShellCommandRunner, build_command_env
from wg_keepalive.config.keepalive import MonitorConfig
from wg_keepalive.counter import CounterSource, WireGuardCounterSource

logger = logging.getLogger(__name__)


@dataclass
class MonitorState:
    """Counter tracking state, owned by the monitor loop."""

    last_change_time: float
    last_rx_bytes: int = 0


class StallMonitor:
    """
    Watches one interface and restarts it when inbound traffic stalls.

    Features:
    - Periodic sampling of the received-byte counter
    - Timeout measured from the last observed counter change
    - Pre-restart, restart and post-restart commands, run in order
    - One recovery per stall: the counter baseline is reset after recovery
    - Cooperative shutdown via stop() or SIGTERM/SIGINT
    """

    def __init__(
        self,
        config: MonitorConfig,
        counter_source: CounterSource | None = None,
        command_runner: CommandRunner | None = None,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.config = config
        self.counter_source = counter_source or WireGuardCounterSource(config.wg_command)
        self.command_runner = command_runner or ShellCommandRunner()
        self._clock = clock
        self._sleep = sleep

        self.env = build_command_env(config.interface)
        self.state = MonitorState(last_change_time=self._clock())
        self.restart_count = 0
        self.running = True

    def install_signal_handlers(self) -> None:
        """Stop the loop on SIGTERM/SIGINT instead of dying mid-command."""
        signal.signal(signal.SIGTERM, self._handle_shutdown)
        signal.signal(signal.SIGINT, self._handle_shutdown)

    def _handle_shutdown(self, signum: int, frame: object) -> None:
        """Handle shutdown signals gracefully."""
        logger.info(f"Received signal {signum}, shutting down keepalive")
        self.stop()

    def stop(self) -> None:
        self.running = False

    def elapsed(self, now: float) -> int:
        """Whole seconds since the counter last changed."""
        return int(now - self.state.last_change_time)

    def check(self) -> bool:
        """
        Sample the counter once and recover if the stall timeout is reached.

        Returns:
            True if the recovery sequence ran.

        Raises:
            QueryError: If the counter cannot be queried
            ParseError: If the counter output is malformed
        """
        rx_bytes = self.counter_source.sample(self.config.interface)
        now = self._clock()

        if rx_bytes != self.state.last_rx_bytes:
            logger.debug(f"rxbytes changed from {self.state.last_rx_bytes} to {rx_bytes}")
            self.state.last_rx_bytes = rx_bytes
            self.state.last_change_time = now
            return False

        logger.debug(f"rxbytes unchanged at {rx_bytes}")
        elapsed = self.elapsed(now)
        if elapsed < self.config.timeout:
            return False

        logger.warning(
            f"No traffic received on {self.config.interface} for {elapsed}s "
            f"(timeout: {self.config.timeout}s), restarting interface"
        )
        self.recover()

        # Zero baseline: the next sample counts as a change and re-arms the timer.
        self.state.last_change_time = now
        self.state.last_rx_bytes = 0
        return True

    def recover(self) -> None:
        """Run pre-restart, restart and post-restart commands in order."""
        if self.config.pre_restart_command is not None:
            logger.info(f"Running pre-restart command: {self.config.pre_restart_command}")
            self.command_runner.run(self.config.pre_restart_command, self.env)

        logger.info(f"Running restart command: {self.config.restart_command}")
        self.command_runner.run(self.config.restart_command, self.env)

        if self.config.post_restart_command is not None:
            logger.info(f"Running post-restart command: {self.config.post_restart_command}")
            self.command_runner.run(self.config.post_restart_command, self.env)

        self.restart_count += 1

    def _sleep_interval(self) -> None:
        # Short slices keep shutdown responsive.
        sleep_remaining = float(self.config.interval)
        while sleep_remaining > 0 and self.running:
            sleep_time = min(1.0, sleep_remaining)
            self._sleep(sleep_time)
            sleep_remaining -= sleep_time

    def run(self) -> None:
        """Main keepalive loop. Returns only after stop() is called."""
        logger.info(
            f"Starting keepalive for {self.config.interface} with "
            f"interval={self.config.interval}, timeout={self.config.timeout}"
        )
        self.state = MonitorState(last_change_time=self._clock())

        try:
            while self.running:
                self.check()
                self._sleep_interval()
        finally:
            logger.info(
                f"Keepalive for {self.config.interface} stopped "
                f"after {self.restart_count} restart(s)"
            )
