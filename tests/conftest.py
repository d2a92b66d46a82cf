"""Pytest configuration and shared fixtures for wg-keepalive tests."""

from __future__ import annotations

from collections.abc import Iterable, Mapping

import pytest

from wg_keepalive.config.keepalive import MonitorConfig


class FakeClock:
    """Manual clock; sleeping advances it instead of blocking."""

    def __init__(self, start: float = 1000.0) -> None:
        self.now = start
        self.sleeps: list[float] = []

    def __call__(self) -> float:
        return self.now

    def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.now += seconds


class FakeCounterSource:
    """Replays a fixed list of counter samples, then stops the monitor."""

    def __init__(self, samples: Iterable[int]) -> None:
        self.samples = list(samples)
        self.calls: list[str] = []
        self.monitor = None

    def sample(self, interface: str) -> int:
        self.calls.append(interface)
        value = self.samples[len(self.calls) - 1]
        if len(self.calls) == len(self.samples) and self.monitor is not None:
            self.monitor.stop()
        return value


class RecordingRunner:
    """Command runner that records invocations instead of spawning a shell."""

    def __init__(self, returncode: int = 0) -> None:
        self.returncode = returncode
        self.calls: list[tuple[str, dict[str, str]]] = []

    def run(self, command: str, env: Mapping[str, str]) -> int:
        self.calls.append((command, dict(env)))
        return self.returncode

    @property
    def commands(self) -> list[str]:
        return [command for command, _ in self.calls]


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def runner() -> RecordingRunner:
    return RecordingRunner()


@pytest.fixture
def monitor_config() -> MonitorConfig:
    return MonitorConfig(
        interface="wg0",
        interval=60,
        timeout=300,
        pre_restart_command="echo pre",
        restart_command="echo restart",
        post_restart_command="echo post",
    )


@pytest.fixture
def make_monitor(clock: FakeClock, runner: RecordingRunner):
    """Build a StallMonitor driven by replayed samples and the fake clock."""
    from wg_keepalive.watchdog import StallMonitor

    def _make(config: MonitorConfig, samples: Iterable[int]) -> tuple[StallMonitor, FakeCounterSource]:
        source = FakeCounterSource(samples)
        monitor = StallMonitor(
            config,
            counter_source=source,
            command_runner=runner,
            clock=clock,
            sleep=clock.sleep,
        )
        source.monitor = monitor
        return monitor, source

    return _make
