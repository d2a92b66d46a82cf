"""
Shell command execution for the recovery sequence.

Recovery commands are user-supplied strings passed verbatim to the system
shell. Quoting anything embedded in them is the caller's responsibility.
"""

from __future__ import annotations

import logging
import os
import subprocess  # nosec B404 - subprocess needed for restart hooks
from collections.abc import Mapping
from typing import Protocol

logger = logging.getLogger(__name__)

INTERFACE_ENV_VAR = "WG_INTERFACE"

# Exit status reported when the shell itself cannot be started.
SPAWN_FAILED_STATUS = 127


class CommandRunner(Protocol):
    """Anything that can run a shell command string with an environment."""

    def run(self, command: str, env: Mapping[str, str]) -> int: ...


def build_command_env(
    interface: str, base: Mapping[str, str] | None = None
) -> dict[str, str]:
    """
    Build the environment for recovery commands.

    Args:
        interface: Monitored interface, exported as WG_INTERFACE
        base: Environment to start from (default: os.environ)

    Returns:
        A new environment mapping; the process environment is left untouched.
    """
    env = dict(os.environ if base is None else base)
    env[INTERFACE_ENV_VAR] = interface
    return env


class ShellCommandRunner:
    """Runs commands through the system shell and waits for them to finish."""

    def run(self, command: str, env: Mapping[str, str]) -> int:
        try:
            result = subprocess.run(  # nosec B602 - commands come from the admin's config
                command,
                shell=True,
                env=dict(env),
                check=False,
            )
        except OSError as e:
            logger.error(f"Failed to run command {command!r}: {e}")
            return SPAWN_FAILED_STATUS

        if result.returncode != 0:
            logger.warning(f"Command {command!r} exited with status {result.returncode}")
        return result.returncode
