"""
Received-byte counter source for WireGuard interfaces.

Reads the cumulative receive counter from ``wg show <interface> dump``.
"""

from __future__ import annotations

import logging
import subprocess  # nosec B404 - subprocess needed to query wg
from typing import Protocol

from wg_keepalive.errors import ParseError, QueryError

logger = logging.getLogger(__name__)

# Position of the transfer-rx column in the tab-separated dump output.
RX_BYTES_FIELD = 8

MAX_COUNTER = 2**64


class CounterSource(Protocol):
    """Anything that can report the received-byte counter of an interface."""

    def sample(self, interface: str) -> int: ...


def parse_rx_bytes(output: str | bytes) -> int:
    """
    Extract the received-byte counter from ``wg show <iface> dump`` output.

    The whole output is split on tabs as a single token stream, so for an
    interface with one peer the interface row's trailing field and the peer
    row's leading field share a token and the counter lands at index 8.

    Args:
        output: Captured standard output of the dump command, raw or decoded

    Returns:
        Cumulative received bytes

    Raises:
        ParseError: If the output is not UTF-8, has fewer than 9 fields or the
            field is not an unsigned 64-bit integer
    """
    if isinstance(output, bytes):
        try:
            output = output.decode("utf-8")
        except UnicodeDecodeError as e:
            raise ParseError(f"output is not valid UTF-8: {e}", output=repr(output)) from e

    tokens = output.split("\t")
    if len(tokens) <= RX_BYTES_FIELD:
        raise ParseError(
            f"expected at least {RX_BYTES_FIELD + 1} tab-separated fields, got {len(tokens)}",
            output=output,
        )

    field = tokens[RX_BYTES_FIELD].strip()
    if not (field.isascii() and field.isdigit()):
        raise ParseError(f"rx bytes field is not numeric: {field!r}", output=output)

    value = int(field)
    if value >= MAX_COUNTER:
        raise ParseError(f"rx bytes field out of range: {field}", output=output)
    return value


class WireGuardCounterSource:
    """Samples the receive counter by running the wg command-line tool."""

    def __init__(self, wg_command: str = "wg"):
        self.wg_command = wg_command

    def build_command(self, interface: str) -> list[str]:
        return [self.wg_command, "show", interface, "dump"]

    def sample(self, interface: str) -> int:
        """
        Query the current received-byte counter for an interface.

        Returns:
            Cumulative received bytes

        Raises:
            QueryError: If wg cannot be started or exits non-zero
            ParseError: If the output does not have the expected layout
        """
        cmd = self.build_command(interface)
        try:
            result = subprocess.run(  # nosec B603
                cmd,
                capture_output=True,
                check=False,
            )
        except OSError as e:
            raise QueryError(f"failed to run {cmd[0]}: {e}", interface=interface) from e

        if result.returncode != 0:
            stderr = (result.stderr or b"").decode("utf-8", errors="replace").strip()
            detail = f": {stderr}" if stderr else ""
            raise QueryError(
                f"{cmd[0]} exited with status {result.returncode}{detail}",
                interface=interface,
                returncode=result.returncode,
            )

        return parse_rx_bytes(result.stdout)
