"""Custom exceptions for counter sampling."""

from __future__ import annotations


class KeepaliveError(RuntimeError):
    """Base class for errors that end a keepalive run."""


class QueryError(KeepaliveError):
    """Raised when the WireGuard status query cannot be run or exits non-zero."""

    def __init__(
        self,
        message: str,
        interface: str | None = None,
        returncode: int | None = None,
    ) -> None:
        prefix = f"wg query for '{interface}': " if interface else "wg query: "
        super().__init__(f"{prefix}{message}")
        self.interface = interface
        self.returncode = returncode


class ParseError(KeepaliveError):
    """Raised when the status output does not have the expected field layout."""

    def __init__(self, message: str, output: str | None = None) -> None:
        super().__init__(f"unexpected output from wg command: {message}")
        self.output = output
