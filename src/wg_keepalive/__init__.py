"""wg-keepalive - restart a WireGuard interface when inbound traffic stalls.

Samples the interface's received-byte counter via ``wg show <iface> dump`` and
runs a configurable restart sequence once the counter has been unchanged for
longer than the configured timeout.
"""

__version__ = "0.1.0"
