"""TCP connection probe."""

from __future__ import annotations

import socket
import urllib.parse

from .helper import (
    ProbeError,
    _attempt_timeout,
    _host_of,
    _split_host_port,
    extract_protocol,
    one_of,
)


class TCPPinger:
    """Probe that succeeds once a TCP connection can be opened."""

    def __init__(self, host=""):
        self.host = host

    def bootstrap(self, host):
        """Parse the target, assuming tcp:// when no scheme is given."""
        if not extract_protocol(host):
            host = "tcp://" + host
        try:
            parts = urllib.parse.urlsplit(host)
        except ValueError as exc:
            raise ProbeError(f"failed to parse host {host!r}: {exc}") from exc
        address = _host_of(parts)
        if not address:
            raise ProbeError("no host specified for tcp scheme")
        if not one_of(parts.scheme, "tcp", "tcp4", "tcp6"):
            raise ProbeError(f"invalid scheme for tcp probe: {parts.scheme}")
        self.host = address

    def ping(self, timeout=None):
        """Open and close a TCP connection to the host."""
        name, port = _split_host_port(self.host)
        try:
            with socket.create_connection((name, port), timeout=_attempt_timeout(timeout)):
                pass
        except OSError as exc:
            raise ProbeError(str(exc)) from exc