"""UDP datagram probe."""

from __future__ import annotations

import socket
import urllib.parse

from .helper import ProbeError, _attempt_timeout, _host_of, _split_host_port, one_of


class UDPPinger:
    """Probe that succeeds once an empty datagram can be sent."""

    def __init__(self, host=""):
        self.host = host

    def bootstrap(self, host):
        """Parse a udp:// target."""
        try:
            parts = urllib.parse.urlsplit(host)
        except ValueError as exc:
            raise ProbeError(f"failed to parse host {host!r}: {exc}") from exc
        address = _host_of(parts)
        if not address:
            raise ProbeError("no host specified for udp scheme")
        if not one_of(parts.scheme, "udp", "udp4", "udp6"):
            raise ProbeError(f"invalid scheme for udp probe: {parts.scheme}")
        self.host = address

    def ping(self, timeout=None):
        """Send a zero-length datagram to the host."""
        name, port = _split_host_port(self.host)
        try:
            family, socktype, proto, _, addr = socket.getaddrinfo(
                name, port, type=socket.SOCK_DGRAM
            )[0]
            with socket.socket(family, socktype, proto) as sock:
                sock.settimeout(_attempt_timeout(timeout))
                sock.connect(addr)
                sock.send(b"")
        except OSError as exc:
            raise ProbeError(str(exc)) from exc