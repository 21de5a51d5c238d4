import socket

import pytest

from waitfor.probes.helper import ProbeError
from waitfor.probes.tcp import TCPPinger


@pytest.mark.parametrize(
    "url, fails",
    [
        ("tcp://example.com:80", False),
        ("tcp://", True),
        ("http://example.com:80", True),
        ("example.com:80", False),
    ],
)
def test_bootstrap(url, fails):
    pinger = TCPPinger()
    if fails:
        with pytest.raises(ProbeError):
            pinger.bootstrap(url)
    else:
        pinger.bootstrap(url)
        assert pinger.host == "example.com:80"


def test_ping_valid_host():
    with socket.socket() as listener:
        listener.bind(("127.0.0.1", 0))
        listener.listen(8)
        pinger = TCPPinger(f"127.0.0.1:{listener.getsockname()[1]}")
        assert pinger.ping(2.0) is None


def test_ping_invalid_host():
    with pytest.raises(ProbeError):
        TCPPinger("invalidhost:80").ping(2.0)


def test_ping_closed_port():
    with socket.socket() as sock:
        sock.bind(("127.0.0.1", 0))
        port = sock.getsockname()[1]
    with pytest.raises(ProbeError):
        TCPPinger(f"127.0.0.1:{port}").ping(2.0)


def test_ping_missing_port():
    with pytest.raises(ProbeError, match="missing port"):
        TCPPinger("localhost").ping(1.0)