"""HTTP and HTTPS probes."""

from __future__ import annotations

import ssl
import urllib.parse

from .helper import ProbeError, do_get


def validate_url(scheme, url):
    """Check that a split URL has the given scheme and a host."""
    if url.scheme != scheme:
        raise ProbeError(f"invalid scheme: {url.scheme}")
    if not url.scheme:
        raise ProbeError(f"invalid URL: {url.geturl()}")
    if not url.hostname:
        raise ProbeError(f"no host specified: {url.geturl()}")


def _parse(host):
    try:
        parts = urllib.parse.urlsplit(host)
        parts.port
    except ValueError as exc:
        raise ProbeError(f"failed to parse host {host!r}: {exc}") from exc
    return parts


class _WebPinger:
    scheme = "http"

    def __init__(self):
        self.url = None
        self.ssl_context = None

    def bootstrap(self, host):
        """Validate the URL and remember it."""
        parts = _parse(host)
        validate_url(self.scheme, parts)
        self.url = parts.geturl()

    def ping(self, timeout=None):
        """GET the URL and require a 2xx answer."""
        if self.url is None:
            raise ProbeError("pinger has not been bootstrapped")
        do_get(self.url, timeout, self.ssl_context)


class HTTPPinger(_WebPinger):
    """Probe for plain HTTP servers."""

    scheme = "http"

    def bootstrap(self, host):
        super().bootstrap(host)

    def ping(self, timeout=None):
        super().ping(timeout)


class HTTPSPinger(_WebPinger):
    """Probe for HTTPS servers, with certificate verification."""

    scheme = "https"

    def bootstrap(self, host):
        super().bootstrap(host)
        self.ssl_context = ssl.create_default_context()

    def ping(self, timeout=None):
        super().ping(timeout)