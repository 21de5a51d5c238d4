"""Shared helpers for the probes."""

from __future__ import annotations

import http.client
import urllib.error
import urllib.parse
import urllib.request
from http import HTTPStatus

REQUEST_TIMEOUT = 1.0


class ProbeError(Exception):
    """A probe could not be set up or its target did not respond."""


def one_of(value, *args):
    """Return True if ``value`` equals any of the following arguments."""
    return value in args


def unwrap_error(err):
    """Follow the chain of causes down to the root exception."""
    while err is not None and err.__cause__ is not None:
        err = err.__cause__
    return err


def _attempt_timeout(timeout):
    """Per-attempt timeout: one second, capped by the remaining budget."""
    if timeout is None:
        return REQUEST_TIMEOUT
    if timeout <= 0:
        raise ProbeError("deadline exceeded")
    return min(REQUEST_TIMEOUT, timeout)


def do_get(url, timeout=None, ssl_context=None):
    """Issue a GET request and require a 2xx status code."""
    try:
        urllib.parse.urlsplit(url).port
        request = urllib.request.Request(url, method="GET")
    except ValueError as exc:
        raise ProbeError(f"error creating request: {exc}") from exc

    handlers = [urllib.request.ProxyHandler({})]
    if ssl_context is not None:
        handlers.append(urllib.request.HTTPSHandler(context=ssl_context))
    opener = urllib.request.build_opener(*handlers)

    try:
        with opener.open(request, timeout=_attempt_timeout(timeout)) as response:
            status = response.status
    except urllib.error.HTTPError as exc:
        status = exc.code
        exc.close()
    except urllib.error.URLError as exc:
        raise ProbeError(str(exc.reason)) from exc
    except (OSError, http.client.HTTPException) as exc:
        raise ProbeError(str(exc)) from exc

    if not 200 <= status <= 299:
        try:
            text = HTTPStatus(status).phrase
        except ValueError:
            text = ""
        raise ProbeError(f"received non-2xx status code: {status} {text}")


def extract_protocol(host):
    """Return the scheme before "://", or an empty string."""
    scheme, sep, _ = host.partition("://")
    return scheme if sep else ""


def _host_of(parts):
    """The host[:port] part of a split URL, without user information."""
    return parts.netloc.rpartition("@")[2]


def _split_host_port(hostport):
    """Split "host:port" or "[v6]:port" into its host and port strings."""
    if hostport.startswith("["):
        name, bracket, rest = hostport[1:].partition("]")
        if not bracket:
            raise ProbeError(f"address {hostport}: missing ']' in address")
        if not rest.startswith(":"):
            raise ProbeError(f"address {hostport}: missing port in address")
        return name, rest[1:]
    name, sep, port = hostport.rpartition(":")
    if not sep:
        raise ProbeError(f"address {hostport}: missing port in address")
    if ":" in name:
        raise ProbeError(f"address {hostport}: too many colons in address")
    return name, port