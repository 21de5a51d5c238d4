"""Wait for a set of hosts to respond, probing each one concurrently."""

from __future__ import annotations

import signal
import sys
import threading
import time
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Protocol

from .probes.helper import ProbeError
from .probes.mysql import MySQLPinger
from .probes.postgres import PostgresPinger
from .probes.tcp import TCPPinger
from .probes.udp import UDPPinger
from .probes.web import HTTPPinger, HTTPSPinger


class Pinger(Protocol):
    """What every probe offers: a one-time setup and a repeatable check."""

    def bootstrap(self, host):
        """Validate ``host`` and prepare the probe; raise ProbeError if invalid."""

    def ping(self, timeout):
        """Check the target once; raise ProbeError if it does not respond."""


# Mapping from URL scheme to the probe that handles it.
PINGERS = {
    "tcp": TCPPinger,
    "udp": UDPPinger,
    "mysql": MySQLPinger,
    "postgres": PostgresPinger,
    "http": HTTPPinger,
    "https": HTTPSPinger,
}

_PROBE_FAILURES = (ProbeError, OSError, ValueError)


@dataclass
class MatchedURL:
    """A host string together with the probe chosen for its scheme."""

    raw: str
    pinger: Pinger | None = None

    def __str__(self):
        return self.raw


def stringify_hosts(urls):
    """Quote every host and join them with commas."""
    return ", ".join(f'"{url}"' for url in urls)


def parse_host(host_str):
    """Pick the probe for a host string, assuming tcp:// when there is no scheme."""
    if "://" not in host_str:
        host_str = "tcp://" + host_str
    scheme = host_str.partition("://")[0]
    try:
        factory = PINGERS[scheme]
    except KeyError:
        raise ValueError(
            f'no handler registered for scheme "{scheme}" (host: "{host_str}")'
        ) from None
    return MatchedURL(raw=host_str, pinger=factory())


def _format_fraction(value, unit):
    whole, frac = divmod(value, unit)
    if not frac:
        return str(whole)
    digits = str(frac).rjust(len(str(unit)) - 1, "0").rstrip("0")
    return f"{whole}.{digits}"


def _format_duration(seconds):
    """Render a duration the way the command line shows it, e.g. "1m30s"."""
    ns = round(seconds * 1_000_000_000)
    if ns == 0:
        return "0s"
    sign = "-" if ns < 0 else ""
    ns = abs(ns)
    if ns < 1_000:
        return f"{sign}{ns}ns"
    if ns < 1_000_000:
        return f"{sign}{_format_fraction(ns, 1_000)}µs"
    if ns < 1_000_000_000:
        return f"{sign}{_format_fraction(ns, 1_000_000)}ms"
    hours, rest = divmod(ns, 3_600 * 1_000_000_000)
    minutes, rest = divmod(rest, 60 * 1_000_000_000)
    text = ""
    if hours:
        text += f"{hours}h"
    if hours or minutes:
        text += f"{minutes}m"
    return f"{sign}{text}{_format_fraction(rest, 1_000_000_000)}s"


@contextmanager
def _termination_signals():
    """Turn SIGTERM into KeyboardInterrupt while waiting, when possible."""
    if threading.current_thread() is not threading.main_thread() or not hasattr(
        signal, "SIGTERM"
    ):
        yield
        return
    previous = signal.signal(signal.SIGTERM, signal.default_int_handler)
    try:
        yield
    finally:
        signal.signal(signal.SIGTERM, previous)


@dataclass
class App:
    """Settings for one wait: the hosts, the overall timeout and the retry interval."""

    hosts: list = field(default_factory=list)
    timeout: float = 10.0
    every: float = 1.0
    verbose: bool = False
    padding: int = field(default=0, init=False)
    _lock: threading.Lock = field(default_factory=threading.Lock, init=False, repr=False)

    def run(self):
        """Wait until every host responds; raise if the timeout passes first."""
        if not self.hosts:
            raise ValueError("no hosts specified")
        if self.every <= 0:
            raise ValueError("interval between attempts must be positive")

        items = []
        for raw in self.hosts:
            try:
                matched = parse_host(raw)
            except ValueError as exc:
                raise ValueError(f'failed to parse host "{raw}": {exc}') from exc
            if len(raw) > self.padding:
                self.padding = len(matched.raw)
            try:
                matched.pinger.bootstrap(raw)
            except ProbeError as exc:
                raise ValueError(f'failed to bootstrap host "{raw}": {exc}') from exc
            items.append(matched)

        print(
            "Waiting for hosts:",
            stringify_hosts(items),
            f"(timeout: {_format_duration(self.timeout)}, "
            f"attempting every {_format_duration(self.every)})",
            flush=True,
        )

        deadline = time.monotonic() + self.timeout
        stop = threading.Event()
        workers = [
            threading.Thread(target=self._watch, args=(item, deadline, stop), daemon=True)
            for item in items
        ]
        for worker in workers:
            worker.start()

        try:
            with _termination_signals():
                for worker in workers:
                    worker.join(max(0.0, deadline - time.monotonic()))
                    if worker.is_alive():
                        raise TimeoutError(
                            f"{_format_duration(self.timeout)} timeout reached "
                            "before all hosts were up"
                        )
        except KeyboardInterrupt:
            raise InterruptedError("user requested early termination") from None
        finally:
            stop.set()

    def pad(self, text):
        """Left-align ``text`` to the width of the longest host."""
        return text.ljust(self.padding)

    def _say(self, message):
        if self.verbose:
            with self._lock:
                sys.stdout.write(message + "\n")
                sys.stdout.flush()

    def _attempt(self, item, deadline, started):
        try:
            item.pinger.ping(deadline - time.monotonic())
        except _PROBE_FAILURES as exc:
            self._say(f"> down: {self.pad(item.raw)} -- {exc}")
            return False
        elapsed = _format_duration(time.monotonic() - started)
        self._say(f"> up:   {self.pad(item.raw)} (after {elapsed})")
        return True

    def _watch(self, item, deadline, stop):
        started = time.monotonic()
        if self._attempt(item, deadline, started):
            return
        origin = time.monotonic()
        ticks = 0
        while not stop.is_set():
            now = time.monotonic()
            if now >= deadline:
                return
            # Like a ticker, skip the ticks missed while a probe was running.
            ticks = max(ticks + 1, int((now - origin) / self.every) + 1)
            wait_for = origin + ticks * self.every - now
            if stop.wait(min(wait_for, deadline - now)):
                return
            if time.monotonic() >= deadline:
                return
            if self._attempt(item, deadline, started):
                return