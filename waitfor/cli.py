"""Command-line entry point: wait until hosts respond to requests."""

from __future__ import annotations

import argparse
import re
import sys
from fractions import Fraction

import yaml

from .formatting import Example, example_commands, wrap
from .pinger import App, _format_duration
from .probes.helper import ProbeError

VERSION = "development"
PROG = "wait-for"
DEFAULT_CONFIG = "targets.yaml"
DEFAULTS = {"timeout": 10.0, "every": 1.0, "verbose": False}

HELP_LONG = """wait-for allows you to wait for a resource to respond to requests.

It does this by performing a connection to the specified host and port. If there's no resource behind it and the connection cannot be established, the request is retried until either the timeout is reached or the resource becomes available.

Each protocol defines its own way of checking for the resource. For example, a TCP connection will attempt to connect to the host and port specified, while a MySQL connection will attempt to connect to the host and port, and then ping the database.

By default, the standard timeout is 10 seconds but it can be customized for all requests. The time between each request is 1 second, but this can also be customized."""

_READY = "ready to accept connections and responds to"
EXAMPLES = [
    Example("-s localhost:80", "wait for a web server to accept connections"),
    Example("-s mysql.example.local:3306", "wait for a MySQL database to accept connections"),
    Example("-s udp://localhost:53", "wait for a DNS server to accept connections"),
    Example("--host localhost:80 --host localhost:81", "wait for multiple resources to accept connections"),
    Example("--host mysql://localhost:3306", f"wait until a MySQL database is {_READY} pings"),
    Example("--host postgres://localhost:5432", f"wait until a PostgreSQL database is {_READY} pings"),
    Example(
        "--host http://localhost:8080",
        f"wait until an HTTP server is {_READY} requests with a 200-299 status code",
    ),
    Example(
        "--host https://localhost:443",
        f"wait until an HTTPS server is {_READY} requests with a 200-299 status code "
        "and a valid certificate",
    ),
    Example("--config targets.yaml", "load hosts and settings from a YAML file"),
]

_UNITS = {
    "ns": 1, "us": 1_000, "µs": 1_000, "μs": 1_000, "ms": 1_000_000,
    "s": 1_000_000_000, "m": 60_000_000_000, "h": 3_600_000_000_000,
}
_PART = re.compile(r"([0-9]*)(?:\.([0-9]*))?([^0-9.]*)")


def parse_duration(value):
    """Parse a duration such as "1m30s" or "300ms" into seconds."""
    negative = value[:1] == "-"
    text = value[1:] if value[:1] in ("+", "-") else value
    if text == "0":
        return 0.0
    if not text:
        raise ValueError(f'time: invalid duration "{value}"')
    total = Fraction(0)
    pos = 0
    while pos < len(text):
        match = _PART.match(text, pos)
        whole, frac, unit = match.groups()
        if not whole and not frac:
            raise ValueError(f'time: invalid duration "{value}"')
        if not unit:
            raise ValueError(f'time: missing unit in duration "{value}"')
        if unit not in _UNITS:
            raise ValueError(f'time: unknown unit "{unit}" in duration "{value}"')
        frac = frac or ""
        amount = int(whole or 0) + Fraction(int(frac or 0), 10 ** len(frac))
        total += amount * _UNITS[unit]
        pos = match.end()
    nanoseconds = int(total)
    if nanoseconds > 2**63 - 1:
        raise ValueError(f'time: invalid duration "{value}"')
    return (-nanoseconds if negative else nanoseconds) / 1_000_000_000


def format_duration(seconds):
    """Render seconds as a duration string such as "1m30s"."""
    return _format_duration(seconds)


def load_config(path):
    """Read settings from a YAML file; a missing file gives no settings."""
    if not path:
        return {}
    try:
        with open(path, encoding="utf-8") as handle:
            data = yaml.safe_load(handle)
    except FileNotFoundError:
        return {}
    except (OSError, yaml.YAMLError) as exc:
        raise ValueError(f"error reading config file: {exc}") from exc
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError("error reading config file: top level must be a mapping")
    return {str(key).lower(): item for key, item in data.items()}


def _config_value(name, value):
    """Convert a config entry to the type of the matching flag."""
    if name == "host":
        if value is None:
            return []
        if isinstance(value, str):
            return value.split()
        if isinstance(value, (list, tuple)):
            return [str(item) for item in value]
    elif name == "verbose":
        if isinstance(value, (bool, int)):
            return bool(value)
        if isinstance(value, str) and value.strip().lower() in {"1", "t", "true", "0", "f", "false"}:
            return value.strip().lower() in {"1", "t", "true"}
    elif isinstance(value, (int, float)) and not isinstance(value, bool):
        return value / 1_000_000_000
    elif isinstance(value, str):
        text = value.strip()
        return parse_duration(text if any(c in "nsuµmh" for c in text) else text + "ns")
    raise ValueError(f"invalid {name} in config: {value!r}")


def _duration_arg(value):
    try:
        return parse_duration(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(str(exc)) from exc


def build_parser():
    """Create the argument parser for the command."""
    parser = argparse.ArgumentParser(
        prog=PROG,
        description=wrap(HELP_LONG, 80),
        epilog="Examples:\n" + example_commands(PROG, EXAMPLES),
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "-s", "--host", action="append", default=[],
        help='hosts to connect to in the format "host:port" or with protocol prefix '
        'for one of the supported protocols (e.g. "udp://host:port")',
    )
    parser.add_argument(
        "-t", "--timeout", type=_duration_arg,
        help="maximum time to wait for the endpoints to respond before giving up (default 10s)",
    )
    parser.add_argument(
        "-e", "--every", type=_duration_arg,
        help="time to wait between each request attempt against the host (default 1s)",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", default=None,
        help="enable verbose output -- will print every time a request is made",
    )
    parser.add_argument(
        "--config", default=DEFAULT_CONFIG,
        help=f'config file to load hosts and settings from (default "{DEFAULT_CONFIG}")',
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s version {VERSION}")
    return parser


def _build_app(args):
    config = load_config(args.config)
    hosts = [host for value in args.host for host in value.split(",") if host]
    hosts.extend(_config_value("host", config.get("host")))
    settings = {}
    for name, default in DEFAULTS.items():
        value = getattr(args, name)
        if value is None:
            value = _config_value(name, config[name]) if name in config else default
        settings[name] = value
    return App(hosts=hosts, **settings)


def main(argv=None):
    """Run the command; return the process exit status."""
    args = build_parser().parse_args(argv)
    try:
        _build_app(args).run()
    except (ValueError, OSError, ProbeError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    print("All hosts are up and responding.")
    return 0


if __name__ == "__main__":
    sys.exit(main())