"""Wait for TCP, UDP, HTTP(S), MySQL and PostgreSQL endpoints to become available."""

__version__ = "0.1.0"