"""Probes that check once whether a TCP, UDP, HTTP(S), MySQL or PostgreSQL target responds."""