"""Relay mono float32 audio over TCP: packet format, sample queue, sender and echo server."""

__version__ = "0.1.0"