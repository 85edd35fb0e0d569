"""Buffers, locks, thread pools, delegates, AES helpers and logging for server processes."""

__version__ = "0.1.0"