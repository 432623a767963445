"""Algorithms, concurrency patterns and small aiohttp services."""

__version__ = "0.1.0"