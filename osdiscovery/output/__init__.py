"""
osdiscovery - Output Formatters

This package provides report formatting for discovery results.
"""

from .json_formatter import JSONFormatter, DateTimeEncoder

__all__ = [
    "JSONFormatter",
    "DateTimeEncoder",
]
