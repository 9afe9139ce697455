"""
osdiscovery - Logging Configuration

Routes the per-module loggers to stderr for the CLI.
"""

import logging


def setup_logging(verbose: bool = False) -> None:
    """Send library log records to stderr; DEBUG when verbose, else WARNING."""
    level = logging.DEBUG if verbose else logging.WARNING
    fmt = "%(asctime)s %(levelname)s [%(name)s] %(message)s"
    logging.basicConfig(level=level, format=fmt)
