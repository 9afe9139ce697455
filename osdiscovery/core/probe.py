"""
osdiscovery - Ordered Fallback

Every attribute is resolved the same way: an ordered list of strategies
is tried against a source adapter and the first answer wins.

A strategy is a callable taking the SourceAdapter. It returns the answer,
or None when its source does not apply. A SourceError raised by the
adapter also means "does not apply". Any other DiscoveryError raised by a
strategy is terminal and stops the sequence.
"""

import logging
from typing import Callable, Optional, Sequence, TypeVar

from .errors import DiscoveryError, SourceError
from .sources import SourceAdapter, decode

logger = logging.getLogger(__name__)

T = TypeVar("T")

Strategy = Callable[[SourceAdapter], Optional[T]]


def first_match(
    strategies: Sequence[Strategy],
    source: SourceAdapter,
    unknown: type[DiscoveryError],
) -> T:
    """Return the answer of the first strategy that produces one.

    Args:
        strategies: Strategies in priority order
        source: Adapter passed to each strategy
        unknown: Error raised when every strategy falls through

    Returns:
        The first non-None strategy result

    Raises:
        unknown: If no strategy produced an answer
        DiscoveryError: Any terminal error raised by a strategy
    """
    for strategy in strategies:
        name = getattr(strategy, "__name__", repr(strategy))
        try:
            result = strategy(source)
        except SourceError as e:
            logger.debug("%s: source unavailable (%s)", name, e)
            continue

        if result is None:
            logger.debug("%s: no match", name)
            continue

        logger.debug("%s: matched %r", name, result)
        return result

    raise unknown()


def command_output(name: str, *args: str) -> Strategy:
    """Build a strategy returning the trimmed output of a command.

    Empty output counts as no answer.
    """
    def strategy(source: SourceAdapter) -> Optional[str]:
        return decode(source.run_command(name, *args)).strip() or None

    strategy.__name__ = " ".join((name, *args))
    return strategy


def file_content(path: str) -> Strategy:
    """Build a strategy returning the trimmed content of a file.

    Empty content counts as no answer.
    """
    def strategy(source: SourceAdapter) -> Optional[str]:
        return decode(source.read_file(path)).strip() or None

    strategy.__name__ = path
    return strategy
