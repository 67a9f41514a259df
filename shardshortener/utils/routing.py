"""Shard routing

Maps a shortcode to the index of the shard that owns it. Routing must stay
pure and constant while data exists: the same key has to land on the same
shard on every process, forever, or previously stored mappings become
undiscoverable.

Functions:
    route(key, shard_count, strategy='charsum') -> int:
        Compute the shard index for a key.

Classes:
    ShardRouter:
        Routes keys using a fixed ShardConfig.

Example:
    >>> from shardshortener.utils.routing import route
    >>> route('abc', 3)
    0
    >>> route('', 3)
    0
"""

from collections.abc import Callable

import xxhash
from beartype import beartype

from shardshortener.constants import HashStrategy
from shardshortener.models import ShardConfig


def _charsum(key: str) -> int:
    return sum(ord(char) for char in key)


def _xxh64(key: str) -> int:
    return xxhash.xxh64_intdigest(key.encode('utf-8'))


_HASHES: dict[HashStrategy, Callable[[str], int]] = {
    HashStrategy.CHARSUM: _charsum,
    HashStrategy.XXHASH: _xxh64,
}


@beartype
def route(key: str, shard_count: int, strategy: str = HashStrategy.CHARSUM) -> int:
    """Compute the shard index in [0, shard_count) for a key.

    The default ``charsum`` strategy sums the code points of every character
    and reduces modulo ``shard_count``. An empty key routes to shard 0.

    Args:
        key (str):
            Shortcode to route.
        shard_count (int):
            Number of shards, must be >= 1.
        strategy (str):
            Hash strategy name ('charsum' or 'xxhash').

    Returns:
        int: shard index.

    Raises:
        ValueError:
            If ``shard_count`` < 1 or the strategy is unknown.

    Example:
        >>> route('10', 3)  # ord('1') + ord('0') = 97
        1
    """
    if shard_count < 1:
        raise ValueError(f'Shard count must be a positive integer (given value: {shard_count}).')
    try:
        hash_func = _HASHES[HashStrategy(strategy)]
    except ValueError:
        raise ValueError(f'Unknown hash strategy {strategy!r}.') from None
    return hash_func(key) % shard_count


class ShardRouter:
    """Route shortcodes with the shard count and strategy of a ShardConfig."""

    def __init__(self, config: ShardConfig):
        self.config = config

    @property
    def shard_count(self) -> int:
        return self.config.shard_count

    def route(self, key: str) -> int:
        return route(key, self.config.shard_count, self.config.hash_strategy)
