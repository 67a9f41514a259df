from dataclasses import dataclass, field
from datetime import datetime

from shardshortener.constants import HashStrategy, Retry


# fmt: off
@dataclass(frozen=True)
class ShortURLModel:
    target: str                         # Original long URL
    shortcode: str                      # Base62 key issued from the global counter
    created_at: datetime | None = None  # Set by the shard on insert
# fmt: on


@dataclass(frozen=True)
class ShardConfig:
    """Immutable shard topology, built once at startup.

    The same instance is handed to the shard router and the shard pool, so the
    number of shards and their order can't drift apart. Index ``i`` of
    ``shard_urls`` is always the same physical shard.

    Attributes:
        shard_urls (tuple[str, ...]):
            SQLAlchemy URLs of the shards, in routing order.
        counter_url (str | None):
            Redis URL of the global counter store.
        hash_strategy (HashStrategy):
            Routing hash. Must never change once data has been written.
        connect_attempts (int):
            Connection attempts per shard at startup.
        connect_delay (float):
            Seconds to wait between two attempts.
        redis_prefix (str | None):
            Namespace for the counter key, e.g. 'shardshortener:prod'.

    Example:
        >>> config = ShardConfig(shard_urls=('postgresql://db1/urls', 'postgresql://db2/urls'))
        >>> config.shard_count
        2
    """

    shard_urls: tuple[str, ...]
    counter_url: str | None = None
    hash_strategy: HashStrategy = HashStrategy.CHARSUM
    connect_attempts: int = Retry.SHARD_CONNECT_ATTEMPTS
    connect_delay: float = Retry.SHARD_CONNECT_DELAY
    redis_prefix: str | None = field(default=None)

    def __post_init__(self):
        # Accept any sequence, but freeze it so ordering can't be mutated later
        object.__setattr__(self, 'shard_urls', tuple(self.shard_urls))
        object.__setattr__(self, 'hash_strategy', HashStrategy(self.hash_strategy))
        if not self.shard_urls:
            raise ValueError('At least one shard URL is required.')
        if self.connect_attempts < 1:
            raise ValueError(f'Connect attempts must be at least 1 (given value: {self.connect_attempts}).')
        if self.connect_delay < 0:
            raise ValueError(f'Connect delay must be non-negative (given value: {self.connect_delay}).')

    @property
    def shard_count(self) -> int:
        return len(self.shard_urls)
