"""Fixed pool of shard database engines

Each configured shard URL gets one SQLAlchemy Engine (itself a thread-safe
connection pool). All engines are established, and verified with a trivial
round trip, before the pool is handed out. A shard that stays unreachable
after the bounded retries aborts startup: routing assumes every index in
[0, N) is addressable, so serving with a hole in the shard set would send
some keys nowhere.

Classes:
    ShardPool:
        Ordered, fixed-size set of live shard engines.

Example:
    >>> from shardshortener.models import ShardConfig
    >>> from shardshortener.dao.sql import ShardPool

    >>> config = ShardConfig(shard_urls=('postgresql://db1/urls', 'postgresql://db2/urls'))
    >>> pool = ShardPool.initialize(config)
    >>> len(pool)
    2
    >>> pool.get(0)
    Engine(postgresql://db1/urls)
"""

import time
import logging
from collections.abc import Callable, Sequence

from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

from shardshortener.models import ShardConfig
from shardshortener.dao.exceptions import ShardInitError
from shardshortener.dao.sql.helpers import masked_url
from shardshortener.dao.sql.tables import metadata


logger = logging.getLogger(__name__)


def _connect_shard(
    url: str,
    index: int,
    attempts: int,
    delay: float,
    sleep: Callable[[float], None],
    engine_factory: Callable[..., Engine],
) -> Engine:
    """Create an engine for one shard and verify it with SELECT 1

    Retries up to `attempts` times, sleeping `delay` seconds between two
    attempts (no sleep after the last one).

    Raises:
        ShardInitError:
            If every attempt failed.
    """
    for attempt in range(1, attempts + 1):
        engine = None
        try:
            engine = engine_factory(url, pool_pre_ping=True)
            with engine.connect() as conn:
                conn.execute(text('SELECT 1'))
        except SQLAlchemyError as e:
            if engine is not None:
                engine.dispose()
            attempts_left = attempts - attempt
            logger.warning(
                'Error connecting to shard, retrying...' if attempts_left else 'Error connecting to shard, giving up.',
                extra={'shard': index, 'url': masked_url(url), 'attempt': attempt, 'attemptsLeft': attempts_left, 'error': str(e)},
            )
            if attempts_left:
                sleep(delay)
        else:
            logger.info('Connected to shard.', extra={'shard': index, 'url': masked_url(url), 'attempt': attempt})
            return engine

    raise ShardInitError(f'Failed to connect to shard {index} at {masked_url(url)} after {attempts} attempts.')


class ShardPool:
    """Ordered, fixed-size set of live shard engines

    Index i always refers to the i-th URL of the ShardConfig the pool was
    built from. The pool never grows, shrinks or reorders.

    Attributes:
        config (ShardConfig | None):
            Shard topology the pool was initialized from.

    Methods:
        initialize(config, *, sleep, engine_factory) -> ShardPool:
            Connect every shard (with bounded retry) and return the pool.
            Raises ShardInitError when a shard stays unreachable.

        get(index: int) -> Engine:
            Return the engine of a shard.

        create_schema() -> None:
            Create the urls table on every shard if missing.

        dispose() -> None:
            Close the connection pools of all shards.
    """

    def __init__(self, engines: Sequence[Engine], config: ShardConfig | None = None):
        if not engines:
            raise ValueError('A shard pool needs at least one engine.')
        if config is not None and len(engines) != config.shard_count:
            raise ValueError(f'Expected {config.shard_count} shard engines (given: {len(engines)}).')

        self._engines = tuple(engines)
        self.config = config

    @classmethod
    def initialize(
        cls,
        config: ShardConfig,
        *,
        sleep: Callable[[float], None] = time.sleep,
        engine_factory: Callable[..., Engine] = create_engine,
    ) -> 'ShardPool':
        """Connect to every configured shard, in order

        Args:
            config (ShardConfig):
                Shard URLs and retry policy.
            sleep (Callable[[float], None]):
                Called between attempts. Defaults to time.sleep.
            engine_factory (Callable[..., Engine]):
                Builds an engine from a URL. Defaults to sqlalchemy.create_engine.

        Returns:
            ShardPool: pool with one verified engine per shard.

        Raises:
            ShardInitError:
                If any shard is unreachable after `config.connect_attempts`
                attempts. Engines already created are disposed, on this or any
                other error (e.g. a missing DBAPI driver).
        """
        engines = []
        try:
            for index, url in enumerate(config.shard_urls):
                engines.append(
                    _connect_shard(
                        url,
                        index,
                        attempts=config.connect_attempts,
                        delay=config.connect_delay,
                        sleep=sleep,
                        engine_factory=engine_factory,
                    )
                )
        except BaseException:
            for engine in engines:
                engine.dispose()
            raise

        logger.info('All database shards initialized successfully.', extra={'shardCount': len(engines)})
        return cls(engines, config=config)

    def __len__(self) -> int:
        return len(self._engines)

    @property
    def engines(self) -> tuple[Engine, ...]:
        return self._engines

    def get(self, index: int) -> Engine:
        if not 0 <= index < len(self._engines):
            raise IndexError(f'Shard index {index} out of range [0, {len(self._engines)}).')
        return self._engines[index]

    def create_schema(self) -> None:
        for engine in self._engines:
            metadata.create_all(engine)

    def dispose(self) -> None:
        for engine in self._engines:
            engine.dispose()
