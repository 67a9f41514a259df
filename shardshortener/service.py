"""Mapping service: create and resolve short URLs

This is the entry point the HTTP layer calls. It owns no state besides
references to its collaborators:

    create(long_url)
        -> counter.next()              (CounterUnavailableError)
        -> encode(counter value)
        -> short_urls.insert(...)      (route -> shard -> INSERT, PersistenceError)
        -> stored ShortURLModel

    resolve(shortcode)
        -> short_urls.get(shortcode)   (route -> shard -> SELECT, PersistenceError)
        -> long URL, or None when there is no mapping

Errors from the collaborators propagate unchanged. Nothing is retried here:
retrying a failed INSERT after a successful INCR would only burn counter
values, and retrying INCR itself could hand out a value twice.

Classes:
    MappingService:
        Orchestrates the counter, the base62 encoder and the sharded DAO.

Example:
    >>> from shardshortener.service import MappingService
    >>> from shardshortener.utils import load_config

    >>> service = MappingService.from_config(load_config())
    >>> short_url = service.create('https://example.com')
    >>> short_url.shortcode
    '1'
    >>> service.resolve('1')
    'https://example.com'
    >>> print(service.resolve('doesNotExist'))
    None
"""

import time
import threading
import logging
from collections.abc import Callable

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine

from shardshortener.models import ShardConfig, ShortURLModel
from shardshortener.exceptions import InvalidInputError
from shardshortener.dao.exceptions import ShardInitError
from shardshortener.dao.base import CounterBaseDAO, ShortURLBaseDAO
from shardshortener.dao.redis import CounterRedisDAO
from shardshortener.dao.sql import ShardPool, ShortURLSQLDAO
from shardshortener.utils.base62 import encode
from shardshortener.utils.routing import ShardRouter
from shardshortener.utils.config import load_config


logger = logging.getLogger(__name__)


class MappingService:
    """Create short URLs from long URLs and resolve them back

    Attributes:
        counter (CounterBaseDAO):
            Global sequence generator.
        short_urls (ShortURLBaseDAO):
            Sharded persistence of mappings.
    """

    def __init__(self, counter: CounterBaseDAO, short_urls: ShortURLBaseDAO):
        self.counter = counter
        self.short_urls = short_urls

    @classmethod
    def from_config(
        cls,
        config: ShardConfig,
        *,
        sleep: Callable[[float], None] = time.sleep,
        engine_factory: Callable[..., Engine] = create_engine,
    ) -> 'MappingService':
        """Wire the Redis counter and the shard pool described by a ShardConfig

        Every shard is connected (with bounded retry) before the service is
        returned, so no request can be served with a shard missing.

        Raises:
            CounterUnavailableError:
                If Redis does not answer the startup PING.
            ShardInitError:
                If a shard is unreachable after all connection attempts.
        """
        counter = CounterRedisDAO(redis_url=config.counter_url, prefix=config.redis_prefix)
        pool = ShardPool.initialize(config, sleep=sleep, engine_factory=engine_factory)
        return cls(counter=counter, short_urls=ShortURLSQLDAO(pool=pool, router=ShardRouter(config)))

    def create(self, long_url: str | None) -> ShortURLModel:
        """Issue a new shortcode for a long URL and persist the mapping

        Args:
            long_url (str | None):
                URL to shorten. Must be a non-blank string.

        Returns:
            ShortURLModel: the mapping exactly as stored by its shard.

        Raises:
            InvalidInputError:
                If `long_url` is missing or blank (the counter is not touched).
            CounterUnavailableError:
                If no identifier could be issued.
            PersistenceError:
                If the shard rejected the insert (including duplicate keys).
        """
        if not isinstance(long_url, str) or not long_url.strip():
            raise InvalidInputError('longUrl is required')

        shortcode = encode(self.counter.next())
        stored = self.short_urls.insert(ShortURLModel(target=long_url, shortcode=shortcode))

        logger.info('Created short URL.', extra={'shortcode': stored.shortcode})
        return stored

    def resolve(self, shortcode: str) -> str | None:
        """Return the long URL stored for a shortcode

        Returns:
            str | None: the long URL unmodified, or None if no mapping exists.

        Raises:
            PersistenceError:
                If the lookup failed on the shard.
        """
        short_url = self.short_urls.get(shortcode)
        if short_url is None:
            logger.info('Short URL not found.', extra={'shortcode': shortcode})
            return None
        return short_url.target


_service: MappingService | None = None
_startup_error: ShardInitError | None = None
_service_lock = threading.Lock()


def get_service() -> MappingService:
    """Return the process-wide MappingService, built from the environment on first use

    A shard that can't be reached at startup is fatal for the process: the
    ShardInitError is remembered and raised again on every later call, without
    another round of connection attempts, so no request is ever served with a
    shard missing.

    Raises:
        ShardInitError:
            If any shard was unreachable when the service was first built.
        CounterUnavailableError:
            If Redis did not answer the startup PING (retried on the next call).
    """
    global _service, _startup_error

    with _service_lock:
        if _startup_error is not None:
            raise _startup_error
        if _service is None:
            try:
                _service = MappingService.from_config(load_config())
            except ShardInitError as e:
                logger.critical('Shard pool failed to initialize. Refusing to serve requests.', extra={'error': str(e)})
                _startup_error = e
                raise
        return _service
