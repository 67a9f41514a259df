"""Data Access Object (DAO) implementation of the global counter in Redis

This module provides the sequence generator behind every shortcode: a single
Redis integer incremented with INCR. Redis executes commands one at a time,
so concurrent INCR calls from any number of processes receive distinct,
contiguous values. Nothing is cached or pre-allocated in-process; a value
that was never returned by Redis is never used.

Responsibilities:
    - Increment and return the global counter;
    - Read the current counter value;
    - Raise CounterUnavailableError when Redis can't be reached.

Classes:
    CounterRedisDAO:
        DAO for issuing counter values from a Redis datastore.

Example:
    >>> from shardshortener.dao.redis import CounterRedisDAO

    >>> counter = CounterRedisDAO(redis_url='redis://localhost:6379/0', prefix='app:dev')
    >>> counter.current()
    0
    >>> counter.next()
    1
"""

import logging

from beartype import beartype

from shardshortener.dao.base import CounterBaseDAO
from shardshortener.dao.redis.mixins import RedisClientMixin
from shardshortener.dao.redis.helpers import handle_redis_connection_error


logger = logging.getLogger(__name__)


class CounterRedisDAO(RedisClientMixin, CounterBaseDAO):
    """Redis-based Data Access Object (DAO) for the global URL counter

    Attributes (see RedisClientMixin):
        redis (redis.Redis):
            Redis client used to communicate with the Redis datastore.
        keys (RedisKeySchema):
            Key schema helper for generating namespaced Redis keys.

    Methods:
        next(**kwargs) -> int:
            INCR the counter and return the new value.
            Raises CounterUnavailableError on connectivity issues with Redis.

        current(**kwargs) -> int:
            GET the counter value, 0 if it was never incremented.
            Raises CounterUnavailableError on connectivity issues with Redis.
    """

    @handle_redis_connection_error
    @beartype
    def next(self, **kwargs) -> int:
        """Increment the global counter and return the new value

        A missing counter key is created by Redis with value 0 before the
        increment, so the very first call returns 1.

        Returns:
            int: The incremented counter value.

        Raises:
            CounterUnavailableError:
                If Redis can't be reached. No value was issued.

        Example:
            >>> counter.next()
            124
        """
        value = int(self.redis.incr(self.keys.counter_key()))
        logger.debug('Issued counter value.', extra={'counter': value})
        return value

    @handle_redis_connection_error
    @beartype
    def current(self, **kwargs) -> int:
        """Retrieve the global counter without incrementing it

        Returns:
            int: The last issued value, 0 if the counter was never used.

        Raises:
            CounterUnavailableError:
                If Redis can't be reached.

        Example:
            >>> counter.current()
            123
        """
        value = self.redis.get(self.keys.counter_key())
        return 0 if value is None else int(value)
