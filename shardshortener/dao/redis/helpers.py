import functools
import redis
from typing import TypeVar, Any
from collections.abc import Callable

from shardshortener.dao.exceptions import CounterUnavailableError, DataStoreError


__all__ = []

F = TypeVar('F', bound=Callable[..., Any])


def redis_location(client: redis.Redis) -> str:
    """Describe the Redis server a client points to as host:port/db"""
    info = client.connection_pool.connection_kwargs
    return f"{info.get('host')}:{info.get('port')}/{info.get('db')}"


def handle_redis_connection_error(method: F) -> F:
    """Wrap Redis-interacting DAO methods to handle connection errors

    Both refused connections and timeouts mean the counter store is
    unreachable, so no identifier may be issued. Any other Redis failure
    (e.g. WRONGTYPE on the counter key) surfaces as DataStoreError.

    Args:
        method (Callable[..., Any]):
            DAO method performing Redis operations which may raise
            redis.exceptions.ConnectionError or redis.exceptions.TimeoutError.

    Returns:
        Callable[..., Any]:
            Wrapped method which raises CounterUnavailableError on connectivity issues with Redis
            and DataStoreError on any other Redis error.

    Example:
        >>> @handle_redis_connection_error
        ... def next(self):
        ...     return self.redis.incr('urls:counter')
    """

    @functools.wraps(method)
    def wrapper(self, *args, **kwargs):
        try:
            return method(self, *args, **kwargs)
        except (redis.exceptions.ConnectionError, redis.exceptions.TimeoutError) as e:
            raise CounterUnavailableError(f"Can't connect to Redis at {redis_location(self.redis)}.") from e
        except redis.exceptions.RedisError as e:
            raise DataStoreError(f'Redis operation {method.__name__}() failed at {redis_location(self.redis)}: {e}') from e

    return wrapper
