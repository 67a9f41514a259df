"""Redis mixin providing shared client initialization and connectivity checks.

Responsibilities:
    - Initialize Redis client (from a URL, from connection parameters, or reuse one)
    - Healthcheck Redis client

Classes:
    - RedisClientMixin: Base mixin to inject Redis key management, client setup & healthcheck.

Example:
    Typical usage with a DAO implementation:

        >>> class CounterRedisDAO(RedisClientMixin, CounterBaseDAO):
        ...     pass
        ...
        >>> dao = CounterRedisDAO(redis_url="redis://localhost:6379/0", prefix="myapp:prod")
        >>> dao._healthcheck()
        True
"""

from typing import Optional

import redis

from shardshortener.dao.redis.redis_key_schema import RedisKeySchema
from shardshortener.dao.redis.helpers import redis_location
from shardshortener.dao.exceptions import CounterUnavailableError


class RedisClientMixin:
    """Mixin Redis client setup and health check for Redis-backed DAOs.

    Attributes:
        redis (redis.Redis):
            Active Redis client instance used by subclasses.

        keys (RedisKeySchema):
            Helper class for generating namespaced Redis key names.

    Methods:
        _healthcheck(raise_error: bool = True) -> bool:
            Ping Redis to verify connectivity.
            Optionally raise a CounterUnavailableError if unreachable.
    """

    def __init__(
        self,
        redis_url: Optional[str] = None,
        redis_host: Optional[str] = 'localhost',
        redis_port: Optional[int] = 6379,
        redis_db: Optional[int] = 0,
        redis_decode_responses: Optional[bool] = True,
        redis_username: Optional[str] = None,
        redis_password: Optional[str] = None,
        redis_client: Optional[redis.Redis] = None,
        prefix: Optional[str] = None,
    ):
        """Initialize a Redis-based DAO

        An existing Redis client takes precedence, then a connection URL, then
        the individual connection parameters.

        Args:
            redis_url (Optional[str]):
                Connection URL, e.g. 'redis://:password@localhost:6379/0'.

            redis_host (Optional[str]):
                Hostname of the Redis server. Defaults to 'localhost'.

            redis_port (Optional[int]):
                Redis server port. Defaults to 6379.

            redis_db (Optional[int]):
                Redis database index. Defaults to 0.

            redis_decode_responses (Optional[bool]):
                If True, decodes Redis responses. Defaults to True.

            redis_username (Optional[str]):
                Username for Redis authentication (if required).

            redis_password (Optional[str]):
                Password for Redis authentication (if required).

            redis_client (Optional[redis.Redis]):
                Pre-initialized Redis client. If None, a new client is created.

            prefix (Optional[str]):
                Namespace prefix for all Redis keys, e.g. 'app:env'.

        Raises:
            CounterUnavailableError:
                If Redis healthcheck fails (connectivity issues).
        """
        if redis_client is None and redis_url is not None:
            redis_client = redis.Redis.from_url(redis_url, decode_responses=redis_decode_responses)
        elif redis_client is None:
            redis_client = redis.Redis(
                host=redis_host,
                port=int(redis_port),
                db=int(redis_db),
                decode_responses=redis_decode_responses,
                username=redis_username,
                password=redis_password,
            )

        self.redis = redis_client
        self.keys = RedisKeySchema(prefix=prefix)

        self._healthcheck()

    def _healthcheck(self, raise_error: bool = True) -> bool:
        """PING Redis to healthcheck connectivity

        Args:
            raise_error (bool):
                If True, raises CounterUnavailableError on failure. Defaults to True.

        Returns:
            bool:
                True if Redis is reachable, False otherwise (only if raise_error=False).

        Raises:
            CounterUnavailableError:
                If Redis connection cannot be established and raise_error=True.
        """
        try:
            self.redis.ping()
        except (redis.exceptions.ConnectionError, redis.exceptions.TimeoutError) as e:
            if raise_error:
                raise CounterUnavailableError(
                    f"Can't connect to Redis at {redis_location(self.redis)}. Check the provided configuration parameters."
                ) from e
            return False
        else:
            return True
