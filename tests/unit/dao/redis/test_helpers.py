"""Unit tests for Redis DAO helpers.

Test coverage includes:
    1. redis_location()
       - Describes the server a client points to as host:port/db.
    2. handle_redis_connection_error()
       - Ensures the wrapped method executes and returns its result.
       - Ensures connection errors and timeouts become CounterUnavailableError.
       - Ensures other Redis errors become DataStoreError; non-Redis errors pass through.
       - Confirms functools.wraps preserves the original function's name and docstring.
"""

import pytest
import redis
from unittest.mock import MagicMock

from shardshortener.dao.redis.helpers import handle_redis_connection_error, redis_location
from shardshortener.dao.exceptions import CounterUnavailableError, DataStoreError


class DummyDAO:
    def __init__(self, error=None):
        self.error = error
        self.redis = MagicMock()
        self.redis.connection_pool.connection_kwargs = {'host': 'localhost', 'port': 6379, 'db': 0}

    @handle_redis_connection_error
    def incr(self):
        if self.error is not None:
            raise self.error
        return 1


# -------------------------------
# 1. redis_location()
# -------------------------------


def test_redis_location():
    assert redis_location(DummyDAO().redis) == 'localhost:6379/0'


# -------------------------------
# 2. handle_redis_connection_error()
# -------------------------------


def test_decorator_allows_normal_execution():
    """Ensure the wrapped function executes normally when no error occurs."""
    assert DummyDAO().incr() == 1


@pytest.mark.parametrize(
    'error',
    [
        redis.exceptions.ConnectionError('Cannot connect'),
        redis.exceptions.TimeoutError('Timed out'),
    ],
)
def test_decorator_transforms_connection_errors(error):
    """Ensure connectivity errors are re-raised as CounterUnavailableError."""
    with pytest.raises(CounterUnavailableError, match="Can't connect to Redis at localhost:6379/0.") as exc_info:
        DummyDAO(error).incr()

    assert exc_info.value.__cause__ is error


def test_decorator_transforms_other_redis_errors():
    """Ensure non-connectivity Redis errors become a DataStoreError, not CounterUnavailableError."""
    error = redis.exceptions.ResponseError('value is not an integer or out of range')

    with pytest.raises(DataStoreError, match=r'Redis operation incr\(\) failed at localhost:6379/0') as exc_info:
        DummyDAO(error).incr()

    assert not isinstance(exc_info.value, CounterUnavailableError)
    assert exc_info.value.__cause__ is error


def test_decorator_passes_other_errors():
    with pytest.raises(ValueError):
        DummyDAO(ValueError('not a redis error')).incr()


def test_decorator_preserves_function_metadata():
    """Ensure function name and docstring are preserved via functools.wraps."""

    @handle_redis_connection_error
    def sample_function():
        """This is a sample docstring."""
        return 'OK'

    assert sample_function.__name__ == 'sample_function'
    assert 'sample docstring' in sample_function.__doc__
