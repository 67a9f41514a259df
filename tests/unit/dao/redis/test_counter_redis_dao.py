"""Unit tests for the CounterRedisDAO

Test coverage includes:

1. Initialization and configuration
   - Ensures the DAO uses a provided client and pings it.
   - Confirms an unreachable Redis raises CounterUnavailableError.

2. Counter increments
   - First call lazily initializes the counter and returns 1.
   - Each call increments by exactly one, under the configured key.

3. Counter reads
   - current() returns 0 for a fresh counter and never increments.

4. Concurrency
   - 100 parallel next() calls return 100 distinct, contiguous values.

5. Failure handling
   - Connection errors and timeouts raise CounterUnavailableError.
   - Any other Redis error raises DataStoreError.
"""

from concurrent.futures import ThreadPoolExecutor

import pytest
import redis

from shardshortener.dao.base import CounterBaseDAO
from shardshortener.dao.exceptions import CounterUnavailableError, DataStoreError
from shardshortener.dao.redis import CounterRedisDAO


# -------------------------------
# Fixtures
# -------------------------------


@pytest.fixture
def app_prefix():
    return 'testapp:test'


@pytest.fixture
def counter(redis_client, app_prefix):
    return CounterRedisDAO(redis_client=redis_client, prefix=app_prefix)


# -------------------------------
# 1. Initialization and configuration
# -------------------------------


def test_initialize_with_redis_client(counter, redis_client):
    assert isinstance(counter, CounterBaseDAO)
    assert counter.redis is redis_client
    redis_client.ping.assert_called_once()


def test_initialize_with_unreachable_redis(redis_client):
    redis_client.ping.side_effect = redis.exceptions.ConnectionError('Connection refused')

    with pytest.raises(CounterUnavailableError, match="Can't connect to Redis at redis.test:6379/0"):
        CounterRedisDAO(redis_client=redis_client)


# -------------------------------
# 2. Counter increments
# -------------------------------


def test_next_starts_at_one(counter, redis_client):
    """Ensure the first value issued from a fresh counter is 1."""
    assert counter.next() == 1
    redis_client.incr.assert_called_once_with('testapp:test:urls:counter')


def test_next_increments_by_one(counter):
    assert [counter.next() for _ in range(5)] == [1, 2, 3, 4, 5]


def test_next_without_prefix(redis_client):
    counter = CounterRedisDAO(redis_client=redis_client)
    counter.next()
    redis_client.incr.assert_called_once_with('urls:counter')


# -------------------------------
# 3. Counter reads
# -------------------------------


def test_current_on_fresh_counter(counter, redis_client):
    assert counter.current() == 0
    redis_client.incr.assert_not_called()


def test_current_after_increments(counter):
    counter.next()
    counter.next()
    assert counter.current() == 2
    assert counter.current() == 2


# -------------------------------
# 4. Concurrency
# -------------------------------


def test_concurrent_next_is_distinct_and_contiguous(counter):
    """Ensure 100 parallel callers get exactly {prev + 1, ..., prev + 100}."""
    for _ in range(7):
        counter.next()
    previous = counter.current()

    with ThreadPoolExecutor(max_workers=100) as executor:
        futures = [executor.submit(counter.next) for _ in range(100)]
        values = [future.result() for future in futures]

    assert len(set(values)) == 100
    assert set(values) == set(range(previous + 1, previous + 101))
    assert counter.current() == previous + 100


# -------------------------------
# 5. Failure handling
# -------------------------------


@pytest.mark.parametrize(
    'error',
    [
        redis.exceptions.ConnectionError('Connection refused'),
        redis.exceptions.TimeoutError('Timeout reading from socket'),
    ],
)
def test_next_with_unreachable_redis(counter, redis_client, error):
    redis_client.incr.side_effect = error

    with pytest.raises(CounterUnavailableError, match="Can't connect to Redis at redis.test:6379/0."):
        counter.next()


def test_current_with_unreachable_redis(counter, redis_client):
    redis_client.get.side_effect = redis.exceptions.ConnectionError('Connection refused')

    with pytest.raises(DataStoreError):
        counter.current()


def test_next_with_wrong_type_counter_key(counter, redis_client):
    """Ensure a non-integer counter key surfaces as DataStoreError, not a raw Redis error."""
    redis_client.incr.side_effect = redis.exceptions.ResponseError('WRONGTYPE Operation against a key holding the wrong kind of value')

    with pytest.raises(DataStoreError, match=r'Redis operation next\(\) failed'):
        counter.next()
