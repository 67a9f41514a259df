"""Shared fixtures

- `redis_client`: MagicMock Redis client whose INCR/GET behave like a real
  counter (thread-safe, keys start at 0).
- `shard_urls` / `shard_config`: three SQLite shard databases in a temp dir.
- `shard_pool`: initialized pool with the urls table created on every shard.
"""

import threading
from unittest.mock import MagicMock

import pytest
import redis

from shardshortener.models import ShardConfig
from shardshortener.dao.sql import ShardPool


SHARD_COUNT = 3


@pytest.fixture
def redis_client() -> redis.Redis:
    """Mock a Redis client backed by an in-memory, lock-protected key space."""
    store = {}
    lock = threading.Lock()

    def incr(name, amount=1):
        with lock:
            store[name] = int(store.get(name, 0)) + amount
            return store[name]

    def get(name):
        with lock:
            return None if name not in store else str(store[name])

    client = MagicMock(
        spec=redis.Redis,
        connection_pool=MagicMock(spec=redis.ConnectionPool, connection_kwargs={'host': 'redis.test', 'port': 6379, 'db': 0}),
    )
    client.ping.return_value = True
    client.incr.side_effect = incr
    client.get.side_effect = get
    return client


@pytest.fixture
def shard_urls(tmp_path) -> tuple[str, ...]:
    return tuple(f'sqlite:///{tmp_path / f"shard{i}.db"}' for i in range(SHARD_COUNT))


@pytest.fixture
def shard_config(shard_urls) -> ShardConfig:
    return ShardConfig(shard_urls=shard_urls, counter_url='redis://redis.test:6379/0', connect_delay=0)


@pytest.fixture
def shard_pool(shard_config):
    pool = ShardPool.initialize(shard_config, sleep=lambda _: None)
    pool.create_schema()
    yield pool
    pool.dispose()
