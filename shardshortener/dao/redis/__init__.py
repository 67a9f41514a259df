from shardshortener.dao.redis.redis_key_schema import RedisKeySchema
from shardshortener.dao.redis.mixins import RedisClientMixin
from shardshortener.dao.redis.counter_redis_dao import CounterRedisDAO


__all__ = [
    'RedisKeySchema',
    'RedisClientMixin',
    'CounterRedisDAO',
]
