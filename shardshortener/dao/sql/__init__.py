from shardshortener.dao.sql.tables import metadata, urls
from shardshortener.dao.sql.shard_pool import ShardPool
from shardshortener.dao.sql.short_url_sql_dao import ShortURLSQLDAO


__all__ = [
    'metadata',
    'urls',
    'ShardPool',
    'ShortURLSQLDAO',
]
