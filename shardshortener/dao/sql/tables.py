from sqlalchemy import Table, Column, Integer, DateTime, MetaData, String, Text, func

from shardshortener.constants import URLS_TABLE


metadata = MetaData()

# Every shard carries the same table; a row lives in exactly one shard,
# picked by routing its short_url.
urls = Table(
    URLS_TABLE,
    metadata,
    Column('id', Integer, primary_key=True, autoincrement=True),
    Column('short_url', String(length=64), nullable=False, unique=True, index=True),
    Column('long_url', Text, nullable=False),
    Column('created_at', DateTime(timezone=True), nullable=False, server_default=func.now()),
)
