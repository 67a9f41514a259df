from enum import StrEnum


class Retry:
    """Shard connection retry policy (startup only)."""

    SHARD_CONNECT_ATTEMPTS = 5
    SHARD_CONNECT_DELAY = 5  # seconds between attempts


class HashStrategy(StrEnum):
    """Shard routing hash functions."""

    CHARSUM = 'charsum'  # sum of code points, the default
    XXHASH = 'xxhash'  # xxh64 digest, better spread for similar keys


class ENV:
    """Environment variable names."""

    class App(StrEnum):
        APP_ENV = 'APP_ENV'
        APP_NAME = 'APP_NAME'
        LOG_LEVEL = 'LOG_LEVEL'

    class Counter(StrEnum):
        REDIS_URL = 'REDIS_URL'

    class Shards(StrEnum):
        # DATABASE_URL_1, DATABASE_URL_2, ... in routing order
        DATABASE_URL_PREFIX = 'DATABASE_URL_'
        # Comma-separated alternative to the numbered variables
        DATABASE_URLS = 'SHARD_DATABASE_URLS'
        HASH_STRATEGY = 'SHARD_HASH_STRATEGY'
        CONNECT_ATTEMPTS = 'SHARD_CONNECT_ATTEMPTS'
        CONNECT_DELAY = 'SHARD_CONNECT_DELAY'


# Shard table name
URLS_TABLE = 'urls'

# Error codes
UNKNOWN_INTERNAL_SERVER_ERROR = 'UNKNOWN_INTERNAL_SERVER_ERROR'
