"""Utility functions for application configuration management.

The shard topology and the counter store location are read once at startup
and frozen into a ShardConfig. Two sources are supported:

Environment variables (the default, see `load_config()`):

    REDIS_URL                 Counter store, e.g. redis://localhost:6379/0
    DATABASE_URL_1..N         Shard URLs in routing order; reading stops at
                              the first missing index
    SHARD_DATABASE_URLS       Comma-separated alternative to DATABASE_URL_<i>
    SHARD_HASH_STRATEGY       'charsum' (default) or 'xxhash'
    SHARD_CONNECT_ATTEMPTS    Startup attempts per shard (default 5)
    SHARD_CONNECT_DELAY       Seconds between attempts (default 5)
    APP_NAME / APP_ENV        Namespace for Redis keys

A YAML document (see `load_config_file()`):

    counter:
      url: redis://localhost:6379/0
    shards:
      - postgresql://localhost:5433/urls
      - postgresql://localhost:5434/urls
    routing:
      strategy: charsum
    retry:
      attempts: 5
      delay: 5

Functions:
    app_env() -> str
        Return the current application environment (`APP_ENV`) value,
        defaulting to `'local'`.

    app_name() -> str | None
        Return the application name (`APP_NAME`), or None if not set.

    app_prefix() -> str | None
        Return application prefix for DAOs, or None if `APP_NAME` is not set.

    shard_urls_from_env() -> tuple[str, ...]
        Collect the ordered shard URLs from the environment.

    load_config() -> ShardConfig
        Build the ShardConfig from environment variables.

    load_config_file(path) -> ShardConfig
        Build the ShardConfig from a YAML file.

NOTE:
    Shard order IS the routing table. Reordering, adding or removing shard URLs
    after data has been written makes existing short URLs unreachable.
"""

import os
import logging
from pathlib import Path
from typing import Any

import yaml

from shardshortener.constants import ENV, HashStrategy, Retry
from shardshortener.exceptions import BadConfigurationError, MissingEnvironmentVariableError
from shardshortener.models import ShardConfig
from shardshortener.utils.helpers import require_environment


logger = logging.getLogger(__name__)


def app_env() -> str:
    """Return the current application environment by reading 'APP_ENV'

    Example:
        >>> os.environ['APP_ENV'] = 'dev'
        >>> app_env()
        'dev'
    """
    return os.environ.get(ENV.App.APP_ENV, 'local').lower()


def app_name() -> str | None:
    """Return the current application name by reading 'APP_NAME'"""
    return os.environ.get(ENV.App.APP_NAME)


def app_prefix() -> str | None:
    """Return application prefix for DAOs

    Returns:
        str: app prefix as <app name>:<app env>.
             None if APP_NAME is not set.

    Example:
        >>> os.environ['APP_NAME'] = 'shardshortener'
        >>> os.environ['APP_ENV'] = 'local'
        >>> app_prefix()
        'shardshortener:local'
    """
    return None if app_name() is None else f'{app_name()}:{app_env()}'


def shard_urls_from_env() -> tuple[str, ...]:
    """Collect shard URLs from the environment, preserving their order

    `SHARD_DATABASE_URLS` wins when set. Otherwise DATABASE_URL_1,
    DATABASE_URL_2, ... are read until the first index that is not set.

    Returns:
        tuple[str, ...]: shard URLs in routing order (possibly empty).
    """
    joined = os.environ.get(ENV.Shards.DATABASE_URLS)
    if joined:
        return tuple(url.strip() for url in joined.split(',') if url.strip())

    urls = []
    index = 1
    while url := os.environ.get(f'{ENV.Shards.DATABASE_URL_PREFIX}{index}'):
        urls.append(url)
        index += 1
    return tuple(urls)


def _build_config(
    shard_urls: tuple[str, ...],
    counter_url: str | None,
    strategy: Any,
    attempts: Any,
    delay: Any,
) -> ShardConfig:
    try:
        return ShardConfig(
            shard_urls=shard_urls,
            counter_url=counter_url,
            hash_strategy=HashStrategy(strategy),
            connect_attempts=int(attempts),
            connect_delay=float(delay),
            redis_prefix=app_prefix(),
        )
    except (TypeError, ValueError) as e:
        raise BadConfigurationError(f'Invalid shard configuration: {e}') from e


@require_environment(ENV.Counter.REDIS_URL)
def load_config() -> ShardConfig:
    """Load the shard configuration from environment variables

    Returns:
        ShardConfig: frozen shard topology and counter location.

    Raises:
        MissingEnvironmentVariableError:
            If REDIS_URL or every shard URL variable is missing.
        BadConfigurationError:
            If a value can't be parsed (e.g. unknown hash strategy).

    Example:
        >>> os.environ['REDIS_URL'] = 'redis://localhost:6379/0'
        >>> os.environ['DATABASE_URL_1'] = 'postgresql://localhost:5433/urls'
        >>> load_config().shard_count
        1
    """
    shard_urls = shard_urls_from_env()
    if not shard_urls:
        raise MissingEnvironmentVariableError(
            f"Missing required environment variables: '{ENV.Shards.DATABASE_URL_PREFIX}1' or '{ENV.Shards.DATABASE_URLS}'"
        )

    config = _build_config(
        shard_urls=shard_urls,
        counter_url=os.environ[ENV.Counter.REDIS_URL],
        strategy=os.environ.get(ENV.Shards.HASH_STRATEGY, HashStrategy.CHARSUM),
        attempts=os.environ.get(ENV.Shards.CONNECT_ATTEMPTS, Retry.SHARD_CONNECT_ATTEMPTS),
        delay=os.environ.get(ENV.Shards.CONNECT_DELAY, Retry.SHARD_CONNECT_DELAY),
    )
    logger.debug('Loaded shard configuration from environment.', extra={'shardCount': config.shard_count})
    return config


def load_config_file(path: str | Path) -> ShardConfig:
    """Load the shard configuration from a YAML file

    Args:
        path (str | Path):
            Path to the YAML document.

    Returns:
        ShardConfig: frozen shard topology and counter location.

    Raises:
        FileNotFoundError:
            If the file does not exist.
        BadConfigurationError:
            If the document is malformed, lists no shards or has no counter URL.
    """
    path = Path(path)
    with path.open('r', encoding='utf-8') as f:
        document = yaml.safe_load(f) or {}

    if not isinstance(document, dict):
        raise BadConfigurationError(f'Expected a mapping at the top of {path}.')

    shards = document.get('shards') or []
    if not isinstance(shards, list) or not shards:
        raise BadConfigurationError(f"Expected a non-empty 'shards' list in {path}.")

    counter = document.get('counter') or {}
    if not isinstance(counter, dict) or not counter.get('url'):
        raise BadConfigurationError(f"Expected a 'counter.url' entry in {path}.")
    routing = document.get('routing') or {}
    retry = document.get('retry') or {}

    config = _build_config(
        shard_urls=tuple(str(url) for url in shards),
        counter_url=counter.get('url'),
        strategy=routing.get('strategy', HashStrategy.CHARSUM),
        attempts=retry.get('attempts', Retry.SHARD_CONNECT_ATTEMPTS),
        delay=retry.get('delay', Retry.SHARD_CONNECT_DELAY),
    )
    logger.debug('Loaded shard configuration from file.', extra={'path': str(path), 'shardCount': config.shard_count})
    return config
