"""Data Access Object (DAO) implementation for short URLs stored across SQL shards

Every short URL lives in exactly one shard, chosen by routing its shortcode.
Inserts and lookups for the same shortcode therefore always hit the same
shard, and per-shard uniqueness of `short_url` is global uniqueness.

Classes:
    ShortURLSQLDAO:
        DAO for storing and retrieving ShortURLModel in sharded SQL databases.

Example:
    >>> from shardshortener.models import ShortURLModel
    >>> from shardshortener.dao.sql import ShardPool, ShortURLSQLDAO
    >>> from shardshortener.utils import ShardRouter

    >>> dao = ShortURLSQLDAO(pool=ShardPool.initialize(config), router=ShardRouter(config))
    >>> dao.insert(ShortURLModel(target='https://example.com/page', shortcode='1'))
    ShortURLModel(target='https://example.com/page', shortcode='1', created_at=datetime(...))
    >>> dao.get('1').target
    'https://example.com/page'
"""

import logging

from beartype import beartype
from sqlalchemy import insert, select
from sqlalchemy.engine import Engine
from sqlalchemy.exc import IntegrityError

from shardshortener.models import ShortURLModel
from shardshortener.dao.base import ShortURLBaseDAO
from shardshortener.dao.exceptions import ShortURLAlreadyExistsError
from shardshortener.dao.sql.helpers import handle_sql_error
from shardshortener.dao.sql.shard_pool import ShardPool
from shardshortener.dao.sql.tables import urls
from shardshortener.utils.routing import ShardRouter


logger = logging.getLogger(__name__)


class ShortURLSQLDAO(ShortURLBaseDAO):
    """Sharded SQL Data Access Object (DAO) for short URL mappings

    Attributes:
        pool (ShardPool):
            Live shard engines, indexed by routing result.
        router (ShardRouter):
            Maps shortcodes to shard indices.

    Methods:
        insert(short_url: ShortURLModel, **kwargs) -> ShortURLModel:
            Insert a mapping into its shard and return the stored row.
            Raises ShortURLAlreadyExistsError when the shortcode exists.
            Raises PersistenceError on any other database failure.

        get(shortcode: str, **kwargs) -> ShortURLModel | None:
            Look up a mapping in its shard. None if there is no such row.
            Raises PersistenceError on database failures.
    """

    def __init__(self, pool: ShardPool, router: ShardRouter):
        if len(pool) != router.shard_count:
            raise ValueError(f'Router expects {router.shard_count} shards but the pool holds {len(pool)}.')

        self.pool = pool
        self.router = router

    def shard_for(self, shortcode: str) -> tuple[int, Engine]:
        index = self.router.route(shortcode)
        return index, self.pool.get(index)

    @handle_sql_error
    @beartype
    def insert(self, short_url: ShortURLModel, **kwargs) -> ShortURLModel:
        """Insert a short URL mapping into the shard that owns its shortcode

        The row is committed before returning, so a following `get()` for the
        same shortcode reads it back.

        Args:
            short_url (ShortURLModel):
                Mapping to store.
            **kwargs:
                Optional keyword arguments (for future use).

        Returns:
            ShortURLModel: the row exactly as persisted (RETURNING).

        Raises:
            ShortURLAlreadyExistsError:
                If the shortcode already exists in its shard.
            PersistenceError:
                On any other database failure.
        """
        index, engine = self.shard_for(short_url.shortcode)
        # fmt: off
        statement = insert(urls) \
            .values(short_url=short_url.shortcode, long_url=short_url.target) \
            .returning(urls.c.short_url, urls.c.long_url, urls.c.created_at)
        # fmt: on

        try:
            with engine.begin() as conn:
                row = conn.execute(statement).one()
        except IntegrityError as e:
            raise ShortURLAlreadyExistsError(f"Short URL with code '{short_url.shortcode}' already exists in shard {index}.") from e

        logger.debug('Stored short URL.', extra={'shortcode': row.short_url, 'shard': index})
        return ShortURLModel(target=row.long_url, shortcode=row.short_url, created_at=row.created_at)

    @handle_sql_error
    @beartype
    def get(self, shortcode: str, **kwargs) -> ShortURLModel | None:
        """Retrieve a stored short URL mapping by shortcode

        Args:
            shortcode (str):
                The shortcode identifier for the shortened URL.
            **kwargs:
                Optional keyword arguments (for future use).

        Returns:
            ShortURLModel | None: the stored mapping, None if not found.

        Raises:
            PersistenceError:
                On database failures.
        """
        index, engine = self.shard_for(shortcode)
        statement = select(urls.c.short_url, urls.c.long_url, urls.c.created_at).where(urls.c.short_url == shortcode)

        with engine.connect() as conn:
            row = conn.execute(statement).one_or_none()

        if row is None:
            logger.debug('Short URL not found.', extra={'shortcode': shortcode, 'shard': index})
            return None
        return ShortURLModel(target=row.long_url, shortcode=row.short_url, created_at=row.created_at)
