"""Abstract base class for ShortURL data access objects (DAOs).

This class establishes a consistent contract for all ShortURL DAO implementations,
regardless of the underlying storage mechanism (e.g., sharded PostgreSQL, SQLite).

Responsibilities:
    - Provide an interface for inserting and retrieving ShortURLModel objects.
    - Standardize error handling across multiple data store implementations.

Example:
    Typical usage with a datastore-specific implementation:

        >>> from shardshortener.models import ShortURLModel
        >>> from shardshortener.dao.sql import ShortURLSQLDAO

        >>> dao = ShortURLSQLDAO(pool=pool, router=router)

        >>> short_url = ShortURLModel(target="https://example.com/blog/article-123", shortcode="1C")
        >>> dao.insert(short_url)
        ShortURLModel(target='https://example.com/blog/article-123', shortcode='1C', created_at=datetime(...))

        >>> dao.get("1C").target
        'https://example.com/blog/article-123'

        >>> print(dao.get("doesNotExist"))
        None
"""

from abc import ABC, abstractmethod

from shardshortener.models import ShortURLModel


class ShortURLBaseDAO(ABC):
    """Interface for ShortURL data access objects (DAOs).

    Methods:
        insert(short_url: ShortURLModel, **kwargs) -> ShortURLModel:
            Insert a new ShortURLModel into the data store.
            Returns the record exactly as it was persisted.
            Raises ShortURLAlreadyExistsError if the short code already exists.
            Raises PersistenceError on write failure.

        get(shortcode: str, **kwargs) -> ShortURLModel | None:
            Retrieve a ShortURLModel from the data store by short code.
            Returns None if not found.
            Raises PersistenceError on read failure.

    NOTE:
        - Mappings are never deleted or updated by the DAO.
    """

    @abstractmethod
    def insert(self, short_url: ShortURLModel, **kwargs) -> ShortURLModel:
        """Insert a new ShortURLModel into the data store.

        Args:
            short_url (ShortURLModel):
                The ShortURLModel instance to be inserted.

            **kwargs:
                Additional keyword arguments, used by data store.

        Returns:
            ShortURLModel: The record as stored by the data store.

        Raises:
            ShortURLAlreadyExistsError:
                If a ShortURLModel with the same short code already exists

            PersistenceError:
                If there is an error in the data store.
        """
        pass

    @abstractmethod
    def get(self, shortcode: str, **kwargs) -> ShortURLModel | None:
        """Retrieve a ShortURLModel from the data store by its short code.

        Args:
            shortcode (str):
                The short code of the ShortURLModel to be retrieved.

            **kwargs:
                Additional keyword arguments, used by data store.

        Returns:
            ShortURLModel | None: The ShortURLModel instance if found, otherwise None.

        Raises:
            PersistenceError:
                If there is an error in the data store.
        """
        pass
