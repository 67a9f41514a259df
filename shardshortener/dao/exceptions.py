"""Exceptions related to Data Access Objects (DAO) operations.

Classes:
    DAOError:
        Generic base class for DAO-related exceptions.

    DataStoreError:
        Raised when there is an error in a data store (e.g., connection issues, timeouts, etc.).

    CounterUnavailableError:
        Raised when the global counter store (Redis) can't be reached.

    ShardInitError:
        Raised when a shard can't be reached after the bounded startup retries.

    PersistenceError:
        Raised when an insert or lookup fails against an established shard.

    ShortURLAlreadyExistsError:
        Raised when inserting a short URL whose key already exists in its shard.

Example:
    >>> from shardshortener.dao.exceptions import CounterUnavailableError
    >>> raise CounterUnavailableError("Can't connect to Redis at localhost:6379/0.")
    Traceback (most recent call last):
        ...
    shardshortener.dao.exceptions.CounterUnavailableError: Can't connect to Redis at localhost:6379/0.
"""


class DAOError(Exception):
    """Generic base class for DAO-related exceptions."""

    error_code = 'dao:dao_error'


class DataStoreError(DAOError):
    """Exception raised when there is an error in the data store.

    e.g. connection issues, timeouts, OOM, etc.
    """

    error_code = 'dao:data_store_error'


class CounterUnavailableError(DataStoreError):
    """Exception raised when the counter store is unreachable. No identifier was issued."""

    error_code = 'dao:counter_unavailable_error'


class ShardInitError(DataStoreError):
    """Exception raised when a shard stays unreachable after all connection attempts."""

    error_code = 'dao:shard_init_error'


class PersistenceError(DataStoreError):
    """Exception raised when an insert or lookup fails on an established shard."""

    error_code = 'dao:persistence_error'


class ShortURLAlreadyExistsError(PersistenceError):
    """Exception raised when attempting to insert a short URL that already exists in its shard."""

    error_code = 'dao:short_url_already_exists_error'
