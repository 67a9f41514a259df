import functools
from typing import TypeVar, Any
from collections.abc import Callable

from sqlalchemy.engine import make_url
from sqlalchemy.exc import ArgumentError, SQLAlchemyError

from shardshortener.dao.exceptions import PersistenceError


__all__ = []

F = TypeVar('F', bound=Callable[..., Any])


def masked_url(url: str) -> str:
    """Render a database URL for logs, with the password hidden"""
    try:
        return make_url(url).render_as_string(hide_password=True)
    except ArgumentError:
        return '<unparseable url>'


def handle_sql_error(method: F) -> F:
    """Wrap shard-interacting DAO methods to handle database errors

    Any SQLAlchemy error raised while talking to an already established shard
    (lost connection, failed statement, ...) surfaces as PersistenceError.
    Errors the method raises itself pass through untouched.

    Args:
        method (Callable[..., Any]):
            DAO method executing statements against a shard engine.

    Returns:
        Callable[..., Any]:
            Wrapped method which raises PersistenceError on database failures.
    """

    @functools.wraps(method)
    def wrapper(self, *args, **kwargs):
        try:
            return method(self, *args, **kwargs)
        except SQLAlchemyError as e:
            raise PersistenceError(f'Shard operation {method.__name__}() failed: {e}') from e

    return wrapper
