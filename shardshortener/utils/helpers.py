"""Helper utilities for the HTTP adapters and configuration loading.

Functions:
    base_url() -> str
        Extract correct public base URL from API Gateway event
    get_short_url() -> str
        Get string representation of short URL for a given shortcode
    require_environment(*names: str) -> Callable
        Decorator: Ensure required environment variables are present
    guarantee_500_response(func) -> Callable
        Decorator: Turn any uncaught handler exception into a 500 response

Example:
    Typical usage inside a handler:

        >>> from shardshortener.utils.helpers import base_url
        >>> event = {
        ...     "requestContext": {
        ...         "domainName": "abc123.execute-api.us-east-1.amazonaws.com",
        ...         "stage": "Prod"
        ...     }
        ... }
        >>> base_url(event)
        'https://abc123.execute-api.us-east-1.amazonaws.com/Prod'

        >>> base_url({})
        'http://localhost:5000'
"""

import os
import json
import logging
import functools
from typing import Any
from collections.abc import Callable

from shardshortener.constants import UNKNOWN_INTERNAL_SERVER_ERROR
from shardshortener.exceptions import MissingEnvironmentVariableError
from shardshortener.dao.exceptions import ShardInitError


logger = logging.getLogger(__name__)


def base_url(event: dict[str, Any]) -> str:
    """Extract public base URL from API Gateway event

    If a custom domain is configured, the stage name is omitted.
    If using the default AWS execute-api domain, the stage name is included.

    Args:
        event (dict): API Gateway event object passed to the handler

    Returns:
        str: Base URL, e.g.:
             - "https://sho.rt"
             - "https://abc123.execute-api.us-east-1.amazonaws.com/Prod"
    """
    request_context = event.get('requestContext', {})
    domain = request_context.get('domainName', '')
    stage = request_context.get('stage', '')

    if domain and 'execute-api' not in domain:
        return f'https://{domain}'
    elif domain:
        return f'https://{domain}/{stage}'
    else:
        # Local invocation (tests, dev server)
        return 'http://localhost:5000'


def get_short_url(shortcode: str, event: dict[str, Any]) -> str:
    """Get string representation of shortened URL"""
    return f'{base_url(event).rstrip("/")}/{shortcode}'


def require_environment(*names: str) -> Callable:
    """Decorator ensuring required environment variables are present.

    Args:
        *names (str):
            Names of required environment variables.

    Raises:
        MissingEnvironmentVariableError:
            If any required environment variable is missing or empty.

    Example:
        >>> @require_environment('REDIS_URL')
        ... def my_function():
        ...     pass
        >>> my_function()
        MissingEnvironmentVariableError: Missing required environment variables: 'REDIS_URL'
    """

    def decorator(func: Callable) -> Callable:
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            missing = [name for name in names if not os.environ.get(name)]
            if missing:
                missing_list = ', '.join(f"'{name}'" for name in missing)
                raise MissingEnvironmentVariableError(f'Missing required environment variables: {missing_list}')
            return func(*args, **kwargs)

        return wrapper

    return decorator


def guarantee_500_response(func: Callable[..., dict]) -> Callable[..., dict]:
    """Decorator: respond with HTTP 500 when a handler raises

    The exception is logged with its traceback and never reaches the caller.
    ShardInitError is the exception: it propagates so the runtime fails the
    invocation instead of serving with a shard missing.
    """

    @functools.wraps(func)
    def wrapper(*args, **kwargs) -> dict:
        try:
            return func(*args, **kwargs)
        except ShardInitError:
            raise
        except Exception:
            logger.exception(
                'Unhandled exception in handler. Responding with 500.',
                extra={'event': UNKNOWN_INTERNAL_SERVER_ERROR},
            )
            return {
                'statusCode': 500,
                'body': json.dumps(
                    {
                        'message': 'Internal Server Error',
                        'errorCode': UNKNOWN_INTERNAL_SERVER_ERROR,
                    }
                ),
            }

    return wrapper
