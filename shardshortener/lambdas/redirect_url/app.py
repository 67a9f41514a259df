import logging
from typing import Any

from shardshortener.service import get_service
from shardshortener.dao.exceptions import DataStoreError, ShardInitError
from shardshortener.utils import get_short_url, guarantee_500_response
from shardshortener.lambdas.responses import response_302, response_400, response_404, response_500
from shardshortener.lambdas.redirect_url.constants import (
    MISSING_SHORTCODE,
    SHORT_URL_NOT_FOUND,
    REDIRECT_SUCCESS,
    STORE_UNAVAILABLE,
)


logger = logging.getLogger(__name__)


@guarantee_500_response
def lambda_handler(event: dict, context: Any) -> dict:
    """Handle incoming API Gateway requests to redirect URLs

    This handler follows this procedure to redirect URLs:
    - Step 1: Extract shortcode from request path
    - Step 2: Look up the long URL in the shortcode's shard
    - Step 3: Redirect client to the long URL

    HTTP responses:
        302: Successful redirect
            headers:
                Location: long URL destination
        400: Bad client request
            message: missing shortcode in path parameters
        404: Not found
            message: no mapping exists for the shortcode
        500: Internal server error
            message: shard unavailable

    Args:
        event (dict):
            API Gateway event payload containing the shortUrl path parameter.
        context (LambdaContext):
            AWS Lambda runtime context object (not used directly).

    Returns:
        dict:
            API Gateway-compatible response including statusCode, headers, and body.

    Example:
        >>> event = {'pathParameters': {'shortUrl': '1'}}
        >>> response = lambda_handler(event, None)
        >>> response['statusCode']
        302
        >>> response['headers']['Location']
        'https://example.com'
    """
    # 1- Extract shortcode from request's path
    shortcode = (event.get('pathParameters') or {}).get('shortUrl')
    if not shortcode:
        logger.info('Missing "shortUrl" in path. Responding with 400.', extra={'event': MISSING_SHORTCODE})
        return response_400(message="missing 'shortUrl' in path", error_code=MISSING_SHORTCODE)
    logger.debug('Client requested short URL %s.', get_short_url(shortcode, event))

    # 2- Look up the long URL
    try:
        long_url = get_service().resolve(shortcode)
    except ShardInitError:
        # Startup failure is fatal, never answered with a response
        raise
    except DataStoreError as e:
        logger.exception(
            'Failed to resolve short URL. Responding with 500.',
            extra={'shortcode': shortcode, 'event': STORE_UNAVAILABLE, 'errorCode': e.error_code},
        )
        return response_500(error_code=STORE_UNAVAILABLE)

    if long_url is None:
        logger.info(
            'Short URL record not found in database. Responding with 404.',
            extra={'shortcode': shortcode, 'event': SHORT_URL_NOT_FOUND},
        )
        return response_404(message=f"short url {get_short_url(shortcode, event)} doesn't exist", error_code=SHORT_URL_NOT_FOUND)

    # 3- Redirect client to long URL
    logger.info('Redirecting client to long URL. Responding with 302.', extra={'shortcode': shortcode, 'event': REDIRECT_SUCCESS})
    return response_302(location=long_url)
