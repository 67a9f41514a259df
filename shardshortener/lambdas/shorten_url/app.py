import json
import logging
from typing import Any

from shardshortener.service import get_service
from shardshortener.exceptions import InvalidInputError
from shardshortener.dao.exceptions import DataStoreError, ShardInitError
from shardshortener.utils import get_short_url, guarantee_500_response
from shardshortener.lambdas.responses import response_200, response_400, response_500
from shardshortener.lambdas.shorten_url.constants import (
    INVALID_JSON_BODY,
    MISSING_LONG_URL,
    SHORTEN_SUCCESS,
    STORE_UNAVAILABLE,
)


logger = logging.getLogger(__name__)


@guarantee_500_response
def lambda_handler(event: dict[str, Any], context: Any) -> dict[str, Any]:
    """Handle incoming API Gateway requests to shorten URLs

    This handler follows this procedure to shorten URLs:
    - Step 1: Extract long URL from request body
    - Step 2: Issue a shortcode and store the mapping in its shard
    - Step 3: Respond to user with 200 success

    HTTP responses:
        200: Successful URL shortening
            shortUrl: newly issued shortcode
            longUrl: original url, as stored
            link: full short link
        400: Bad client request
            message: indicate cause of bad request (invalid JSON or missing longUrl)
        500: Internal server error
            message: counter store or shard unavailable

    Args:
        event (Dict[str, Any]):
            API Gateway event payload in Lambda Proxy format.
        context (Any):
            AWS Lambda context object containing runtime information.

    Returns:
        Dict[str, Any]:
            JSON-serializable response following API Gateway Lambda Proxy
            output format. Includes status code, headers, and response body.

    Example:
        >>> event = {'body': '{"longUrl": "https://example.com"}'}
        >>> response = lambda_handler(event, None)
        >>> response['statusCode']
        200
        >>> json.loads(response['body'])['shortUrl']
        '1'
    """
    # 1- Extract long URL from request body
    try:
        request_body = json.loads(event.get('body') or '{}')
    except json.JSONDecodeError:
        logger.info('Invalid JSON body. Responding with 400.', extra={'event': INVALID_JSON_BODY})
        return response_400(message='invalid JSON body', error_code=INVALID_JSON_BODY)

    long_url = request_body.get('longUrl') if isinstance(request_body, dict) else None

    # 2- Issue shortcode and store mapping
    try:
        short_url = get_service().create(long_url)
    except InvalidInputError:
        logger.info('Missing "longUrl" in body. Responding with 400.', extra={'event': MISSING_LONG_URL})
        return response_400(message="missing 'longUrl' in JSON body", error_code=MISSING_LONG_URL)
    except ShardInitError:
        # Startup failure is fatal, never answered with a response
        raise
    except DataStoreError as e:
        logger.exception('Failed to shorten URL. Responding with 500.', extra={'event': STORE_UNAVAILABLE, 'errorCode': e.error_code})
        return response_500(error_code=STORE_UNAVAILABLE)

    # 3- Return successful response to user
    logger.info('Shortened URL. Responding with 200.', extra={'shortcode': short_url.shortcode, 'event': SHORTEN_SUCCESS})
    return response_200(
        {
            'shortUrl': short_url.shortcode,
            'longUrl': short_url.target,
            'link': get_short_url(short_url.shortcode, event),
        }
    )
