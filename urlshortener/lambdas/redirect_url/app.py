import logging

from botocore.exceptions import BotoCoreError, ClientError

from urlshortener.types import LambdaEvent, LambdaContext, LambdaResponse
from urlshortener.exceptions import ExpiredRecordError, ConfigurationError
from urlshortener.dao.factory import url_record_dao
from urlshortener.dao.exceptions import ShortURLNotFoundError, DataStoreError
from urlshortener.utils import load_config, get_short_url
from urlshortener.utils.helpers import guarantee_500_response
from urlshortener.utils.responses import response_302, response_400, response_404, response_410, response_500
from urlshortener.lambdas.redirect_url.constants import (
    MISSING_SHORTCODE,
    SHORT_URL_NOT_FOUND,
    SHORT_URL_EXPIRED,
    CONFIGURATION_ERROR,
    DATA_STORE_ERROR,
    REDIRECT_SUCCESS,
)


logger = logging.getLogger(__name__)


def extract_shortcode(event: LambdaEvent) -> str | None:
    """Return the requested shortcode, or None if the request carries none

    Prefers the `shortcode` path parameter of REST API routes and falls back
    to the last segment of the raw request path (HTTP API / function URLs).
    """
    shortcode = (event.get('pathParameters') or {}).get('shortcode')
    if shortcode:
        return shortcode

    path = event.get('rawPath') or event.get('path') or ''
    segment = path.strip('/').rsplit('/', 1)[-1]
    return segment or None


@guarantee_500_response
def lambda_handler(event: LambdaEvent, context: LambdaContext) -> LambdaResponse:
    """Handle incoming API Gateway requests to redirect URLs

    This Lambda handler follows this procedure to redirect URLs:
    - Step 1: Extract shortcode from request path
    - Step 2: Get URL record from database
    - Step 3: Check the record hasn't expired
    - Step 4: Redirect client to original URL

    HTTP responses:
        302: Successful redirect
            headers:
                Location: original URL destination
        400: Bad client request
            message: missing shortcode in path
        404: Not found
            message: no URL record exists for the shortcode
        410: Gone
            message: the URL record has expired
        500: Internal server error
            message: server experienced an internal error

    Args:
        event (LambdaEvent):
            API Gateway event payload containing the shortcode path parameter.
        context (LambdaContext):
            AWS Lambda runtime context object (not used directly).

    Returns:
        LambdaResponse:
            API Gateway-compatible response including statusCode, headers, and body.

    Example:
        >>> event = {'pathParameters': {'shortcode': 'Gh71WPT'}}
        >>> response = lambda_handler(event, None)
        >>> response['statusCode']
        302
        >>> response['headers']['Location']
        'https://example.com/my-page'
    """
    # 0- Get application's config
    try:
        app_config = load_config('redirect_url')
    except (FileNotFoundError, ConfigurationError, BotoCoreError, ClientError):
        logger.exception(
            'Failed to load AppConfig for redirect URL function. Responding with 500.',
            extra={'event': CONFIGURATION_ERROR},
        )
        return response_500()

    # 1- Extract shortcode from request's path
    shortcode = extract_shortcode(event)
    if shortcode is None:
        logger.info('Missing "shortcode" in path. Responding with 400.', extra={'event': MISSING_SHORTCODE})
        return response_400(message="missing 'shortcode' in path", error_code=MISSING_SHORTCODE)
    logger.debug('Client requested short URL %s.', get_short_url(shortcode, event))

    # 2- Get URL record from database
    try:
        dao = url_record_dao(app_config)
        record = dao.get(shortcode=shortcode)
    except ShortURLNotFoundError:
        logger.info(
            'URL record not found in database. Responding with 404.',
            extra={'shortcode': shortcode, 'event': SHORT_URL_NOT_FOUND},
        )
        return response_404(message=f"short url {get_short_url(shortcode, event)} doesn't exist", error_code=SHORT_URL_NOT_FOUND)
    except ConfigurationError:
        logger.exception('Bad storage backend configuration. Responding with 500.', extra={'event': CONFIGURATION_ERROR})
        return response_500()
    except DataStoreError:
        logger.exception(
            'Data store failure while reading URL record. Responding with 500.',
            extra={'shortcode': shortcode, 'event': DATA_STORE_ERROR},
        )
        return response_500()

    # 3- Check the record hasn't expired
    try:
        record.ensure_active()
    except ExpiredRecordError:
        logger.info(
            'URL record has expired. Responding with 410.',
            extra={'shortcode': shortcode, 'expirationTime': record.expiration_time, 'event': SHORT_URL_EXPIRED},
        )
        return response_410(message='This URL has expired', error_code=SHORT_URL_EXPIRED)

    # 4- Redirect client to original URL
    logger.info(
        'Redirecting client to original URL. Responding with 302.',
        extra={'shortcode': shortcode, 'event': REDIRECT_SUCCESS},
    )
    return response_302(location=record.original_url)
