import json
import base64
import binascii
import logging
from typing import Any

from botocore.exceptions import BotoCoreError, ClientError

from urlshortener.types import LambdaEvent, LambdaContext, LambdaResponse
from urlshortener.models import UrlRecord
from urlshortener.constants import Shortcode
from urlshortener.exceptions import ValidationError, ConfigurationError
from urlshortener.dao.factory import url_record_dao
from urlshortener.dao.exceptions import ShortURLAlreadyExistsError, DataStoreError
from urlshortener.utils import load_config, get_short_url, validate_original_url, validate_expiration_time
from urlshortener.utils.helpers import guarantee_500_response
from urlshortener.utils.responses import response_201, response_400, response_409, response_500
from urlshortener.lambdas.create_url.constants import (
    INVALID_JSON,
    MISSING_ORIGINAL_URL,
    INVALID_ORIGINAL_URL,
    MISSING_EXPIRATION_TIME,
    INVALID_EXPIRATION_TIME,
    SHORT_URL_ALREADY_EXISTS,
    CONFIGURATION_ERROR,
    DATA_STORE_ERROR,
    CREATE_SUCCESS,
)


logger = logging.getLogger(__name__)


def parse_body(event: LambdaEvent) -> dict[str, Any]:
    """Decode the JSON object in an API Gateway request body

    Raises:
        ValueError: If the body isn't a (possibly base64-encoded) JSON object.
    """
    raw = event.get('body') or '{}'
    if event.get('isBase64Encoded'):
        try:
            raw = base64.b64decode(raw, validate=True).decode('utf-8')
        except (binascii.Error, UnicodeDecodeError) as e:
            raise ValueError('Request body is not valid base64-encoded UTF-8.') from e

    body = json.loads(raw)
    if not isinstance(body, dict):
        raise ValueError('Request body must be a JSON object.')
    return body


def first_present(body: dict[str, Any], *keys: str) -> Any:
    """Return the value of the first key present (and not null) in the request body"""
    for key in keys:
        if body.get(key) is not None:
            return body[key]
    return None


@guarantee_500_response
def lambda_handler(event: LambdaEvent, context: LambdaContext) -> LambdaResponse:
    """Handle incoming API Gateway requests to shorten URLs

    This Lambda handler follows this procedure to shorten URLs:
    - Step 1: Extract original URL and expiration time from request body
    - Step 2: Validate both and build the URL record
    - Step 3: Generate a shortcode and store the record under it (via DAO)
    - Step 4: Respond to user with 201 created

    HTTP responses:
        201: Successful URL shortening
            message: success message
            code: newly generated shortcode
            shortcode: newly generated shortcode
            shortUrl: newly generated short url
            originalUrl: original url (provided in request)
            expirationTime: expiration Unix timestamp (provided in request)
        400: Bad client request
            message: cause of bad request (invalid JSON, missing/invalid originalUrl or expirationTime)
            errorCode: machine-readable cause
        409: Conflict
            message: no free shortcode found after several attempts
        500: Internal server error
            message: indicate the server experienced an internal error

    Args:
        event (LambdaEvent):
            API Gateway event payload in Lambda Proxy format.
        context (LambdaContext):
            AWS Lambda context object containing runtime information.

    Returns:
        LambdaResponse:
            JSON-serializable response following API Gateway Lambda Proxy output format.

    Example:
        >>> event = {'body': '{"originalUrl": "https://example.com", "expirationTime": "1767225600"}'}
        >>> response = lambda_handler(event, None)
        >>> response['statusCode']
        201
        >>> json.loads(response['body'])['shortUrl']
        'http://localhost:3000/Gh71WPT'
    """
    # 0- Get application's config
    try:
        app_config = load_config('create_url')
    except (FileNotFoundError, ConfigurationError, BotoCoreError, ClientError):
        logger.exception(
            'Failed to load AppConfig for create URL function. Responding with 500.',
            extra={'event': CONFIGURATION_ERROR},
        )
        return response_500()

    # 1- Extract original URL and expiration time from request body
    try:
        body = parse_body(event)
    except ValueError:  # json.JSONDecodeError included
        logger.info('Invalid JSON body. Responding with 400.', extra={'event': INVALID_JSON})
        return response_400(message='invalid JSON body', error_code=INVALID_JSON)

    original_url = first_present(body, 'originalUrl', 'original_url')
    if original_url is None or (isinstance(original_url, str) and not original_url.strip()):
        logger.info('Missing "originalUrl" in body. Responding with 400.', extra={'event': MISSING_ORIGINAL_URL})
        return response_400(message="missing 'originalUrl' in JSON body", error_code=MISSING_ORIGINAL_URL)

    expiration_time = first_present(body, 'expirationTime', 'expiration_time')
    if expiration_time is None:
        logger.info('Missing "expirationTime" in body. Responding with 400.', extra={'event': MISSING_EXPIRATION_TIME})
        return response_400(message="missing 'expirationTime' in JSON body", error_code=MISSING_EXPIRATION_TIME)

    # 2- Validate request data and build the URL record
    try:
        original_url = validate_original_url(original_url)
    except ValidationError as e:
        logger.info('Invalid "originalUrl". Responding with 400.', extra={'event': INVALID_ORIGINAL_URL, 'reason': str(e)})
        return response_400(message=str(e), error_code=INVALID_ORIGINAL_URL)

    try:
        expiration_time = validate_expiration_time(expiration_time)
    except ValidationError as e:
        logger.info('Invalid "expirationTime". Responding with 400.', extra={'event': INVALID_EXPIRATION_TIME, 'reason': str(e)})
        return response_400(message=str(e), error_code=INVALID_EXPIRATION_TIME)

    record = UrlRecord(original_url=original_url, expiration_time=expiration_time)

    # 3- Generate shortcode and store the record (via DAO)
    try:
        dao = url_record_dao(app_config)
        for attempt in range(1, Shortcode.MAX_ATTEMPTS + 1):
            shortcode = dao.next_shortcode()
            try:
                dao.insert(shortcode=shortcode, record=record)
            except ShortURLAlreadyExistsError:
                logger.warning(
                    'Shortcode collision. Retrying with a new shortcode.',
                    extra={'shortcode': shortcode, 'attempt': attempt, 'event': SHORT_URL_ALREADY_EXISTS},
                )
            else:
                break
        else:
            logger.error(
                'No free shortcode found. Responding with 409.',
                extra={'attempts': Shortcode.MAX_ATTEMPTS, 'event': SHORT_URL_ALREADY_EXISTS},
            )
            return response_409(message='short URL already exists', error_code=SHORT_URL_ALREADY_EXISTS)
    except ConfigurationError:
        logger.exception('Bad storage backend configuration. Responding with 500.', extra={'event': CONFIGURATION_ERROR})
        return response_500()
    except DataStoreError:
        logger.exception('Data store failure while storing URL record. Responding with 500.', extra={'event': DATA_STORE_ERROR})
        return response_500()

    # 4- Return successful response to user
    short_url = get_short_url(shortcode, event)
    logger.info(
        'Shortened URL. Responding with 201.',
        extra={'shortcode': shortcode, 'expirationTime': record.expiration_time, 'event': CREATE_SUCCESS},
    )
    return response_201(
        {
            'message': f'Successfully shortened {record.original_url} to {short_url}',
            'code': shortcode,
            'shortcode': shortcode,
            'shortUrl': short_url,
            **record.to_dict(),
        }
    )
