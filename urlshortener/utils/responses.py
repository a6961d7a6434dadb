"""API Gateway (Lambda proxy) response builders shared by the Lambda handlers.

Every response carries JSON content type and CORS headers. Error bodies
follow the same shape:

    {
        "message": "Bad Request (missing 'originalUrl' in JSON body)",
        "errorCode": "MISSING_ORIGINAL_URL"
    }
"""

import json
from typing import Any

from urlshortener.types import LambdaResponse, HttpHeaders


# TODO: restrict Access-Control-Allow-Origin to the frontend domain once it is deployed
CORS_HEADERS: HttpHeaders = {
    'Access-Control-Allow-Origin': '*',
    'Access-Control-Allow-Headers': 'Content-Type',
    'Access-Control-Allow-Methods': 'OPTIONS,POST,GET',
}


def _response(status_code: int, body: dict[str, Any], headers: HttpHeaders | None = None) -> LambdaResponse:
    return {
        'statusCode': status_code,
        'headers': {
            'Content-Type': 'application/json',
            **CORS_HEADERS,
            **(headers or {}),
        },
        'body': json.dumps(body),
    }


def _error(status_code: int, base: str, message: str | None, error_code: str | None) -> LambdaResponse:
    body = {'message': base if not message else f'{base} ({message})'}
    if error_code:
        body['errorCode'] = error_code
    return _response(status_code, body)


def response_201(body: dict[str, Any]) -> LambdaResponse:
    return _response(201, body)


def response_302(*, location: str) -> LambdaResponse:
    # No body needed for redirects
    return _response(302, {}, headers={'Location': location})


def response_400(message: str | None = None, error_code: str | None = None) -> LambdaResponse:
    return _error(400, 'Bad Request', message, error_code)


def response_404(message: str | None = None, error_code: str | None = None) -> LambdaResponse:
    return _error(404, 'Not Found', message, error_code)


def response_409(message: str | None = None, error_code: str | None = None) -> LambdaResponse:
    return _error(409, 'Conflict', message, error_code)


def response_410(message: str | None = None, error_code: str | None = None) -> LambdaResponse:
    return _error(410, 'Gone', message, error_code)


def response_500(message: str | None = None, error_code: str | None = None) -> LambdaResponse:
    return _error(500, 'Internal Server Error', message, error_code)
