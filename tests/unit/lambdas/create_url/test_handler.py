"""Unit tests for the create_url AWS Lambda handler.

Test coverage includes:

1. Successful URL shortening (201) with the record stored via the DAO
2. Invalid requests (400): bad JSON, missing/invalid originalUrl or expirationTime
3. Shortcode collisions: retried, then 409
4. Configuration and data store errors (500)
"""

import json
import base64
from typing import cast
from unittest.mock import MagicMock

import pytest
from pytest import MonkeyPatch
from freezegun import freeze_time

from urlshortener.types import LambdaEvent, LambdaContext, LambdaConfiguration, HttpHeaders
from urlshortener.constants import Shortcode
from urlshortener.lambdas.create_url import app
from urlshortener.models import UrlRecord
from urlshortener.dao.base import UrlRecordBaseDAO
from urlshortener.dao.exceptions import ShortURLAlreadyExistsError, DataStoreError
from urlshortener.exceptions import BadConfigurationError, MissingEnvironmentVariableError


# 2026-01-01T00:00:00Z
NEW_YEAR_2026 = 1767225600
ORIGINAL_URL = 'https://example.com/blog/chuck-norris-is-awesome'


def make_event(body: str | None, **overrides) -> LambdaEvent:
    event = {
        'body': body,
        'resource': '/create',
        'headers': {'User-Agent': 'pytest', 'Content-Type': 'application/json'},
        'httpMethod': 'POST',
        'path': '/create',
        'isBase64Encoded': False,
        'requestContext': {
            'resourcePath': '/create',
            'httpMethod': 'POST',
            'domainName': 'testhost:1000',
            'stage': 'test',
        },
    }
    event.update(overrides)
    return cast(LambdaEvent, event)


@pytest.fixture
def successful_event_201() -> LambdaEvent:
    return make_event(json.dumps({'originalUrl': ORIGINAL_URL, 'expirationTime': str(NEW_YEAR_2026)}))


class TestCreateUrlHandler:
    @pytest.fixture
    def context(self) -> LambdaContext:
        return cast(LambdaContext, {'function_name': 'create_url'})

    @pytest.fixture
    def config(self) -> LambdaConfiguration:
        return cast(LambdaConfiguration, {'redis': {'host': 'redis.test', 'port': 6379, 'db': 0}})

    @pytest.fixture
    def dao(self) -> UrlRecordBaseDAO:
        _dao = MagicMock(spec=UrlRecordBaseDAO)
        _dao.next_shortcode.side_effect = ['abc123', 'def456', 'ghi789', 'jkl012']
        return cast(UrlRecordBaseDAO, _dao)

    @pytest.fixture(autouse=True)
    def setup(self, monkeypatch: MonkeyPatch, context: LambdaContext, config: LambdaConfiguration, dao: UrlRecordBaseDAO):
        self.context = context
        self.config = config
        self.dao = dao
        self.url_record_dao = MagicMock(return_value=dao)

        monkeypatch.setattr(app, 'load_config', lambda *a, **kw: self.config)
        monkeypatch.setattr(app, 'url_record_dao', self.url_record_dao)

        with freeze_time('2025-10-15'):
            yield

    def assert_has_cors_headers(self, headers: HttpHeaders) -> None:
        assert headers['Access-Control-Allow-Origin'] == '*'
        assert headers['Access-Control-Allow-Headers'] == 'Content-Type'
        assert headers['Access-Control-Allow-Methods'] == 'OPTIONS,POST,GET'

    def assert_bad_request(self, event: LambdaEvent, message: str, error_code: str) -> None:
        response = app.lambda_handler(event, self.context)
        body = json.loads(response['body'])

        assert response['statusCode'] == 400
        assert body['message'] == f'Bad Request ({message})'
        assert body['errorCode'] == error_code
        self.assert_has_cors_headers(response['headers'])
        self.dao.insert.assert_not_called()

    # -------------------------------
    # 1. Successful URL shortening
    # -------------------------------

    def test_lambda_handler(self, successful_event_201: LambdaEvent) -> None:
        response = app.lambda_handler(successful_event_201, self.context)
        body = json.loads(response['body'])

        assert response['statusCode'] == 201
        assert body == {
            'message': f'Successfully shortened {ORIGINAL_URL} to https://testhost:1000/abc123',
            'code': 'abc123',
            'shortcode': 'abc123',
            'shortUrl': 'https://testhost:1000/abc123',
            'originalUrl': ORIGINAL_URL,
            'expirationTime': NEW_YEAR_2026,
        }
        self.assert_has_cors_headers(response['headers'])

        # Both fields reach the data store
        self.url_record_dao.assert_called_once_with(self.config)
        self.dao.insert.assert_called_once_with(
            shortcode='abc123',
            record=UrlRecord(original_url=ORIGINAL_URL, expiration_time=NEW_YEAR_2026),
        )

    def test_lambda_handler_with_snake_case_body(self) -> None:
        event = make_event(json.dumps({'original_url': f'  {ORIGINAL_URL} ', 'expiration_time': NEW_YEAR_2026}))

        response = app.lambda_handler(event, self.context)

        assert response['statusCode'] == 201
        self.dao.insert.assert_called_once_with(shortcode='abc123', record=UrlRecord(ORIGINAL_URL, NEW_YEAR_2026))

    def test_lambda_handler_with_base64_encoded_body(self) -> None:
        raw = json.dumps({'originalUrl': ORIGINAL_URL, 'expirationTime': NEW_YEAR_2026}).encode('utf-8')
        event = make_event(base64.b64encode(raw).decode('ascii'), isBase64Encoded=True)

        response = app.lambda_handler(event, self.context)

        assert response['statusCode'] == 201

    # -------------------------------
    # 2. Invalid requests
    # -------------------------------

    @pytest.mark.parametrize('body', ['{"invalid_json": true', '["not", "an", "object"]', '"string"'])
    def test_lambda_handler_with_invalid_json(self, body: str) -> None:
        self.assert_bad_request(make_event(body), 'invalid JSON body', 'INVALID_JSON')

    def test_lambda_handler_with_invalid_base64_body(self) -> None:
        event = make_event('###', isBase64Encoded=True)
        self.assert_bad_request(event, 'invalid JSON body', 'INVALID_JSON')

    @pytest.mark.parametrize(
        'body',
        [
            None,
            json.dumps({'expirationTime': NEW_YEAR_2026}),
            json.dumps({'originalUrl': '', 'expirationTime': NEW_YEAR_2026}),
            json.dumps({'originalUrl': '   ', 'expirationTime': NEW_YEAR_2026}),
            json.dumps({'originalUrl': None, 'expirationTime': NEW_YEAR_2026}),
        ],
    )
    def test_lambda_handler_with_missing_original_url(self, body: str | None) -> None:
        self.assert_bad_request(make_event(body), "missing 'originalUrl' in JSON body", 'MISSING_ORIGINAL_URL')

    @pytest.mark.parametrize('original_url', ['example.com', 'ftp://example.com', 42])
    def test_lambda_handler_with_invalid_original_url(self, original_url) -> None:
        event = make_event(json.dumps({'originalUrl': original_url, 'expirationTime': NEW_YEAR_2026}))

        response = app.lambda_handler(event, self.context)
        body = json.loads(response['body'])

        assert response['statusCode'] == 400
        assert body['errorCode'] == 'INVALID_ORIGINAL_URL'
        self.dao.insert.assert_not_called()

    def test_lambda_handler_with_missing_expiration_time(self) -> None:
        event = make_event(json.dumps({'originalUrl': ORIGINAL_URL}))
        self.assert_bad_request(event, "missing 'expirationTime' in JSON body", 'MISSING_EXPIRATION_TIME')

    @pytest.mark.parametrize('expiration_time', ['tomorrow', 1.5, True, 1700000000, str(1700000000), 10**12, '1_767_225_600'])
    def test_lambda_handler_with_invalid_expiration_time(self, expiration_time) -> None:
        """Non-integer, past and out-of-range expiration times are rejected."""
        event = make_event(json.dumps({'originalUrl': ORIGINAL_URL, 'expirationTime': expiration_time}))

        response = app.lambda_handler(event, self.context)
        body = json.loads(response['body'])

        assert response['statusCode'] == 400
        assert body['errorCode'] == 'INVALID_EXPIRATION_TIME'
        self.dao.insert.assert_not_called()

    # -------------------------------
    # 3. Shortcode collisions
    # -------------------------------

    def test_lambda_handler_retries_on_shortcode_collision(self, successful_event_201: LambdaEvent) -> None:
        self.dao.insert.side_effect = [ShortURLAlreadyExistsError(), None]

        response = app.lambda_handler(successful_event_201, self.context)
        body = json.loads(response['body'])

        assert response['statusCode'] == 201
        assert body['shortcode'] == 'def456'
        assert self.dao.insert.call_count == 2

    def test_lambda_handler_with_existing_short_url(self, successful_event_201: LambdaEvent) -> None:
        self.dao.insert.side_effect = ShortURLAlreadyExistsError()

        response = app.lambda_handler(successful_event_201, self.context)
        body = json.loads(response['body'])

        assert response['statusCode'] == 409
        assert body['message'] == 'Conflict (short URL already exists)'
        assert body['errorCode'] == 'SHORT_URL_ALREADY_EXISTS'
        assert self.dao.insert.call_count == Shortcode.MAX_ATTEMPTS
        self.assert_has_cors_headers(response['headers'])

    # -------------------------------
    # 4. Configuration and data store errors
    # -------------------------------

    @pytest.mark.parametrize(
        'error',
        [
            FileNotFoundError('Something goes wrong'),
            MissingEnvironmentVariableError('APPCONFIG_APP_ID'),
            BadConfigurationError('no section'),
        ],
    )
    def test_lambda_handler_with_invalid_configuration(self, monkeypatch: MonkeyPatch, successful_event_201: LambdaEvent, error) -> None:
        monkeypatch.setattr(app, 'load_config', MagicMock(side_effect=error))

        response = app.lambda_handler(successful_event_201, self.context)
        body = json.loads(response['body'])

        assert response['statusCode'] == 500
        assert body['message'] == 'Internal Server Error'
        self.assert_has_cors_headers(response['headers'])

    def test_lambda_handler_with_unsupported_backend(self, successful_event_201: LambdaEvent) -> None:
        self.url_record_dao.side_effect = BadConfigurationError("Unsupported backend 'dynamodb'")

        response = app.lambda_handler(successful_event_201, self.context)

        assert response['statusCode'] == 500

    @pytest.mark.parametrize('method', ['next_shortcode', 'insert'])
    def test_lambda_handler_with_data_store_error(self, successful_event_201: LambdaEvent, method: str) -> None:
        getattr(self.dao, method).side_effect = DataStoreError("Can't connect to Redis")

        response = app.lambda_handler(successful_event_201, self.context)
        body = json.loads(response['body'])

        assert response['statusCode'] == 500
        assert body['message'] == 'Internal Server Error'

    def test_lambda_handler_with_unexpected_error(self, successful_event_201: LambdaEvent) -> None:
        self.dao.insert.side_effect = RuntimeError('boom')

        response = app.lambda_handler(successful_event_201, self.context)
        body = json.loads(response['body'])

        assert response['statusCode'] == 500
        assert body['errorCode'] == 'UNKNOWN_INTERNAL_SERVER_ERROR'
