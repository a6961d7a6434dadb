"""Build the URL record DAO of the active storage backend.

Functions:
    url_record_dao(app_config: LambdaConfiguration) -> UrlRecordBaseDAO
        Construct the DAO described by a Lambda's configuration section.

Example:
    >>> app_config = load_config('redirect_url')
    >>> app_config
    {'redis': {'host': 'redis.internal', 'port': 6379, 'db': 0}}
    >>> url_record_dao(app_config)
    <UrlRecordRedisDAO>
"""

import logging

from urlshortener.types import LambdaConfiguration
from urlshortener.constants import Shortcode
from urlshortener.exceptions import BadConfigurationError
from urlshortener.dao.base import UrlRecordBaseDAO
from urlshortener.dao.redis import UrlRecordRedisDAO
from urlshortener.dao.s3 import UrlRecordS3DAO
from urlshortener.utils.config import app_prefix


logger = logging.getLogger(__name__)

SUPPORTED_BACKENDS = ('redis', 's3')


def url_record_dao(app_config: LambdaConfiguration) -> UrlRecordBaseDAO:
    """Construct the URL record DAO for the configured backend

    Args:
        app_config (LambdaConfiguration):
            {<backend>: <backend settings>} as returned by `load_config()`.

    Returns:
        UrlRecordBaseDAO: a Redis or S3 backed DAO namespaced with `app_prefix()`.

    Raises:
        BadConfigurationError:
            If the configuration names no backend, several backends or an unsupported one.
        DataStoreError:
            If the backend is unreachable at construction time (Redis healthcheck).
    """
    if not isinstance(app_config, dict) or len(app_config) != 1:
        raise BadConfigurationError(f'Expected exactly one active backend (given: {app_config!r}).')

    (backend, settings), = app_config.items()
    settings = dict(settings or {})

    if backend == 'redis':
        logger.debug('Using Redis as the backend database for URL records.')
        salt = settings.pop('shortcode_salt', Shortcode.DEFAULT_SALT)
        redis_config = {f'redis_{k}': v for k, v in settings.items()}
        return UrlRecordRedisDAO(**redis_config, prefix=app_prefix(), shortcode_salt=salt)

    if backend == 's3':
        logger.debug('Using S3 as the backend database for URL records.')
        try:
            bucket = settings['bucket']
        except KeyError as e:
            raise BadConfigurationError("S3 backend configuration is missing 'bucket'.") from e
        return UrlRecordS3DAO(bucket=bucket, prefix=app_prefix(), region=settings.get('region'))

    supported = ', '.join(f"'{name}'" for name in SUPPORTED_BACKENDS)
    raise BadConfigurationError(f"Unsupported backend '{backend}' (supported: {supported}).")
