import functools
from typing import Any
from collections.abc import Callable

from botocore.exceptions import BotoCoreError, ClientError

from urlshortener.dao.exceptions import DataStoreError


__all__ = ['handle_s3_errors', 'error_code']


def error_code(error: ClientError) -> str:
    """Return the AWS error code of a botocore ClientError ('' if absent)"""
    return error.response.get('Error', {}).get('Code', '')


def handle_s3_errors[F: Callable[..., Any]](method: F) -> F:
    """Wrap S3-interacting DAO methods to translate botocore errors

    DAO exceptions raised by the wrapped method pass through untouched; any
    remaining ClientError or BotoCoreError becomes a DataStoreError.

    Example:
        >>> @handle_s3_errors
        ... def get(self, shortcode):
        ...     return self.s3.get_object(Bucket=self.bucket, Key=self.object_key(shortcode))
    """

    @functools.wraps(method)
    def wrapper(self, *args, **kwargs):
        try:
            return method(self, *args, **kwargs)
        except ClientError as e:
            raise DataStoreError(f"S3 request to bucket '{self.bucket}' failed ({error_code(e) or 'unknown error'}).") from e
        except BotoCoreError as e:
            raise DataStoreError(f"Can't reach S3 bucket '{self.bucket}'.") from e

    return wrapper
