"""Request validation for the create path.

Functions:
    validate_original_url(url) -> str
        Ensure a submitted URL is an absolute http(s) URL.
    coerce_expiration_time(expiration_time) -> int
        Convert an integer or plain decimal string to epoch seconds.
    validate_expiration_time(expiration_time, now=None) -> int
        Ensure a submitted expiration time is a future Unix timestamp.

Example:
    >>> validate_original_url('  https://example.com/page ')
    'https://example.com/page'
    >>> validate_original_url('ftp://example.com')
    ValidationError: Original URL must use http or https (given value: 'ftp://example.com').
"""

from datetime import datetime, UTC
from typing import Any
from urllib.parse import urlparse

from urlshortener.exceptions import ValidationError
from urlshortener.constants import MAX_URL_LENGTH, MAX_EXPIRATION_TIME


ALLOWED_SCHEMES = frozenset({'http', 'https'})


def validate_original_url(url: Any) -> str:
    if not isinstance(url, str) or not url.strip():
        raise ValidationError('Original URL must be a non-empty string.')

    url = url.strip()
    if len(url) > MAX_URL_LENGTH:
        raise ValidationError(f'Original URL must be at most {MAX_URL_LENGTH} characters long (given length: {len(url)}).')

    components = urlparse(url)
    if components.scheme.lower() not in ALLOWED_SCHEMES:
        raise ValidationError(f'Original URL must use http or https (given value: {url!r}).')
    if not components.netloc or not components.hostname:
        raise ValidationError(f'Original URL must include a host (given value: {url!r}).')
    return url


def coerce_expiration_time(expiration_time: Any) -> int:
    """Convert an expiration time sent as an integer or a plain decimal string to an int.

    Raises:
        ValidationError:
            If the value is a bool, a float, a non-decimal string (underscores and
            non-ASCII digits included) or any other type.
    """
    if isinstance(expiration_time, bool):
        raise ValidationError(f'Expiration time must be an integer (given type: {type(expiration_time)}).')
    if isinstance(expiration_time, int):
        return expiration_time
    if isinstance(expiration_time, str):
        digits = expiration_time.strip()
        if not (digits.isascii() and digits.removeprefix('-').isdigit()):
            raise ValidationError(f'Expiration time must be an integer (given value: {expiration_time!r}).')
        return int(digits)
    raise ValidationError(f'Expiration time must be an integer (given type: {type(expiration_time)}).')


def validate_expiration_time(expiration_time: Any, now: int | None = None) -> int:
    """Coerce and check the expiration time submitted to the create path.

    Args:
        expiration_time (Any):
            Unix timestamp in seconds, as an integer or a numeric string.
        now (int | None):
            Current Unix timestamp in seconds. Defaults to the current UTC time.

    Returns:
        int: The expiration time as an integer.

    Raises:
        ValidationError:
            If the value isn't an integer, lies past MAX_EXPIRATION_TIME or isn't strictly in the future.
    """
    expiration_time = coerce_expiration_time(expiration_time)
    if expiration_time > MAX_EXPIRATION_TIME:
        raise ValidationError(f'Expiration time must be at most {MAX_EXPIRATION_TIME} (given value: {expiration_time}).')

    now = int(datetime.now(UTC).timestamp()) if now is None else now
    if expiration_time <= now:
        raise ValidationError(f'Expiration time must be in the future (given value: {expiration_time}, now: {now}).')
    return expiration_time
