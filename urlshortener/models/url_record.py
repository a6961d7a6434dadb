"""URL record shared by the create and redirect paths.

Classes:
    UrlRecord:
        Destination URL of a short link together with its expiration timestamp.

Wire format (JSON payload exchanged with API Gateway and persisted by the DAOs):

    {
        "originalUrl": "https://example.com/article/123",
        "expirationTime": 1767225600
    }

Example:
    >>> record = UrlRecord(original_url='https://example.com/article/123', expiration_time=1767225600)
    >>> record.original_url
    'https://example.com/article/123'
    >>> record.expiration_time
    1767225600
    >>> record.to_dict()
    {'originalUrl': 'https://example.com/article/123', 'expirationTime': 1767225600}
"""

import json
import dataclasses
from dataclasses import dataclass
from datetime import datetime, UTC
from typing import Any, Self

from urlshortener.types import UrlRecordPayload
from urlshortener.constants import MAX_EXPIRATION_TIME
from urlshortener.exceptions import ValidationError, ExpiredRecordError
from urlshortener.utils.validation import coerce_expiration_time


def _epoch_now() -> int:
    return int(datetime.now(UTC).timestamp())


# fmt: off
@dataclass(frozen=True)
class UrlRecord:
    """Represent the destination and validity window of a short URL.

    The constructor assigns both fields and validates them. Records are
    immutable: use `replace()` to derive a modified copy.

    Attributes:
        original_url (str):
            The destination URL the short link redirects to. Non-empty.
        expiration_time (int):
            Absolute Unix timestamp (seconds, UTC) after which the record is invalid.

    Raises:
        ValidationError:
            If `original_url` is empty or `expiration_time` isn't an integer
            between 0 and MAX_EXPIRATION_TIME.
    """
    original_url: str     # Destination URL
    expiration_time: int  # Unix epoch seconds after which this record is expired
    # fmt: on

    def __post_init__(self):
        if not isinstance(self.original_url, str):
            raise ValidationError(f'Original URL must be of type string (given type: {type(self.original_url)}).')
        if not self.original_url.strip():
            raise ValidationError('Original URL must be a non-empty string.')
        if isinstance(self.expiration_time, bool) or not isinstance(self.expiration_time, int):
            raise ValidationError(f'Expiration time must be an integer (given type: {type(self.expiration_time)}).')
        if self.expiration_time < 0:
            raise ValidationError(f'Expiration time must be a non-negative integer (given value: {self.expiration_time}).')
        if self.expiration_time > MAX_EXPIRATION_TIME:
            raise ValidationError(f'Expiration time must be at most {MAX_EXPIRATION_TIME} (given value: {self.expiration_time}).')

    @property
    def expires_at(self) -> datetime:
        """Expiration time as an aware UTC datetime."""
        return datetime.fromtimestamp(self.expiration_time, tz=UTC)

    def ttl(self, now: int | None = None) -> int:
        """Return seconds left until expiration (negative once expired)."""
        now = _epoch_now() if now is None else now
        return self.expiration_time - now

    def is_expired(self, now: int | None = None) -> bool:
        """Check whether the record's expiration time has passed.

        A record whose expiration time equals `now` is still valid.

        Args:
            now (int | None):
                Current Unix timestamp in seconds. Defaults to the current UTC time.

        Returns:
            bool: True if expired, False otherwise.

        Example:
            >>> UrlRecord('https://example.com', 100).is_expired(now=101)
            True
            >>> UrlRecord('https://example.com', 100).is_expired(now=100)
            False
        """
        return self.ttl(now) < 0

    def ensure_active(self, now: int | None = None) -> Self:
        """Return the record itself, or raise ExpiredRecordError if it's expired."""
        if self.is_expired(now):
            expired_at = self.expires_at.strftime('%Y-%m-%dT%H:%M:%SZ')
            raise ExpiredRecordError(f'URL record for {self.original_url} expired at {expired_at}.', record=self)
        return self

    def replace(self, **changes: Any) -> Self:
        """Derive a copy of the record with some fields changed (validated again)."""
        return dataclasses.replace(self, **changes)

    def to_dict(self) -> UrlRecordPayload:
        return {
            'originalUrl': self.original_url,
            'expirationTime': self.expiration_time,
        }

    def to_json(self) -> str:
        return json.dumps(self.to_dict())

    @classmethod
    def from_dict(cls, payload: UrlRecordPayload) -> Self:
        """Build a record from its camelCase wire payload.

        `expirationTime` may be sent as a numeric string.

        Raises:
            ValidationError:
                If a field is missing or carries an invalid value.
        """
        if not isinstance(payload, dict):
            raise ValidationError(f'URL record payload must be a JSON object (given type: {type(payload)}).')

        missing = [key for key in ('originalUrl', 'expirationTime') if payload.get(key) is None]
        if missing:
            missing_list = ', '.join(f"'{key}'" for key in missing)
            raise ValidationError(f'URL record payload is missing: {missing_list}')

        return cls(
            original_url=payload['originalUrl'],
            expiration_time=coerce_expiration_time(payload['expirationTime']),
        )

    @classmethod
    def from_json(cls, raw: str | bytes) -> Self:
        try:
            payload = json.loads(raw)
        except ValueError as e:  # JSONDecodeError, UnicodeDecodeError
            raise ValidationError('URL record payload is not valid JSON.') from e
        return cls.from_dict(payload)
