"""Data Access Object (DAO) implementation for managing URL records in Redis

This module provides a Redis-based implementation of UrlRecordBaseDAO.

Storage layout (with prefix "urlshortener:prod"):

    urlshortener:prod:links:<shortcode>   HASH   {originalUrl: <url>, expirationTime: <epoch seconds>}
    urlshortener:prod:links:counter       STRING global shortcode counter

Each record key expires TTL.RETENTION_GRACE seconds after the record's own
expiration time, so the redirect path can still tell "expired" apart from
"never existed" for a while.

Classes:
    UrlRecordRedisDAO:
        DAO for storing and retrieving UrlRecord in a Redis datastore.

Example:
    >>> from urlshortener.models import UrlRecord
    >>> from urlshortener.dao.redis import UrlRecordRedisDAO

    >>> dao = UrlRecordRedisDAO(prefix="urlshortener:dev", shortcode_salt="my_secret")
    >>> shortcode = dao.next_shortcode()
    >>> dao.insert(shortcode, UrlRecord("https://example.com/page", 1767225600))
    <UrlRecordRedisDAO>

    >>> dao.get(shortcode).original_url
    'https://example.com/page'
"""

from beartype import beartype

from urlshortener.models import UrlRecord
from urlshortener.constants import TTL, Shortcode
from urlshortener.exceptions import ValidationError
from urlshortener.dao.base import UrlRecordBaseDAO
from urlshortener.dao.redis.mixins import RedisClientMixin
from urlshortener.dao.redis.helpers import handle_redis_errors
from urlshortener.dao.exceptions import ShortURLAlreadyExistsError, ShortURLNotFoundError, DataStoreError
from urlshortener.utils.shortener import generate_shortcode


class UrlRecordRedisDAO(RedisClientMixin, UrlRecordBaseDAO):
    """Redis-based Data Access Object (DAO) for managing URL records

    Attributes (see RedisClientMixin):
        redis (redis.Redis):
            Redis client used to communicate with the Redis datastore.
        keys (RedisKeySchema):
            Key schema helper for generating namespaced Redis keys.
        shortcode_salt (str):
            Secret salt scrambling counter-based shortcodes.

    Methods:
        insert(shortcode: str, record: UrlRecord, **kwargs) -> UrlRecordRedisDAO:
            Store a URL record. Raises ShortURLAlreadyExistsError when the shortcode is taken.

        get(shortcode: str, **kwargs) -> UrlRecord:
            Retrieve a URL record. Raises ShortURLNotFoundError when the shortcode doesn't exist.

        next_shortcode(**kwargs) -> str:
            Increment the global counter and scramble it into a shortcode.

        count(increment: bool = False, **kwargs) -> int:
            Retrieve (and optionally increment) the global counter.

    All methods raise DataStoreError when Redis is unreachable or refuses a command.
    """

    def __init__(self, *args, shortcode_salt: str = Shortcode.DEFAULT_SALT, **kwargs):
        super().__init__(*args, **kwargs)
        self.shortcode_salt = shortcode_salt

    @handle_redis_errors
    @beartype
    def insert(self, shortcode: str, record: UrlRecord, **kwargs) -> 'UrlRecordRedisDAO':
        """Insert a URL record into Redis

        The hash fields and the key's expiry are written in a single Redis
        transaction. UrlRecord caps expiration_time at MAX_EXPIRATION_TIME, so the
        EXPIREAT deadline is always one Redis accepts.

        Args:
            shortcode (str):
                Short identifier the record is stored under.
            record (UrlRecord):
                The record to store.
            **kwargs:
                Optional keyword arguments (for future use).

        Returns:
            UrlRecordRedisDAO: self (for method chaining)

        Raises:
            ShortURLAlreadyExistsError:
                If a record with the same shortcode already exists.
            DataStoreError:
                If Redis is unreachable or rejects the transaction.
        """
        record_key = self.keys.record_key(shortcode)
        if self.redis.exists(record_key):
            raise ShortURLAlreadyExistsError(f"Short URL with code '{shortcode}' already exists.")

        with self.redis.pipeline(transaction=True) as pipe:
            pipe.hset(record_key, mapping=record.to_dict())
            pipe.expireat(record_key, record.expiration_time + TTL.RETENTION_GRACE)
            pipe.execute()
        return self

    @handle_redis_errors
    @beartype
    def get(self, shortcode: str, **kwargs) -> UrlRecord:
        """Retrieve a stored URL record by shortcode

        Args:
            shortcode (str):
                The shortcode identifier for the shortened URL.
            **kwargs:
                Optional keyword arguments (for future use).

        Returns:
            UrlRecord: The retrieved record. It may already be expired.

        Raises:
            ShortURLNotFoundError:
                If the shortcode does not exist in Redis.
            DataStoreError:
                If the stored hash is corrupted or Redis connectivity issues occur.

        Example:
            >>> dao.get('abc123')
            UrlRecord(original_url='https://example.com', expiration_time=1767225600)
        """
        payload = self.redis.hgetall(self.keys.record_key(shortcode))
        if not payload:
            raise ShortURLNotFoundError(f"Short URL with code '{shortcode}' not found.")

        try:
            return UrlRecord.from_dict(payload)
        except ValidationError as e:
            raise DataStoreError(f"Short URL with code '{shortcode}' holds a corrupted record.") from e

    @handle_redis_errors
    def next_shortcode(self, **kwargs) -> str:
        """Generate a shortcode from the incremented global counter

        Example:
            >>> dao.next_shortcode()
            'Gh71WPT'
        """
        counter = self.count(increment=True)
        return generate_shortcode(counter, salt=self.shortcode_salt, length=Shortcode.LENGTH)

    @handle_redis_errors
    def count(self, increment: bool = False, **kwargs) -> int:
        """Retrieve global shortcode counter

        Args:
            increment (bool):
                If True, increments the counter. Otherwise, retrieves its value.

        Returns:
            int:
                The updated or current global counter value (0 if never incremented).

        Example:
            >>> dao.count(increment=False)
            123
            >>> dao.count(increment=True)
            124
        """
        if increment:
            return int(self.redis.incr(self.keys.counter_key()))
        else:
            return int(self.redis.get(self.keys.counter_key()) or 0)
