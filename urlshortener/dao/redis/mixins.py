"""Redis connection shared by the URL record DAO.

The `redis` section of a Lambda's AppConfig document is turned into `redis_*`
keyword arguments by `urlshortener.dao.factory.url_record_dao()`:

    {"host": "redis.internal", "port": "6379", "db": 0, "username": "...", "password": "..."}

    -> RedisClientMixin(redis_host='redis.internal', redis_port='6379', redis_db=0, ...)

Ports and database indexes may arrive as strings; they are cast to int.

Example:
    >>> dao = UrlRecordRedisDAO(redis_host='localhost', prefix='urlshortener:local')
    >>> dao.keys.record_key('abc123')
    'urlshortener:local:links:abc123'
"""

import redis

from urlshortener.dao.redis.redis_key_schema import RedisKeySchema
from urlshortener.dao.redis.helpers import redis_location, UNREACHABLE_ERRORS
from urlshortener.dao.exceptions import DataStoreError


class RedisClientMixin:
    """Give a DAO its Redis client (`self.redis`) and key schema (`self.keys`).

    The server is PINGed on construction, so a DAO that was built can be used:
    a misconfigured or unreachable Redis fails fast with DataStoreError before any
    shortcode is generated.
    """

    def __init__(
        self,
        redis_host: str | None = 'localhost',
        redis_port: int | str | None = 6379,
        redis_db: int | str | None = 0,
        redis_decode_responses: bool | None = True,
        redis_username: str | None = None,
        redis_password: str | None = None,
        redis_client: redis.Redis | None = None,
        prefix: str | None = None,
    ):
        """Connect to Redis (or adopt `redis_client`) and namespace keys under `prefix`

        Raises:
            DataStoreError:
                If the server doesn't answer the initial PING.
        """
        if redis_client is None:
            redis_client = self._connect(
                host=redis_host,
                port=redis_port,
                db=redis_db,
                decode_responses=redis_decode_responses,
                username=redis_username,
                password=redis_password,
            )

        self.redis = redis_client
        self.keys = RedisKeySchema(prefix=prefix)

        self._healthcheck()

    @staticmethod
    def _connect(host, port, db, decode_responses, username, password) -> redis.Redis:
        # Hashes are read back as str so UrlRecord.from_dict() can parse them
        return redis.Redis(
            host=host,
            port=int(port),
            db=int(db),
            decode_responses=decode_responses,
            username=username,
            password=password,
        )

    def _healthcheck(self, raise_error: bool = True) -> bool:
        """PING the URL record store

        Returns:
            bool: True if Redis answered. False if it didn't and `raise_error` is False.

        Raises:
            DataStoreError:
                If Redis didn't answer and `raise_error` is True.
        """
        try:
            self.redis.ping()
        except UNREACHABLE_ERRORS as e:
            if not raise_error:
                return False
            raise DataStoreError(
                f"Can't connect to Redis at {redis_location(self.redis)}. Check the provided configuration parameters."
            ) from e
        return True
