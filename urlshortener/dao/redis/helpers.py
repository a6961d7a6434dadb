import functools
from typing import Any
from collections.abc import Callable

import redis

from urlshortener.dao.exceptions import DataStoreError


__all__ = ['redis_location', 'handle_redis_errors']

# Errors meaning the URL record store can't be reached at all
UNREACHABLE_ERRORS = (redis.exceptions.ConnectionError, redis.exceptions.TimeoutError)


def redis_location(client: redis.Redis) -> str:
    """Describe the Redis server a client talks to as host:port/db"""
    info = client.connection_pool.connection_kwargs
    return f'{info.get("host")}:{info.get("port")}/{info.get("db")}'


def handle_redis_errors[F: Callable[..., Any]](method: F) -> F:
    """Turn Redis failures inside a URL record DAO method into DataStoreError

    Unreachable servers (connection errors, timeouts) and commands Redis refuses
    to run (e.g. a MULTI/EXEC transaction aborted by a rejected EXPIREAT) both end
    up as DataStoreError, so Lambda handlers answer them with their data store 500.

    Example:
        >>> @handle_redis_errors
        ... def count(self):
        ...     return self.redis.get(self.keys.counter_key())
    """

    @functools.wraps(method)
    def wrapper(self, *args, **kwargs):
        try:
            return method(self, *args, **kwargs)
        except UNREACHABLE_ERRORS as e:
            raise DataStoreError(f"Can't connect to Redis at {redis_location(self.redis)}.") from e
        except redis.exceptions.ResponseError as e:
            raise DataStoreError(f'Redis at {redis_location(self.redis)} rejected the request ({e}).') from e

    return wrapper
