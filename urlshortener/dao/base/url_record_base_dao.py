"""Abstract base class for URL record data access objects (DAOs).

This class establishes a consistent contract for all URL record DAO implementations,
regardless of the underlying storage mechanism (e.g., Redis, S3).

Responsibilities:
    - Provide an interface for inserting and retrieving UrlRecord objects by shortcode.
    - Provide fresh shortcode candidates suited to the data store.
    - Standardize error handling across multiple data store implementations.

Example:
    Typical usage with a datastore-specific implementation:

        >>> from urlshortener.models import UrlRecord
        >>> from urlshortener.dao.redis import UrlRecordRedisDAO

        >>> dao = UrlRecordRedisDAO(...)
        >>> shortcode = dao.next_shortcode()
        >>> dao.insert(shortcode, UrlRecord('https://example.com/blog/article-123', 1767225600))

        >>> retrieved = dao.get(shortcode)
        >>> print(retrieved.original_url)
        https://example.com/blog/article-123
"""

from abc import ABC, abstractmethod

from urlshortener.models import UrlRecord


class UrlRecordBaseDAO(ABC):
    """Interface for URL record data access objects (DAOs).

    Methods:
        insert(shortcode: str, record: UrlRecord, **kwargs) -> UrlRecordBaseDAO:
            Store a URL record under a shortcode.
            Raises ShortURLAlreadyExistsError if the shortcode already exists.
            Raises DataStoreError on connection or write failure.

        get(shortcode: str, **kwargs) -> UrlRecord:
            Retrieve the URL record stored under a shortcode.
            Raises ShortURLNotFoundError if the entry does not exist.
            Raises DataStoreError on connection or read failure.

        next_shortcode(**kwargs) -> str:
            Produce a fresh shortcode candidate.
            Raises DataStoreError on connection failure.

    NOTE:
        - Records are never updated or deleted through the DAO. Data stores
          drop them on their own some time after they expire.
    """

    @abstractmethod
    def insert(self, shortcode: str, record: UrlRecord, **kwargs) -> 'UrlRecordBaseDAO':
        """Store a URL record under a shortcode.

        Args:
            shortcode (str):
                Short identifier the record is stored under.
            record (UrlRecord):
                The record to be inserted.
            **kwargs:
                Additional keyword arguments, used by data store.

        Returns:
            UrlRecordBaseDAO: self (for method chaining)

        Raises:
            ShortURLAlreadyExistsError:
                If a record with the same shortcode already exists.
            DataStoreError:
                If there is an error in the data store.
        """
        pass

    @abstractmethod
    def get(self, shortcode: str, **kwargs) -> UrlRecord:
        """Retrieve a URL record by its shortcode.

        Raises:
            ShortURLNotFoundError:
                If no record with the given shortcode exists.
            DataStoreError:
                If there is an error in the data store.
        """
        pass

    @abstractmethod
    def next_shortcode(self, **kwargs) -> str:
        """Produce a fresh shortcode candidate for a new record.

        Candidates are not guaranteed to be free: `insert()` remains the
        authority on collisions.
        """
        pass
