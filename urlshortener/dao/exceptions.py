"""Exceptions related to Data Access Objects (DAO) operations.

Classes:
    DAOError:
        Generic base class for DAO-related exceptions.

    ShortURLNotFoundError:
        Raised when no URL record exists for a shortcode.

    ShortURLAlreadyExistsError:
        Raised when attempting to insert a URL record under a taken shortcode.

    DataStoreError:
        Raised when there is an error in the data store (e.g., connection issues, timeouts, OOM, etc.).

Example:
    >>> from urlshortener.dao.exceptions import ShortURLNotFoundError
    >>> raise ShortURLNotFoundError("Short URL with code 'abc123' not found.")
    Traceback (most recent call last):
        ...
    urlshortener.dao.exceptions.ShortURLNotFoundError: Short URL with code 'abc123' not found.
"""


class DAOError(Exception):
    """Generic base class for DAO-related exceptions."""

    pass


class ShortURLNotFoundError(DAOError):
    """Exception raised when no URL record is found in the data store."""

    pass


class ShortURLAlreadyExistsError(DAOError):
    """Exception raised when attempting to insert a URL record under an existing shortcode."""

    pass


class DataStoreError(DAOError):
    """Exception raised when there is an error in the data store.

    e.g. connection issues, timeouts, OOM, etc.
    """

    pass
