"""Shortcode generation utilities

This module provides helpers for generating short URL slugs: deterministic,
non-sequential hashes based on a numeric counter and a secret salt value, and
random slugs for data stores without an atomic counter.

Functions:
    generate_shortcode(counter, salt='default_salt', length=7, mult=1315423911):
        Generate a short hash suitable for use as a URL slug.
    random_shortcode(length=8):
        Generate a random base62 slug.

Example:
    >>> from urlshortener.utils import generate_shortcode
    >>> len(generate_shortcode(12345, salt='my_secret'))
    7
"""

import math
import string
import secrets

import xxhash


ALPHABET = string.ascii_lowercase + string.ascii_uppercase + string.digits
BASE = len(ALPHABET)  # 26 lowercase + 26 uppercase + 10 digits


def generate_shortcode(counter: int, salt: str = 'default_salt', length: int = 7, mult: int = 1315423911) -> str:
    """Generate a short, deterministic URL hash from a counter and salt.

    The counter is scrambled with an affine permutation over the fixed
    BASE^length space (offset by the xxhash of the salt) and encoded in Base62.
    The mapping is 1:1 as long as `counter < BASE**length`.

    Args:
        counter (int):
            Unique non-negative integer value identifying the URL.
        salt (str, optional):
            Secret string used to randomize the output space.
        length (int, optional):
            Length of the resulting hash. Defaults to 7.
        mult (int, optional):
            Multiplicative factor for the permutation.
            Must be coprime with BASE**length.

    Returns:
        str: A fixed-length alphanumeric hash derived from the counter and salt.

    Raises:
        TypeError: If counter or salt have the wrong type.
        ValueError: If counter is negative, salt is empty or mult isn't coprime.
    """
    if not isinstance(counter, int):
        raise TypeError(f'Counter must be of type integer (given type: {type(counter)}).')
    if counter < 0:
        raise ValueError(f'Counter must be a non-negative integer (given value: {counter}).')
    if not isinstance(salt, str):
        raise TypeError(f'Salt must be of type string (given type: {type(salt)}).')
    if not salt:
        raise ValueError(f'Salt must be a non-empty string (given value: {salt}).')
    if math.gcd(mult, BASE**length) != 1:
        raise ValueError(f'Multiplicative factor must be coprime with mod ({BASE**length}) (given value: mult={mult}).')

    modulo_space = BASE**length
    salt_hash = xxhash.xxh64_intdigest(salt) % modulo_space
    permuted = (counter * mult + salt_hash) % modulo_space

    # Most significant digit first, left-padded with ALPHABET[0]
    return ''.join(reversed([ALPHABET[(permuted // BASE**i) % BASE] for i in range(length)])).rjust(length, ALPHABET[0])


def random_shortcode(length: int = 8) -> str:
    """Generate a random Base62 shortcode.

    Collisions are possible; callers must rely on the data store rejecting
    duplicate inserts and retry with a fresh shortcode.
    """
    if not isinstance(length, int) or length <= 0:
        raise ValueError(f'Length must be a positive integer (given value: {length}).')
    return ''.join(secrets.choice(ALPHABET) for _ in range(length))
