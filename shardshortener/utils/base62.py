"""Base62 shortcode encoding

This module converts counter values into short alphanumeric keys and back.
Every non-negative integer maps to exactly one key (no padding, no salt), so
unique counter values always yield unique shortcodes.

Functions:
    encode(n) -> str:
        Encode a non-negative integer as a base62 string.
    decode(key) -> int:
        Recover the integer a base62 string was encoded from.

Example:
    >>> from shardshortener.utils import encode, decode
    >>> encode(125)
    '21'
    >>> decode('21')
    125
"""

import string

from beartype import beartype


ALPHABET = string.digits + string.ascii_lowercase + string.ascii_uppercase
BASE = len(ALPHABET)  # 10 digits + 26 lowercase + 26 uppercase

_INDEX = {char: i for i, char in enumerate(ALPHABET)}


@beartype
def encode(n: int) -> str:
    """Encode a non-negative integer into a base62 shortcode.

    The most significant digit comes first and the output grows
    logarithmically with ``n``. ``encode(0)`` is the first alphabet character.

    Args:
        n (int):
            Counter value to encode.

    Returns:
        str: base62 representation of ``n``.

    Raises:
        ValueError:
            If ``n`` is negative.

    Example:
        >>> encode(61)
        'Z'
        >>> encode(62)
        '10'
    """
    if n < 0:
        raise ValueError(f'Value must be a non-negative integer (given value: {n}).')

    chars = []
    while True:
        n, remainder = divmod(n, BASE)
        chars.append(ALPHABET[remainder])
        if n == 0:
            break
    return ''.join(reversed(chars))


@beartype
def decode(key: str) -> int:
    """Decode a base62 shortcode back into its integer value.

    Raises:
        ValueError:
            If ``key`` is empty or contains characters outside the alphabet.
    """
    if not key:
        raise ValueError('Key must be a non-empty string.')

    value = 0
    for char in key:
        try:
            value = value * BASE + _INDEX[char]
        except KeyError:
            raise ValueError(f'Invalid base62 character {char!r} in key {key!r}.') from None
    return value
