"""Shortcode generation utility

This module provides a helper function for drawing random shortcodes from the
Base62 alphabet. Uniqueness is not its concern: the registry re-draws until a
candidate doesn't collide with an active link.

Functions:
    generate_shortcode(length=6, alphabet=Shortcode.ALPHABET) -> str:
        Draw a random shortcode suitable for use as a URL slug.

Example:
    >>> from ttlshortener.utils import generate_shortcode
    >>> generate_shortcode()
    'q7FemO'
"""

import secrets

from ttlshortener.constants import Shortcode


def generate_shortcode(length: int = Shortcode.GENERATED_LENGTH, alphabet: str = Shortcode.ALPHABET) -> str:
    """Draw a random shortcode.

    Every character is drawn independently and uniformly from `alphabet`
    using the OS CSPRNG, so each of the len(alphabet)**length codes is
    equally likely.

    Args:
        length (int, optional):
            Number of characters to draw. Defaults to 6.

        alphabet (str, optional):
            Characters to draw from. Defaults to Base62 [A-Za-z0-9].

    Returns:
        str: A random shortcode of exactly `length` characters.

    Raises:
        TypeError: If length is not an integer or alphabet is not a string.
        ValueError: If length is not positive or alphabet is empty.

    Example:
        >>> len(generate_shortcode(length=8))
        8
    """
    if not isinstance(length, int) or isinstance(length, bool):
        raise TypeError(f'Length must be of type integer (given type: {type(length)}).')
    if length <= 0:
        raise ValueError(f'Length must be a positive integer (given value: {length}).')
    if not isinstance(alphabet, str):
        raise TypeError(f'Alphabet must be of type string (given type: {type(alphabet)}).')
    if not alphabet:
        raise ValueError(f'Alphabet must be a non-empty string (given value: {alphabet!r}).')

    return ''.join(secrets.choice(alphabet) for _ in range(length))
