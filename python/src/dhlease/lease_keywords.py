#!/usr/bin/env python3
"""
Keyword table for the dhcpd lease file grammar.

Only the directives dhlease understands are listed; every other word in
the file looks up as TokenKind.INVALID.
"""

from bisect import bisect_left
from enum import IntEnum


class TokenKind(IntEnum):
    INVALID = 0
    LEASE = 1
    HARDWARE = 2
    ETHERNET = 3
    STARTS = 4
    ENDS = 5
    CLIENT_HOSTNAME = 6
    ABANDONED = 7


# Must stay sorted by name for the binary search in lookup()
KEYWORDS = (
    ('abandoned', TokenKind.ABANDONED),
    ('client-hostname', TokenKind.CLIENT_HOSTNAME),
    ('ends', TokenKind.ENDS),
    ('ethernet', TokenKind.ETHERNET),
    ('hardware', TokenKind.HARDWARE),
    ('lease', TokenKind.LEASE),
    ('starts', TokenKind.STARTS),
)

_NAMES = [name for name, _ in KEYWORDS]


def lookup(word: str) -> TokenKind:
    """Return the token kind for word, case-insensitively."""
    name = word.lower()
    index = bisect_left(_NAMES, name)
    if index < len(_NAMES) and _NAMES[index] == name:
        return KEYWORDS[index][1]
    return TokenKind.INVALID
