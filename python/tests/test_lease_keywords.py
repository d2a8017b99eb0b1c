from lease_keywords import KEYWORDS, TokenKind, lookup


def test_keyword_table_is_sorted():
    names = [name for name, _ in KEYWORDS]
    assert names == sorted(names)


def test_lookup_known_keywords():
    assert lookup('lease') == TokenKind.LEASE
    assert lookup('starts') == TokenKind.STARTS
    assert lookup('ends') == TokenKind.ENDS
    assert lookup('hardware') == TokenKind.HARDWARE
    assert lookup('ethernet') == TokenKind.ETHERNET
    assert lookup('client-hostname') == TokenKind.CLIENT_HOSTNAME
    assert lookup('abandoned') == TokenKind.ABANDONED


def test_lookup_is_case_insensitive():
    assert lookup('LEASE') == TokenKind.LEASE
    assert lookup('Client-Hostname') == TokenKind.CLIENT_HOSTNAME


def test_lookup_unknown_words():
    assert lookup('binding') == TokenKind.INVALID
    assert lookup('') == TokenKind.INVALID
    assert lookup('zzz') == TokenKind.INVALID
    assert lookup('leases') == TokenKind.INVALID
