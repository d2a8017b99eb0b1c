#!/usr/bin/env python3
"""
Timestamp handling for dhcpd lease files.

Lease files store times as "<weekday> YYYY/MM/DD HH:MM:SS", where the
weekday is a single digit (0 = Sunday). The weekday carries no extra
information and is dropped before parsing.
"""

from datetime import datetime, timezone
from typing import Optional

from lease_errors import LeaseParseError


LEASE_TIME_FORMAT = "%Y/%m/%d %H:%M:%S"
NEVER = "never"
UNKNOWN_TIME = "-"


def parse_lease_timestamp(raw: str, utc: bool = False) -> Optional[datetime]:
    """
    Convert a lease file timestamp into a timezone-aware datetime.

    Args:
        raw: Text between the directive keyword and the terminating ';'
        utc: Interpret the time as UTC instead of local time

    Returns:
        The parsed time, or None for "never"

    Raises:
        LeaseParseError: If the text does not match the lease time format
    """
    text = raw.strip()
    if text.lower() == NEVER:
        return None

    if len(text) < 3:
        raise LeaseParseError(f"time string too short: '{raw}'")

    if text[0].isdigit() and text[1].isspace():
        text = text[2:]

    try:
        parsed = datetime.strptime(text, LEASE_TIME_FORMAT)
    except ValueError as e:
        raise LeaseParseError(f"time conversion failed: '{raw}'") from e

    if utc:
        return parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone()


def format_time(value: Optional[datetime], utc: bool = False) -> str:
    """Render a time asctime-style, e.g. 'Mon Jan  1 10:00:00 2024'."""
    if value is None:
        return UNKNOWN_TIME
    return value.astimezone(timezone.utc if utc else None).ctime()


def is_expired(end: Optional[datetime], now: Optional[datetime] = None) -> bool:
    """True if end lies strictly before now; an unset end never expires."""
    if end is None:
        return False
    if now is None:
        now = datetime.now(timezone.utc)
    return end < now


def compare(t1: Optional[datetime], t2: Optional[datetime]) -> int:
    """Three-way comparison; an unset time sorts before any set time."""
    if t1 == t2:
        return 0
    if t1 is None:
        return -1
    if t2 is None:
        return 1
    return -1 if t1 < t2 else 1
