#!/usr/bin/env python3
"""Data classes shared by the lease parser, deduplicator and report."""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass
class Lease:
    """One 'lease <ip> { ... }' block from a dhcpd lease file."""
    ipaddr: str
    start: Optional[datetime] = None
    end: Optional[datetime] = None
    client: Optional[str] = None
    macaddr: Optional[str] = None
    abandoned: bool = False


@dataclass
class ColumnWidths:
    """Widest value seen per report column across the whole parsed file."""
    client: int = 0
    ipaddr: int = 0
    macaddr: int = 0
    start: int = 0
    end: int = 0

    def widen(self, column: str, value: str) -> None:
        if len(value) > getattr(self, column):
            setattr(self, column, len(value))
