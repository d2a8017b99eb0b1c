#!/usr/bin/env python3
"""Error types raised while reading and parsing dhcpd lease files."""

from typing import Optional


class LeaseError(Exception):
    """Base class for all dhlease failures."""

    def __init__(self, message: str, line: Optional[int] = None, column: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.line = line
        self.column = column

    def __str__(self):
        if self.line is None:
            return self.message
        return f"{self.message} at line {self.line}, pos {self.column}"


class LeaseParseError(LeaseError):
    """Grammar violation in the lease file."""


class LeaseIOError(LeaseError):
    """Lease or config file could not be opened or read."""


class UsageError(LeaseError):
    """Invalid options or configuration."""
