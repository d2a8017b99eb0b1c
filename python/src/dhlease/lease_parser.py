#!/usr/bin/env python3
"""
Block parser for ISC dhcpd lease files.

Grammar understood:

    file       := leaseBlock*
    leaseBlock := "lease" IP "{" directive* "}"
    directive  := ("starts" | "ends") TIMESTRING ";"
                | "hardware" "ethernet" MACSTRING ";"
                | "client-hostname" QSTRING ";"
                | "abandoned" ";"

Directives dhlease does not know (binding state, uid, cltt, ...) are
skipped inside a block and rejected outside one.

Usage:
    with open('/var/db/dhcpd.leases', encoding='utf-8', errors='replace') as f:
        parser = LeaseParser(LeaseLexer(f, f.name))
        leases = parser.parse()
"""

import logging
from pathlib import Path
from typing import List, Optional, Union

from lease_errors import LeaseIOError, LeaseParseError
from lease_keywords import TokenKind, lookup
from lease_lexer import BLOCK_END, SEMICOLON, LeaseLexer
from lease_models import ColumnWidths, Lease
from lease_time import format_time, parse_lease_timestamp


logger = logging.getLogger(__name__)

BLOCK_START = '{'


class LeaseParser:
    """State machine turning lexer words into Lease records."""

    def __init__(self, lexer: LeaseLexer, utc: bool = False):
        """
        Args:
            lexer: Lexer over the lease file
            utc: Interpret lease timestamps as UTC instead of local time
        """
        self.lexer = lexer
        self.utc = utc
        self.leases: List[Lease] = []
        self.widths = ColumnWidths()
        self.in_block = False
        self.current: Optional[Lease] = None
        self.block_line = 0
        self.token_count = 0

        self._handlers = {
            TokenKind.LEASE: self._open_block,
            TokenKind.STARTS: self._parse_starts,
            TokenKind.ENDS: self._parse_ends,
            TokenKind.HARDWARE: self._parse_hardware,
            TokenKind.CLIENT_HOSTNAME: self._parse_client_hostname,
            TokenKind.ABANDONED: self._parse_abandoned,
        }

    def parse(self) -> List[Lease]:
        """
        Consume the whole stream.

        Returns:
            Leases in file order, one per closed block

        Raises:
            LeaseParseError: On any grammar violation, including a block
                still open at end of file
        """
        while not self.lexer.at_eof:
            word = self.lexer.next_word()
            if not word:
                continue

            if word == BLOCK_END:
                self._close_block()
                continue

            self._dispatch(word)

        if self.in_block:
            raise LeaseParseError(
                f"unexpected EOF inside lease block for {self.current.ipaddr} "
                f"opened at line {self.block_line}"
            )

        logger.info(f"Parsed {len(self.leases)} lease(s) from {self.lexer.name}")
        return self.leases

    def _dispatch(self, word: str) -> None:
        kind = lookup(word)
        if kind == TokenKind.INVALID:
            if not self.in_block:
                raise self.lexer.error(f"found token '{word}' outside lease boundaries")
            logger.debug(f"Skipping unknown directive '{word}' in lease {self.current.ipaddr}")
            return

        self.token_count += 1
        if self.token_count == 1 and kind != TokenKind.LEASE:
            raise self.lexer.error(f"expected a 'lease' section, got '{word}'")

        if kind != TokenKind.LEASE and not self.in_block:
            raise self.lexer.error(f"element '{word}' found outside block scope")

        handler = self._handlers.get(kind)
        if handler:
            handler()

    def _open_block(self) -> None:
        if self.in_block:
            raise self.lexer.error("lease section began inside existing lease section")

        ipaddr = self.lexer.read_literal()
        if not ipaddr:
            raise self.lexer.error("missing IP address after 'lease'")
        self.lexer.seek_char(BLOCK_START)

        self.in_block = True
        self.block_line = self.lexer.line
        self.current = Lease(ipaddr=ipaddr)
        self.widths.widen('ipaddr', ipaddr)
        logger.debug(f"Opened lease block {ipaddr} at line {self.block_line}")

    def _close_block(self) -> None:
        if not self.in_block:
            raise self.lexer.error("unbalanced bracket")

        self.leases.append(self.current)
        logger.debug(f"Closed lease block {self.current.ipaddr}")
        self.current = None
        self.in_block = False

    def _read_time(self):
        raw = self.lexer.read_to_semicolon()
        try:
            return parse_lease_timestamp(raw, utc=self.utc)
        except LeaseParseError as e:
            raise self.lexer.error(e.message) from e

    def _parse_starts(self) -> None:
        self.current.start = self._read_time()
        if self.current.start is not None:
            self.widths.widen('start', format_time(self.current.start, self.utc))

    def _parse_ends(self) -> None:
        self.current.end = self._read_time()
        if self.current.end is not None:
            self.widths.widen('end', format_time(self.current.end, self.utc))

    def _parse_hardware(self) -> None:
        hardware_type = self.lexer.next_word()
        if hardware_type == BLOCK_END:
            self._close_block()
            return
        if lookup(hardware_type) != TokenKind.ETHERNET:
            logger.debug(f"Ignoring hardware type '{hardware_type}' in lease {self.current.ipaddr}")
            return

        macaddr = self.lexer.read_literal()
        self.current.macaddr = macaddr
        self.widths.widen('macaddr', macaddr)

    def _parse_client_hostname(self) -> None:
        client = self.lexer.read_literal(strip_quotes=True)
        self.current.client = client
        self.widths.widen('client', client)

    def _parse_abandoned(self) -> None:
        if self.lexer.delimiter != SEMICOLON:
            self.lexer.skip_blanks()
            if self.lexer.peek_char() != SEMICOLON:
                raise self.lexer.error("expected ';' after 'abandoned'")
            self.lexer.next_char()
        self.current.abandoned = True


def parse_lease_file(path: Union[str, Path], utc: bool = False) -> LeaseParser:
    """
    Open and fully parse a lease file.

    Returns:
        The finished parser, exposing .leases and .widths

    Raises:
        LeaseIOError: If the file cannot be opened or read
        LeaseParseError: If the file is malformed
    """
    path = Path(path)
    try:
        f = open(path, 'r', encoding='utf-8', errors='replace')
    except OSError as e:
        raise LeaseIOError(f"couldn't open lease file {path}: {e.strerror or e}") from e

    with f:
        parser = LeaseParser(LeaseLexer(f, str(path)), utc=utc)
        parser.parse()
    return parser
