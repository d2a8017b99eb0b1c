#!/usr/bin/env python3
"""
Character-level lexer for ISC dhcpd lease files.

Reads one character at a time from a text stream and keeps track of the
line and column of the last character read, so parse errors can point at
the offending spot in the file.

Words are separated by whitespace and ';'. A '}' always stands alone as a
word of its own. '#' starts a comment wherever it appears inside a word:
the rest of the line is thrown away and the word carries on with the
first character of the next line. A '"' inside a word opens a quoted
string that runs to the matching unescaped '"'; delimiters, braces and
'#' in it are plain data.
"""

from typing import Optional, TextIO

from lease_errors import LeaseIOError, LeaseParseError


BLOCK_END = '}'
SEMICOLON = ';'
COMMENT = '#'
QUOTE = '"'


class LeaseLexer:
    """Tokenizer state for a single lease file."""

    def __init__(self, stream: TextIO, name: str = "<stream>"):
        """
        Args:
            stream: Open text stream positioned at the start of the lease data
            name: Display name of the stream for diagnostics
        """
        self.stream = stream
        self.name = name
        self.line = 1
        self.column = 0
        self.at_eof = False
        # Character that terminated the last word (None at EOF)
        self.delimiter: Optional[str] = None
        self._pushback: Optional[str] = None
        self._previous = (self.line, self.column)

    def error(self, message: str) -> LeaseParseError:
        """Build a parse error located at the current position."""
        return LeaseParseError(message, line=self.line, column=self.column)

    def _read(self) -> str:
        if self._pushback is not None:
            c, self._pushback = self._pushback, None
            return c
        try:
            return self.stream.read(1)
        except OSError as e:
            raise LeaseIOError(f"failed to read from {self.name}: {e}",
                               line=self.line, column=self.column) from e

    def next_char(self) -> Optional[str]:
        """Consume one character, or return None at end of input."""
        c = self._read()
        if not c:
            self.at_eof = True
            return None

        self._previous = (self.line, self.column)
        if c == '\n':
            self.line += 1
            self.column = 0
        else:
            self.column += 1
        return c

    def unread(self, c: str) -> None:
        """Push a single character back, undoing its position change."""
        self._pushback = c
        self.line, self.column = self._previous

    def peek_char(self) -> str:
        """Look at the next character without consuming it."""
        c = self._read()
        if not c:
            raise self.error("unexpected EOF")
        self._pushback = c
        return c

    def skip_comment(self) -> None:
        while True:
            c = self.next_char()
            if c is None or c == '\n':
                return

    def next_word(self) -> str:
        """
        Accumulate characters up to the next delimiter.

        Returns the word, which is empty when two delimiters follow each
        other. The terminating character is left in self.delimiter; at end
        of input the partial word is returned and self.at_eof is set.
        """
        chars = []
        while True:
            c = self.next_char()
            if c is None:
                self.delimiter = None
                return ''.join(chars)

            if c == COMMENT:
                self.skip_comment()
                continue

            if c == QUOTE:
                chars.append(c)
                chars.extend(self.read_quoted())
                continue

            if c == BLOCK_END:
                if chars:
                    self.unread(c)
                self.delimiter = BLOCK_END
                return ''.join(chars) if chars else BLOCK_END

            if c == SEMICOLON or c.isspace():
                self.delimiter = c
                return ''.join(chars)

            chars.append(c)

    def skip_blanks(self) -> None:
        """Skip spaces and tabs, stopping before a newline or other character."""
        while not self.at_eof:
            c = self.next_char()
            if c is None:
                return
            if c == '\n' or not c.isspace():
                self.unread(c)
                return

    def _field_char(self) -> str:
        c = self.next_char()
        if c is None:
            raise self.error("unexpected EOF")
        if c == '\n':
            raise self.error("unexpected newline")
        return c

    def read_quoted(self) -> str:
        """
        Read the rest of a quoted string whose opening '"' was consumed.

        Returns the text including the closing quote. Backslash escapes
        are kept verbatim, so '\\"' does not end the string.
        """
        chars = []
        while True:
            c = self._field_char()
            chars.append(c)
            if c == '\\':
                chars.append(self._field_char())
            elif c == QUOTE:
                return ''.join(chars)

    def read_literal(self, strip_quotes: bool = False) -> str:
        """
        Read an address or hostname literal.

        Stops at whitespace or ';'. A '"' also ends the literal unless
        strip_quotes is set, in which case quotes are dropped wherever they
        occur. Hitting a newline or EOF first is a parse error.
        """
        self.skip_blanks()
        chars = []
        while True:
            c = self._field_char()
            if c == QUOTE:
                if strip_quotes:
                    continue
                break
            if c.isspace() or c == SEMICOLON:
                break
            chars.append(c)
        self.delimiter = c
        return ''.join(chars)

    def read_to_semicolon(self) -> str:
        """Read raw text up to the next ';' on the same line."""
        chars = []
        while True:
            c = self._field_char()
            if c == SEMICOLON:
                self.delimiter = c
                return ''.join(chars)
            chars.append(c)

    def seek_char(self, wanted: str) -> None:
        """Skip ahead to wanted, which must appear before the end of the line."""
        while True:
            c = self.next_char()
            if c == wanted:
                return
            if c is None:
                raise self.error(f"unexpected EOF, missing '{wanted}'")
            if c == '\n':
                raise LeaseParseError(f"missing '{wanted}' in line {self.line - 1}")
