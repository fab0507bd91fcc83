"""
Korelin Lexer - turns a source buffer into tokens on demand

The scanner keeps a one-character window (current_char plus a peek) over
the borrowed source text. It is pull based: the parser asks for one token
at a time and nothing is buffered beyond the current character.

Scanning rules in short:
- identifiers/keywords: maximal munch over letters, digits and '_'
- integers: maximal munch over digits (no fractions, no exponents)
- strings: '"' or "'" delimited, a backslash only escapes the delimiter
- operators: one character of lookahead picks the one- or two-char form
- anything else: an ERROR token for exactly that character

Identifier, integer and string lexemes are owned by the token that carries
them and are acquired through the ownership ledger as they are scanned.
"""

import logging
from typing import Iterator, List, Optional, Union

from ..ownership import OwnershipLedger
from .tokens import (
    Token, StaticToken, OwnedToken, TokenType, SourceLocation,
    SINGLE_CHAR_TOKENS, LOOKAHEAD_TOKENS, STRING_DELIMITERS, lookup_identifier
)
from .errors import (
    LexerError, LexerWarning, create_invalid_character_error,
    create_unterminated_string_error
)

logger = logging.getLogger(__name__)

# Value of current_char once the input is exhausted
EOF_CHAR = "\0"

WHITESPACE = frozenset(" \t\n\r")


def _is_letter(char: str) -> bool:
    return ("a" <= char <= "z") or ("A" <= char <= "Z")


def _is_digit(char: str) -> bool:
    return "0" <= char <= "9"


def _is_identifier_start(char: str) -> bool:
    return _is_letter(char) or char == "_"


def _is_identifier_continue(char: str) -> bool:
    return _is_letter(char) or _is_digit(char) or char == "_"


class Lexer:
    """
    Korelin lexical analyzer.

    Invariants:
        position <= read_position <= len(source) + 1
        current_char == source[position], or EOF_CHAR once exhausted
        next_token() keeps returning EOF once the input is exhausted
    """

    def __init__(self, source: str, filename: str = "<input>",
                 ledger: Optional[OwnershipLedger] = None):
        """
        Initialize the lexer with source text.

        Args:
            source: Source text; borrowed, never modified
            filename: Name used in source locations
            ledger: Ledger that owned lexemes are acquired from
        """
        self.source = source
        self.filename = filename
        self.ledger = ledger if ledger is not None else OwnershipLedger()
        self.position = 0
        self.read_position = 0
        self.current_char = EOF_CHAR
        self.line = 1
        self.column = 0
        self.errors: List[LexerError] = []
        self.warnings: List[LexerWarning] = []

        self._advance()  # load the first character

    # Character window

    def _advance(self):
        """Move the window one character forward, sentinel at end of input."""
        if self.read_position > len(self.source):
            return

        if self.current_char == "\n" and self.position < len(self.source):
            self.line += 1
            self.column = 1
        else:
            self.column += 1

        if self.read_position >= len(self.source):
            self.current_char = EOF_CHAR
        else:
            self.current_char = self.source[self.read_position]
        self.position = self.read_position
        self.read_position += 1

    def _peek_char(self) -> str:
        """Character after current_char, without moving."""
        if self.read_position >= len(self.source):
            return EOF_CHAR
        return self.source[self.read_position]

    def _at_end(self) -> bool:
        return self.position >= len(self.source)

    def _skip_whitespace(self):
        while not self._at_end() and self.current_char in WHITESPACE:
            self._advance()

    def _location(self) -> SourceLocation:
        return SourceLocation(self.filename, self.line, self.column, self.position)

    # Tokens

    def next_token(self) -> Token:
        """Scan and return the next token."""
        self._skip_whitespace()
        location = self._location()

        if self._at_end():
            return StaticToken(TokenType.EOF, "", location)

        char = self.current_char

        if char in SINGLE_CHAR_TOKENS:
            self._advance()
            return StaticToken(SINGLE_CHAR_TOKENS[char], char, location)

        if char in LOOKAHEAD_TOKENS:
            return self._read_operator(location)

        if _is_identifier_start(char):
            return self._read_identifier(location)

        if _is_digit(char):
            return self._read_number(location)

        if char in STRING_DELIMITERS:
            return self._read_string(location)

        # Always consume the offending character so scanning makes progress
        self._advance()
        error = create_invalid_character_error(char, location)
        self.errors.append(error)
        logger.debug("%s: invalid character %r", location, char)
        return StaticToken(TokenType.ERROR, char, location)

    def _read_operator(self, location: SourceLocation) -> StaticToken:
        first = self.current_char
        single, pairs = LOOKAHEAD_TOKENS[first]
        second = self._peek_char()

        self._advance()
        if second in pairs:
            self._advance()
            return StaticToken(pairs[second], first + second, location)
        return StaticToken(single, first, location)

    def _read_identifier(self, location: SourceLocation) -> Token:
        start = self.position
        while not self._at_end() and _is_identifier_continue(self.current_char):
            self._advance()

        text = self.source[start:self.position]
        token_type = lookup_identifier(text)
        if token_type is TokenType.IDENTIFIER:
            return self._owned(token_type, text, location)
        return StaticToken(token_type, text, location)

    def _read_number(self, location: SourceLocation) -> OwnedToken:
        start = self.position
        while not self._at_end() and _is_digit(self.current_char):
            self._advance()

        return self._owned(TokenType.INTEGER, self.source[start:self.position], location)

    def _read_string(self, location: SourceLocation) -> OwnedToken:
        """
        Scan a string literal; the lexeme keeps both delimiters.

        A backslash directly followed by the delimiter is consumed together
        with it and does not end the string. Nothing else is an escape.
        """
        quote = self.current_char
        start = self.position
        self._advance()  # opening quote

        while not self._at_end() and self.current_char != quote:
            if self.current_char == "\\" and self._peek_char() == quote:
                self._advance()
            self._advance()

        if self._at_end():
            warning = create_unterminated_string_error(quote, location)
            self.warnings.append(warning)
            logger.debug("%s: unterminated string literal", location)
        else:
            self._advance()  # closing quote

        return self._owned(TokenType.STRING, self.source[start:self.position], location)

    def _owned(self, token_type: TokenType, text: str, location: SourceLocation) -> OwnedToken:
        return self.ledger.acquire(OwnedToken(token_type, text, location))

    def tokenize(self) -> List[Token]:
        """
        Drain the remaining input.

        Returns:
            List of tokens ending with exactly one EOF token
        """
        return list(self)

    def __iter__(self) -> Iterator[Token]:
        while True:
            token = self.next_token()
            yield token
            if token.type is TokenType.EOF:
                return

    def has_errors(self) -> bool:
        """Check if lexer encountered any errors."""
        return len(self.errors) > 0

    def has_warnings(self) -> bool:
        """Check if lexer encountered any warnings."""
        return len(self.warnings) > 0

    def get_diagnostics(self) -> List[Union[LexerError, LexerWarning]]:
        """Get all diagnostics (errors and warnings)."""
        return self.errors + self.warnings


def tokenize_string(source: str, filename: str = "<string>") -> List[Token]:
    """
    Convenience function to tokenize a source string.

    Ownership is not tracked: the returned tokens simply belong to the caller.
    Lexical errors show up as ERROR tokens in the result.
    """
    lexer = Lexer(source, filename, ledger=OwnershipLedger(enabled=False))
    return lexer.tokenize()
