"""
Token definitions for the Korelin lexer.

This module defines the lexical vocabulary of Korelin:
- Special tokens (end of input, error)
- Literals (identifiers, integers, strings)
- Punctuation and one/two-character operators
- Keywords, including the contextual type-name keywords

Tokens come in two flavours. A StaticToken carries a fixed lexeme that
nobody has to give back. An OwnedToken carries a lexeme that was allocated
while scanning (identifiers, integers, strings) and must be released exactly
once, either by the parser when it moves past the token or by tree teardown
when an AST node holds a copy.
"""

from abc import ABC, abstractmethod
from enum import Enum, auto
from dataclasses import dataclass, replace
from typing import Dict, Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from ..ownership import OwnershipLedger


class TokenType(Enum):
    """
    Enumeration of all token types in Korelin.

    Organized by category. Kinds marked "reserved" have a slot in the
    vocabulary but are never produced by the scanner.
    """

    # ========================================================================
    # Special Tokens
    # ========================================================================
    EOF = auto()                    # End of input
    ERROR = auto()                  # Unrecognized character

    # ========================================================================
    # Identifiers and Literals
    # ========================================================================
    IDENTIFIER = auto()             # x, answer, _tmp1
    INTEGER = auto()                # 0, 42, 12345
    DOUBLE = auto()                 # reserved: 12.21 (no float scanning)
    STRING = auto()                 # "abcd" or 'abcd'

    # ========================================================================
    # Punctuation and Delimiters
    # ========================================================================
    COMMA = auto()                  # ,
    SEMICOLON = auto()              # ;
    LEFT_PAREN = auto()             # (
    RIGHT_PAREN = auto()            # )
    LEFT_BRACKET = auto()           # [
    RIGHT_BRACKET = auto()          # ]
    LEFT_BRACE = auto()             # {
    RIGHT_BRACE = auto()            # }

    # ========================================================================
    # Operators
    # ========================================================================

    # Single character
    ASSIGN = auto()                 # =
    PLUS = auto()                   # +
    MINUS = auto()                  # -
    MULTIPLY = auto()               # *
    DIVIDE = auto()                 # /
    MODULO = auto()                 # %
    POWER = auto()                  # ^
    LOGICAL_NOT = auto()            # !
    LESS_THAN = auto()              # <
    GREATER_THAN = auto()           # >
    BIT_AND = auto()                # &
    BIT_OR = auto()                 # |

    # Reserved single character / shift operators
    BIT_XOR = auto()                # reserved (^ scans as POWER)
    BIT_NOT = auto()                # reserved: ~
    LEFT_SHIFT = auto()             # reserved: <<
    RIGHT_SHIFT = auto()            # reserved: >>

    # Two characters
    INCREMENT = auto()              # ++
    DECREMENT = auto()              # --
    EQUAL = auto()                  # ==
    NOT_EQUAL = auto()              # !=
    LESS_EQUAL = auto()             # <=
    GREATER_EQUAL = auto()          # >=
    LOGICAL_AND = auto()            # &&
    LOGICAL_OR = auto()             # ||
    PLUS_ASSIGN = auto()            # +=
    MINUS_ASSIGN = auto()           # -=
    BIT_AND_ASSIGN = auto()         # &=
    BIT_OR_ASSIGN = auto()          # |=

    # Reserved compound assignments
    MULTIPLY_ASSIGN = auto()        # reserved: *=
    DIVIDE_ASSIGN = auto()          # reserved: /=
    MODULO_ASSIGN = auto()          # reserved: %=
    POWER_ASSIGN = auto()           # reserved: ^=

    # ========================================================================
    # Keywords
    # ========================================================================
    IMPORT = auto()                 # import
    STRUCT = auto()                 # struct
    VAR = auto()                    # var
    LET = auto()                    # let
    CONST = auto()                  # const
    FUNC = auto()                   # func
    RETURN = auto()                 # return
    BREAK = auto()                  # break
    CONTINUE = auto()               # continue
    CLASS = auto()                  # class
    STATIC = auto()                 # static
    PUBLIC = auto()                 # public
    PROTECTED = auto()              # protected
    PRIVATE = auto()                # private
    IF = auto()                     # if
    ELSE = auto()                   # else
    ELSEIF = auto()                 # elseif
    TRUE = auto()                   # true
    FALSE = auto()                  # false
    FOR = auto()                    # for
    WHILE = auto()                  # while

    # Contextual type-name keywords (no type syntax behind them yet)
    TYPE_INT = auto()               # int
    TYPE_LONG = auto()              # long
    TYPE_DOUBLE = auto()            # double
    TYPE_STRING = auto()            # string
    TYPE_BOOL = auto()              # bool


@dataclass(frozen=True)
class SourceLocation:
    """
    Represents a location in the source text.

    Used for diagnostics; line and column are 1-based, offset is 0-based.
    """
    filename: str
    line: int
    column: int
    offset: int

    def __str__(self) -> str:
        return f"{self.filename}:{self.line}:{self.column}"

    def __repr__(self) -> str:
        return f"SourceLocation({self.filename!r}, {self.line}, {self.column}, {self.offset})"


@dataclass(frozen=True, eq=False)
class Token(ABC):
    """
    A classified lexical unit: kind, lexeme and where it started.

    Equality is identity: two tokens with the same text are still two
    separately owned things.
    """
    type: TokenType
    lexeme: str
    location: SourceLocation

    @property
    def length(self) -> int:
        return len(self.lexeme)

    @property
    @abstractmethod
    def owns_lexeme(self) -> bool:
        """Whether releasing this token must go through the ledger."""

    @abstractmethod
    def copy(self, ledger: "OwnershipLedger") -> "Token":
        """Copy for a node to keep; owned copies are acquired on ``ledger``."""

    def __str__(self) -> str:
        return f"{self.type.name}({self.lexeme!r})"

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.type.name}, {self.lexeme!r}, {self.location!r})"

    @property
    def is_keyword(self) -> bool:
        """Check if this token is a keyword."""
        return self.type in KEYWORD_TYPES

    @property
    def is_literal(self) -> bool:
        """Check if this token is a literal value."""
        return self.type in {
            TokenType.INTEGER, TokenType.STRING,
            TokenType.TRUE, TokenType.FALSE,
        }


@dataclass(frozen=True, eq=False, repr=False)
class StaticToken(Token):
    """Token with a fixed lexeme (punctuation, operators, keywords, EOF, errors)."""

    @property
    def owns_lexeme(self) -> bool:
        return False

    def copy(self, ledger: "OwnershipLedger") -> "StaticToken":
        # Nothing is owned, so every holder can share the same token.
        return self


@dataclass(frozen=True, eq=False, repr=False)
class OwnedToken(Token):
    """Token whose lexeme was allocated during scanning."""

    def __post_init__(self):
        if self.type not in OWNED_LEXEME_TYPES:
            raise ValueError(f"{self.type.name} tokens do not own their lexeme")

    @property
    def owns_lexeme(self) -> bool:
        return True

    def copy(self, ledger: "OwnershipLedger") -> "OwnedToken":
        """Deep copy for an AST node; the copy is acquired separately."""
        return ledger.acquire(replace(self))

    def release(self, ledger: "OwnershipLedger") -> None:
        ledger.release(self)


# Only these kinds carry a lexeme that was allocated while scanning
OWNED_LEXEME_TYPES = frozenset({
    TokenType.IDENTIFIER,
    TokenType.INTEGER,
    TokenType.STRING,
})


# Keyword lookup table used after an identifier-shaped run is scanned
KEYWORDS: Dict[str, TokenType] = {
    # Declarations
    "let": TokenType.LET,
    "var": TokenType.VAR,
    "const": TokenType.CONST,
    "func": TokenType.FUNC,
    "class": TokenType.CLASS,
    "struct": TokenType.STRUCT,
    "import": TokenType.IMPORT,

    # Control flow
    "return": TokenType.RETURN,
    "if": TokenType.IF,
    "else": TokenType.ELSE,
    "elseif": TokenType.ELSEIF,
    "for": TokenType.FOR,
    "while": TokenType.WHILE,
    "break": TokenType.BREAK,
    "continue": TokenType.CONTINUE,

    # Literals
    "true": TokenType.TRUE,
    "false": TokenType.FALSE,

    # Modifiers
    "static": TokenType.STATIC,
    "public": TokenType.PUBLIC,
    "protected": TokenType.PROTECTED,
    "private": TokenType.PRIVATE,

    # Type names
    "int": TokenType.TYPE_INT,
    "long": TokenType.TYPE_LONG,
    "double": TokenType.TYPE_DOUBLE,
    "string": TokenType.TYPE_STRING,
    "bool": TokenType.TYPE_BOOL,
}

KEYWORD_TYPES = frozenset(KEYWORDS.values())

# Characters that always form a token on their own
SINGLE_CHAR_TOKENS: Dict[str, TokenType] = {
    ",": TokenType.COMMA,
    ";": TokenType.SEMICOLON,
    "(": TokenType.LEFT_PAREN,
    ")": TokenType.RIGHT_PAREN,
    "[": TokenType.LEFT_BRACKET,
    "]": TokenType.RIGHT_BRACKET,
    "{": TokenType.LEFT_BRACE,
    "}": TokenType.RIGHT_BRACE,
    "*": TokenType.MULTIPLY,
    "/": TokenType.DIVIDE,
    "%": TokenType.MODULO,
    "^": TokenType.POWER,
}

# First character -> (kind on its own, {second character: two-character kind})
LOOKAHEAD_TOKENS: Dict[str, tuple] = {
    "=": (TokenType.ASSIGN, {"=": TokenType.EQUAL}),
    "+": (TokenType.PLUS, {"+": TokenType.INCREMENT, "=": TokenType.PLUS_ASSIGN}),
    "-": (TokenType.MINUS, {"-": TokenType.DECREMENT, "=": TokenType.MINUS_ASSIGN}),
    "!": (TokenType.LOGICAL_NOT, {"=": TokenType.NOT_EQUAL}),
    "<": (TokenType.LESS_THAN, {"=": TokenType.LESS_EQUAL}),
    ">": (TokenType.GREATER_THAN, {"=": TokenType.GREATER_EQUAL}),
    "&": (TokenType.BIT_AND, {"&": TokenType.LOGICAL_AND, "=": TokenType.BIT_AND_ASSIGN}),
    "|": (TokenType.BIT_OR, {"|": TokenType.LOGICAL_OR, "=": TokenType.BIT_OR_ASSIGN}),
}

STRING_DELIMITERS = ('"', "'")


def lookup_identifier(text: str) -> TokenType:
    """Resolve identifier-shaped text to a keyword kind or IDENTIFIER."""
    return KEYWORDS.get(text, TokenType.IDENTIFIER)


def describe(token_type: Optional[TokenType]) -> str:
    """Human readable name of a token kind for diagnostics."""
    if token_type is None:
        return "nothing"
    return token_type.name
