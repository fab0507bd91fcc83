"""
Korelin Lexer Package

Implements the lexical analyzer (tokenizer) for the Korelin language.

Key Features:
- Pull-based scanning, one token per call
- One-character lookahead for two-character operators
- Keyword table with contextual type-name keywords
- Static vs owned tokens, owned lexemes tracked by the ownership ledger
- Error tokens instead of aborts on unrecognized characters
"""

from .tokens import (
    Token, StaticToken, OwnedToken, TokenType, SourceLocation,
    KEYWORDS, lookup_identifier
)
from .lexer import Lexer, tokenize_string
from .errors import Diagnostic, LexerError, LexerWarning

__all__ = [
    "Lexer",
    "tokenize_string",
    "Token",
    "StaticToken",
    "OwnedToken",
    "TokenType",
    "SourceLocation",
    "KEYWORDS",
    "lookup_identifier",
    "Diagnostic",
    "LexerError",
    "LexerWarning",
]
