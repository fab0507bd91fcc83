"""
Korelin Compiler Front End

Lexer, Pratt parser and syntax tree for the Korelin scripting language.

Architecture:
    korelin/
    ├── lexer/           # Tokenization and lexical analysis
    ├── parser/          # Syntax analysis, AST, printer and teardown
    ├── ownership.py     # Tracking of owned lexemes and nodes
    └── config.py        # Parser settings

License: MIT
"""

__version__ = "0.1.0"
__license__ = "MIT"

from .config import ParserConfig
from .ownership import OwnershipLedger, LedgerError
from .lexer import Lexer, tokenize_string
from .parser import Parser, ParseResult, parse_string, parse_file, format_ast, release_tree

__all__ = [
    # Core classes
    "Lexer",
    "Parser",
    "ParserConfig",
    "OwnershipLedger",
    "LedgerError",

    # Convenience entry points
    "tokenize_string",
    "parse_string",
    "parse_file",
    "format_ast",
    "release_tree",
    "ParseResult",

    # Version info
    "__version__",
    "__license__",
]
