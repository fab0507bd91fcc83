"""
Error handling for the Korelin parser.

Syntax errors are raised as ParseError inside a production and caught at
statement level, where the diagnostic is recorded and the parser
synchronizes to the next statement boundary. One malformed statement costs
one diagnostic, never the rest of the program.
"""

from typing import Optional, List, Union

from ..lexer.tokens import Token, TokenType, SourceLocation, describe
from ..lexer.errors import Diagnostic


class ParseError(Exception):
    """
    Exception raised when a production cannot be completed.

    Contains detailed diagnostic information for error reporting.
    """

    def __init__(
        self,
        message: str,
        location: SourceLocation,
        token: Optional[Token] = None,
        code: Optional[str] = None,
        help_text: Optional[str] = None,
        suggestions: Optional[List[str]] = None
    ):
        super().__init__(message)
        self.diagnostic = Diagnostic(
            message=message,
            location=location,
            severity="error",
            code=code,
            help_text=help_text,
            suggestions=suggestions
        )
        self.token = token

    @property
    def location(self) -> SourceLocation:
        return self.diagnostic.location

    @property
    def code(self) -> Optional[str]:
        return self.diagnostic.code

    def __str__(self) -> str:
        return str(self.diagnostic)


class ParseWarning:
    """
    Represents a parser warning that doesn't stop compilation.
    """

    def __init__(
        self,
        message: str,
        location: SourceLocation,
        token: Optional[Token] = None,
        code: Optional[str] = None,
        help_text: Optional[str] = None,
        suggestions: Optional[List[str]] = None
    ):
        self.diagnostic = Diagnostic(
            message=message,
            location=location,
            severity="warning",
            code=code,
            help_text=help_text,
            suggestions=suggestions
        )
        self.token = token

    @property
    def location(self) -> SourceLocation:
        return self.diagnostic.location

    def __str__(self) -> str:
        return str(self.diagnostic)


# Keywords that begin a statement; synchronization stops in front of them
STATEMENT_STARTERS = frozenset({
    TokenType.CLASS,
    TokenType.FUNC,
    TokenType.VAR,
    TokenType.LET,
    TokenType.FOR,
    TokenType.IF,
    TokenType.WHILE,
    TokenType.RETURN,
})


def suggest_missing_token(expected: TokenType) -> List[str]:
    """Suggest what token might be missing."""
    token_suggestions = {
        TokenType.SEMICOLON: ["Add a semicolon ';' to end the statement"],
        TokenType.RIGHT_PAREN: ["Add a closing parenthesis ')'"],
        TokenType.RIGHT_BRACKET: ["Add a closing bracket ']'"],
        TokenType.RIGHT_BRACE: ["Add a closing brace '}'"],
        TokenType.LEFT_PAREN: ["Add an opening parenthesis '('"],
        TokenType.LEFT_BRACE: ["Add an opening brace '{' to start a block"],
        TokenType.IDENTIFIER: ["Add a name here"],
        TokenType.ASSIGN: ["Add an assignment operator '='"],
    }
    return list(token_suggestions.get(expected, []))


# Common parser error codes for categorization
PARSER_ERROR_CODES = {
    "P001": "Unexpected token",
    "P004": "Unclosed delimiter",
    "P005": "Invalid expression",
    "P010": "Unexpected end of input",
    "P013": "Nesting too deep",
    "P014": "Resource exhaustion",
    "P015": "Loop jump outside a loop",
}


# Helper functions for creating common parser errors

def create_unexpected_token_error(expected: Union[TokenType, str], found: Token) -> ParseError:
    """Create an error for an unexpected token."""
    expected_str = describe(expected) if isinstance(expected, TokenType) else expected

    if found.type is TokenType.EOF:
        return create_unexpected_eof_error(expected_str, found.location)

    suggestions = suggest_missing_token(expected) if isinstance(expected, TokenType) else []
    return ParseError(
        message=f"Expected {expected_str}, found {describe(found.type)} '{found.lexeme}'",
        location=found.location,
        token=found,
        code="P001",
        help_text=f"The parser expected to see {expected_str} at this position.",
        suggestions=suggestions or None
    )


def create_unclosed_delimiter_error(delimiter: str, open_location: SourceLocation,
                                    current_location: SourceLocation) -> ParseError:
    """Create an error for an unclosed delimiter."""
    closing_delimiters = {
        "(": ")",
        "[": "]",
        "{": "}",
    }
    closing = closing_delimiters.get(delimiter, delimiter)

    return ParseError(
        message=f"Unclosed delimiter '{delimiter}'",
        location=current_location,
        code="P004",
        help_text=f"The opening '{delimiter}' at {open_location} was never closed.",
        suggestions=[f"Add a closing '{closing}'"]
    )


def create_invalid_expression_error(token: Token) -> ParseError:
    """Create an error for a token that cannot start an expression."""
    if token.type is TokenType.EOF:
        return create_unexpected_eof_error("an expression", token.location)

    return ParseError(
        message=f"Invalid expression: no prefix parse function for {describe(token.type)} '{token.lexeme}'",
        location=token.location,
        token=token,
        code="P005",
        help_text=f"'{token.lexeme}' cannot start an expression.",
        suggestions=["Check the expression syntax", "Ensure all operators have operands"]
    )


def create_invalid_integer_error(token: Token) -> ParseError:
    return ParseError(
        message=f"Invalid expression: could not parse {token.lexeme!r} as an integer",
        location=token.location,
        token=token,
        code="P005",
    )


def create_unexpected_eof_error(expected: str, location: SourceLocation) -> ParseError:
    """Create an error for unexpected end of input."""
    return ParseError(
        message=f"Unexpected end of input, expected {expected}",
        location=location,
        code="P010",
        help_text=f"The parser reached the end of the file while expecting {expected}.",
        suggestions=[f"Add the missing {expected}", "Check for incomplete statements"]
    )


def create_nesting_too_deep_error(limit: int, token: Token) -> ParseError:
    return ParseError(
        message=f"Nesting too deep: more than {limit} levels",
        location=token.location,
        token=token,
        code="P013",
        help_text="Expressions and blocks are nested deeper than the parser allows.",
        suggestions=["Split the expression into intermediate variables",
                     "Raise ParserConfig.max_nesting_depth"]
    )


def create_resource_exhaustion_error(location: SourceLocation) -> ParseError:
    return ParseError(
        message="Out of memory while building the syntax tree",
        location=location,
        code="P014",
        help_text="The partial tree was released and parsing stopped.",
    )


def create_jump_outside_loop_warning(token: Token) -> ParseWarning:
    """Warning for break/continue with no enclosing loop body."""
    return ParseWarning(
        message=f"'{token.lexeme}' outside of a loop",
        location=token.location,
        token=token,
        code="P015",
        help_text=f"'{token.lexeme}' only has an effect inside a while or for body.",
    )


class LexicalTokenError(ParseError):
    """
    A production ran into an ERROR token.

    The lexer has already reported the character, so the parser recovers
    from this error without recording a second diagnostic.
    """

    def __init__(self, token: Token):
        super().__init__(
            message=f"Statement abandoned at invalid character '{token.lexeme}'",
            location=token.location,
            token=token,
        )
