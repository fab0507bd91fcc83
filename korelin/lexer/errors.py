"""
Error handling for the Korelin lexer.

Lexical problems never stop scanning. They are recorded as diagnostics on
the lexer's side channel while the scanner keeps producing tokens, so the
parser can decide what to do with the ERROR tokens it sees.
"""

from typing import Optional, List
from dataclasses import dataclass

from .tokens import SourceLocation


@dataclass
class Diagnostic:
    """Base record for diagnostics (errors, warnings, info)."""
    message: str
    location: SourceLocation
    severity: str  # "error", "warning", "info"
    code: Optional[str] = None
    help_text: Optional[str] = None
    suggestions: Optional[List[str]] = None

    def __str__(self) -> str:
        severity_prefix = self.severity.upper()
        code = f"[{self.code}] " if self.code else ""
        result = f"{severity_prefix}: {code}{self.message}\n"
        result += f"  --> {self.location}\n"

        if self.help_text:
            result += f"  help: {self.help_text}\n"

        if self.suggestions:
            result += "  suggestions:\n"
            for suggestion in self.suggestions:
                result += f"    - {suggestion}\n"

        return result


class LexerError(Exception):
    """
    A lexical error.

    Recorded by the lexer rather than raised; the exception base lets
    callers that want to stop on the first problem simply raise it.
    """

    def __init__(
        self,
        message: str,
        location: SourceLocation,
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

    @property
    def location(self) -> SourceLocation:
        return self.diagnostic.location

    def __str__(self) -> str:
        return str(self.diagnostic)


class LexerWarning:
    """
    Represents a lexer warning that doesn't stop compilation.
    """

    def __init__(
        self,
        message: str,
        location: SourceLocation,
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

    @property
    def location(self) -> SourceLocation:
        return self.diagnostic.location

    def __str__(self) -> str:
        return str(self.diagnostic)


# Common error codes for categorization
ERROR_CODES = {
    "L001": "Invalid character",
    "L002": "Unterminated string literal",
}


def create_invalid_character_error(char: str, location: SourceLocation) -> LexerError:
    """Create an error for a character that starts no token."""
    if char.isprintable():
        help_text = f"The character '{char}' is not valid in Korelin source code."
    else:
        help_text = f"Non-printable character (U+{ord(char):04X}) is not allowed."

    suggestions = []
    if char == "~":
        suggestions.append("Bitwise not is reserved but not supported yet")
    elif char == ".":
        suggestions.append("Member access and floating-point literals are not supported yet")

    return LexerError(
        message=f"Invalid character: '{char}'",
        location=location,
        code="L001",
        help_text=help_text,
        suggestions=suggestions or None
    )


def create_unterminated_string_error(quote: str, location: SourceLocation) -> LexerWarning:
    """Create a warning for a string literal that runs to the end of input."""
    return LexerWarning(
        message="Unterminated string literal",
        location=location,
        code="L002",
        help_text=f"String literals must be closed with a matching {quote} quote; "
                  f"this one was ended at the end of input.",
        suggestions=[f"Add a closing {quote} quote", "Check for an escaped closing quote"]
    )
