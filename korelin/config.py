"""
Parser configuration for the Korelin front end.
"""

from dataclasses import dataclass


@dataclass
class ParserConfig:
    """Knobs for a single parse."""
    filename: str = "<input>"

    # Combined nesting of expressions and blocks before P013 is reported.
    # Each level costs a handful of Python frames, so stay well under the
    # interpreter recursion limit.
    max_nesting_depth: int = 200

    # Record every owned lexeme and node in the ownership ledger
    track_ownership: bool = True

    # After a failed statement inside a block, skip to the next statement
    # boundary (stopping before '}') instead of retrying one token later
    recover_inside_blocks: bool = True

    def __post_init__(self):
        if self.max_nesting_depth < 1:
            raise ValueError("max_nesting_depth must be at least 1")
