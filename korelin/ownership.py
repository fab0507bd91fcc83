"""
Ownership tracking for scanned lexemes and AST nodes.

Every lexeme the scanner allocates and every node the parser builds is
acquired here, and must be released exactly once: tokens by the parser's
advance step, node copies and nodes by tree teardown. The ledger keeps a
strong reference to each live object so identities cannot be recycled while
something is still outstanding, which makes leaks and double releases
observable in tests.
"""

import logging
from collections import Counter
from typing import Any, Dict, List, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


class LedgerError(RuntimeError):
    """Raised when an object is acquired twice, released twice, or never acquired."""


class OwnershipLedger:
    """
    Records acquisitions and releases keyed by object identity.

    A disabled ledger accepts every call and records nothing.
    """

    def __init__(self, enabled: bool = True):
        self.enabled = enabled
        self.acquired = 0
        self.released = 0
        self._live: Dict[int, Any] = {}

    def acquire(self, obj: T) -> T:
        """Start tracking ``obj`` and return it unchanged."""
        if not self.enabled:
            return obj
        key = id(obj)
        if key in self._live:
            raise LedgerError(f"{_describe(obj)} acquired twice")
        self._live[key] = obj
        self.acquired += 1
        return obj

    def release(self, obj: Any) -> None:
        """Stop tracking ``obj``; it must be live."""
        if not self.enabled:
            return
        if self._live.pop(id(obj), None) is None:
            raise LedgerError(f"{_describe(obj)} released but not live (double release?)")
        self.released += 1

    def is_live(self, obj: Any) -> bool:
        return id(obj) in self._live

    def outstanding(self) -> int:
        """Number of objects acquired but not yet released."""
        return len(self._live)

    def live_objects(self) -> List[Any]:
        return list(self._live.values())

    def summary(self) -> Dict[str, int]:
        """Count of outstanding objects per class name."""
        return dict(Counter(type(obj).__name__ for obj in self._live.values()))

    def log_leaks(self) -> None:
        if self._live:
            logger.warning("%d objects still owned: %s", len(self._live), self.summary())

    def __repr__(self) -> str:
        return (f"OwnershipLedger(enabled={self.enabled}, acquired={self.acquired}, "
                f"released={self.released}, outstanding={self.outstanding()})")


def _describe(obj: Any) -> str:
    return f"{type(obj).__name__} at 0x{id(obj):x}"
