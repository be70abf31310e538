"""Custom exception hierarchy for sqlbrick.

All public errors inherit from SqlBrickError so callers can catch the base
class for any sqlbrick-specific failure.

Encoding problems (empty identifiers, NUL characters, over-long varchars,
missing template variables) are *not* raised while a fragment is being
composed; they are recorded on the fragment and surface here only when the
caller finishes it with ``build()`` or ``render()``.
"""
from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from sqlbrick.failures import Failure


class SqlBrickError(Exception):
    """Base exception for all sqlbrick errors."""


class FragmentBuildError(SqlBrickError):
    """Raised when a fragment carrying recorded failures is built.

    The message is every recorded reason, comma-joined, in the order the
    reasons were encountered anywhere in the composition tree.

    Args:
        failures: The recorded failures, in encounter order.
        sql: The poisoned buffer content, kept for debugging only.
    """

    def __init__(self, failures: tuple[Failure, ...], sql: str = "") -> None:
        super().__init__(", ".join(f.message for f in failures))
        self.failures = failures
        self.sql = sql

    @property
    def codes(self) -> list[str]:
        """Machine-readable failure codes, in encounter order."""
        return [f.code.value for f in self.failures]

    def to_error_response(self) -> dict[str, Any]:
        """Returns a structured error response suitable for logging or APIs."""
        return {
            "error": "FRAGMENT_BUILD_FAILED",
            "message": str(self),
            "details": {
                "failures": [
                    {"code": f.code.value, "message": f.message}
                    for f in self.failures
                ],
            },
        }


class FragmentConsumedError(SqlBrickError):
    """Raised when a fragment is used after ``build()`` has consumed it.

    Args:
        operation: The method that was called on the consumed fragment.
    """

    def __init__(self, operation: str) -> None:
        super().__init__(
            f"Fragment was already consumed by build(); cannot call {operation}()."
        )
        self.operation = operation
