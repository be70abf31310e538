"""The Fragment accumulator.

A :class:`Fragment` pairs a text buffer with a list of recorded failures.
Composition methods mutate the fragment in place and return it, so calls
chain fluently::

    query = (
        sql("SELECT {cols} FROM {table} WHERE {cond}")
        .format([
            ("cols", join(", ", [identifier("id"), identifier("Name")])),
            ("table", identifier("users")),
            ("cond", and_([sql("active"), sql("age > ").push(integer(18))], True)),
        ])
        .build()
    )

Failure rules
-------------
* Failures are only ever appended, never cleared or replaced.
* Recording a failure never stops accumulation; the rest of the input is
  still processed so one ``build()`` reports every problem.
* An injected or merged failure also writes the poison marker into the
  buffer, so printing a broken fragment without ``build()`` cannot pass for
  valid SQL.
* ``build()`` consumes the fragment; using it afterwards raises
  :class:`~sqlbrick.errors.FragmentConsumedError`.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping, Sequence
from typing import Union

from sqlbrick import failures as _failures
from sqlbrick.errors import FragmentBuildError, FragmentConsumedError
from sqlbrick.failures import Failure
from sqlbrick.settings import get_settings
from sqlbrick.template import substitute

logger = logging.getLogger(__name__)

#: Named substitutions accepted by :meth:`Fragment.format`.
Substitutions = Union[Sequence[tuple[str, "Fragment"]], Mapping[str, "Fragment"]]


class Fragment:
    """Accumulated SQL text plus sticky failure state.

    Normally created through the constructors in :mod:`sqlbrick.constructors`
    rather than directly.

    Args:
        text: Initial buffer content, trusted as-is.
        failures: Failures to record up front (no poison marker is written
            for these; the caller already decided what text to emit).
    """

    __slots__ = ("_parts", "_failures", "_consumed")

    def __init__(self, text: str = "", failures: Iterable[Failure] = ()) -> None:
        self._parts: list[str] = [text] if text else []
        self._failures: list[Failure] = []
        self._consumed = False
        for failure in failures:
            self._record(failure)

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    @property
    def buffer(self) -> str:
        """The raw accumulated text, including any poison markers."""
        return "".join(self._parts)

    @property
    def failures(self) -> tuple[Failure, ...]:
        """Recorded failures, in encounter order."""
        return tuple(self._failures)

    @property
    def failure(self) -> str | None:
        """The aggregated failure message, or ``None`` when clean."""
        if not self._failures:
            return None
        return ", ".join(f.message for f in self._failures)

    @property
    def failed(self) -> bool:
        return bool(self._failures)

    @property
    def consumed(self) -> bool:
        return self._consumed

    # ------------------------------------------------------------------
    # Composition
    # ------------------------------------------------------------------

    def fail(self, message: str) -> Fragment:
        """Record an explicit failure and poison the buffer."""
        return self.fail_with(_failures.explicit(message))

    def fail_with(self, failure: Failure) -> Fragment:
        """Record a typed failure and poison the buffer."""
        self._ensure_live("fail")
        self._record(failure)
        self._poison()
        return self

    def push(self, other: Fragment) -> Fragment:
        """Append ``other``'s text and merge its failures into this fragment."""
        self._ensure_live("push")
        self._check_operand(other)
        if other._failures:
            for failure in other._failures:
                self._record(failure)
            self._poison()
        self._parts.extend(other._parts)
        return self

    def append_join(self, delimiter: Fragment, items: Iterable[Fragment]) -> Fragment:
        """Push each of ``items`` with ``delimiter`` between successive ones."""
        self._ensure_live("append_join")
        first = True
        for item in items:
            if not first:
                self.push(delimiter)
            self.push(item)
            first = False
        return self

    def format(self, values: Substitutions) -> Fragment:
        """Replace ``{name}`` placeholders in the buffer with named fragments.

        The current buffer is treated as the template and replaced wholesale
        by the substituted text.  See :mod:`sqlbrick.template` for the
        placeholder syntax.

        Args:
            values: ``(name, fragment)`` pairs, searched in order (the first
                pair with a matching name wins), or a mapping.
        """
        self._ensure_live("format")
        values = list(values.items()) if isinstance(values, Mapping) else list(values)
        for _, fragment in values:
            self._check_operand(fragment)

        text, found = substitute(self.buffer, values)
        self._parts = [text] if text else []
        for failure in found:
            self._record(failure)
        return self

    # ------------------------------------------------------------------
    # Terminal
    # ------------------------------------------------------------------

    def build(self) -> str:
        """Finish the fragment and return its SQL text.

        The fragment is consumed whether or not the build succeeds.

        Raises:
            FragmentBuildError: If any failure was recorded on this fragment
                or on any fragment merged into it.
        """
        self._ensure_live("build")
        self._consumed = True
        return self._finish()

    def render(self) -> str:
        """Return the SQL text without consuming the fragment.

        Raises:
            FragmentBuildError: Under the same rule as :meth:`build`.
        """
        self._ensure_live("render")
        return self._finish()

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _finish(self) -> str:
        if self._failures:
            raise FragmentBuildError(tuple(self._failures), self.buffer)
        return self.buffer

    def _record(self, failure: Failure) -> None:
        self._failures.append(failure)
        if get_settings().log_failures:
            logger.debug("fragment failure recorded: %s (%s)", failure.message, failure.code.value)

    def _poison(self) -> None:
        self._parts.append(get_settings().poison_marker)

    def _ensure_live(self, operation: str) -> None:
        if self._consumed:
            raise FragmentConsumedError(operation)

    def _check_operand(self, other: object) -> None:
        if not isinstance(other, Fragment):
            raise TypeError(
                f"Expected a Fragment, got {type(other).__name__}. "
                "Wrap trusted SQL with sql() or encode values with a typed constructor."
            )
        if other is self:
            raise ValueError("A fragment cannot be composed into itself.")
        if other._consumed:
            raise FragmentConsumedError("push")

    # ------------------------------------------------------------------
    # Dunder
    # ------------------------------------------------------------------

    def __str__(self) -> str:
        return self.buffer

    def __repr__(self) -> str:
        if self._failures:
            return f"Fragment({self.buffer!r}, failure={self.failure!r})"
        return f"Fragment({self.buffer!r})"
