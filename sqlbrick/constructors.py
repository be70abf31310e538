"""Typed constructors producing fresh fragments.

Value encoders
--------------
``identifier`` / ``qualified_identifier``
    Table, column and schema names (quoted only when needed).
``text`` / ``varchar``
    String literals; ``varchar`` additionally enforces a character limit.
``smallint`` / ``integer`` / ``bigint`` / ``real`` / ``double`` / ``boolean``
    Rendered with Python's own number formatting.  Their text cannot contain
    SQL metacharacters, so nothing is escaped; values outside the column
    type's range are recorded as failures instead.
``timestamp``
    The ISO-like text form of a ``datetime``, escaped as a string literal.
``literal``
    Picks one of the above from the Python type of the value.

Trusted SQL
-----------
``sql`` passes its argument through untouched.  It is the trust boundary:
use it only for keywords, operators and skeleton text written by the
application, never for values that came from outside.
"""

from __future__ import annotations

import math
from datetime import date, datetime

from sqlbrick import failures
from sqlbrick.escape import escape_identifier, escape_string
from sqlbrick.fragment import Fragment

# Signed integer bounds of the SQL integer column types.
_SMALLINT_RANGE = (-(2**15), 2**15 - 1)
_INTEGER_RANGE = (-(2**31), 2**31 - 1)
_BIGINT_RANGE = (-(2**63), 2**63 - 1)


# ---------------------------------------------------------------------------
# Trusted SQL
# ---------------------------------------------------------------------------


def sql(value: str) -> Fragment:
    """Wrap trusted SQL text; no validation or escaping is applied."""
    _require(value, str, "sql")
    return Fragment(value)


# ---------------------------------------------------------------------------
# Identifiers
# ---------------------------------------------------------------------------


def identifier(value: str) -> Fragment:
    """Encode a table, column or schema name."""
    _require(value, str, "identifier")
    return Fragment(*escape_identifier(value))


def qualified_identifier(*parts: str) -> Fragment:
    """Encode a dotted name such as ``schema.table`` or ``table.column``.

    Each part is escaped on its own; an empty part is an ``empty identifier``
    failure like any other.
    """
    if not parts:
        return Fragment(failures=[failures.empty_identifier()])
    return Fragment().append_join(Fragment("."), (identifier(p) for p in parts))


# ---------------------------------------------------------------------------
# Strings
# ---------------------------------------------------------------------------


def text(value: str) -> Fragment:
    """Encode an unbounded string literal."""
    _require(value, str, "text")
    return Fragment(*escape_string(value))


def varchar(value: str, max_length: int) -> Fragment:
    """Encode a string literal of at most ``max_length`` characters.

    Length is counted in characters, not bytes.  An over-long value is not
    encoded at all; the fragment carries only the failure.
    """
    _require(value, str, "varchar")
    size = len(value)
    if size > max_length:
        return Fragment().fail_with(failures.varchar_too_long(size, max_length))
    return Fragment(*escape_string(value))


# ---------------------------------------------------------------------------
# Numbers and booleans
# ---------------------------------------------------------------------------


def smallint(value: int) -> Fragment:
    return _bounded_int(value, "smallint", _SMALLINT_RANGE)


def integer(value: int) -> Fragment:
    return _bounded_int(value, "integer", _INTEGER_RANGE)


#: Alias of :func:`integer` (SQL ``INT``).
int_ = integer


def bigint(value: int) -> Fragment:
    return _bounded_int(value, "bigint", _BIGINT_RANGE)


def real(value: float) -> Fragment:
    return _finite_float(value, "real")


def double(value: float) -> Fragment:
    return _finite_float(value, "double")


def boolean(value: bool) -> Fragment:
    _require(value, bool, "boolean")
    return Fragment("TRUE" if value else "FALSE")


# ---------------------------------------------------------------------------
# Temporal
# ---------------------------------------------------------------------------


def timestamp(value: datetime) -> Fragment:
    """Encode a ``datetime`` as a string literal.

    The text form is ``YYYY-MM-DD HH:MM:SS`` with microseconds and UTC
    offset appended only when present.  It is escaped like any other string.
    """
    _require(value, datetime, "timestamp")
    return Fragment(*escape_string(value.isoformat(sep=" ")))


def date_(value: date) -> Fragment:
    """Encode a ``date`` as a ``YYYY-MM-DD`` string literal."""
    if isinstance(value, datetime) or not isinstance(value, date):
        raise TypeError(f"date_() expects a date, got {type(value).__name__}.")
    return Fragment(*escape_string(value.isoformat()))


# ---------------------------------------------------------------------------
# Dispatch
# ---------------------------------------------------------------------------


def literal(value: object) -> Fragment:
    """Encode a Python value with the constructor matching its type.

    ``None`` becomes ``NULL``, ``bool`` a boolean, ``int`` a bigint,
    ``float`` a double, ``str`` an unbounded text literal, ``datetime`` a
    timestamp and ``date`` a date literal.  A :class:`Fragment` is returned
    unchanged.

    Raises:
        TypeError: For any other type.
    """
    if value is None:
        return Fragment("NULL")
    if isinstance(value, Fragment):
        return value
    if isinstance(value, bool):
        return boolean(value)
    if isinstance(value, int):
        return bigint(value)
    if isinstance(value, float):
        return double(value)
    if isinstance(value, str):
        return text(value)
    if isinstance(value, datetime):
        return timestamp(value)
    if isinstance(value, date):
        return date_(value)
    raise TypeError(f"No SQL literal encoding for {type(value).__name__}.")


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _require(value: object, expected: type, constructor: str) -> None:
    if not isinstance(value, expected):
        raise TypeError(
            f"{constructor}() expects {expected.__name__}, got {type(value).__name__}."
        )


def _bounded_int(value: int, kind: str, bounds: tuple[int, int]) -> Fragment:
    # bool is an int subclass but is never a valid integer literal here.
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"{kind}() expects int, got {type(value).__name__}.")
    low, high = bounds
    if not low <= value <= high:
        return Fragment().fail_with(failures.out_of_range(kind, value))
    return Fragment(str(value))


def _finite_float(value: float, kind: str) -> Fragment:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise TypeError(f"{kind}() expects float, got {type(value).__name__}.")
    value = float(value)
    if not math.isfinite(value):
        return Fragment().fail_with(failures.non_finite(kind, value))
    return Fragment(repr(value))
