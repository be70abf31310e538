"""Escaping primitives for identifiers and string literals.

Both escapers are pure: they return the encoded text together with any
failures found, and never raise for bad input.  A bad character contributes
no output but the scan continues, so every problem in the input is reported
at once.

Identifier forms (PostgreSQL)::

    lr2          ->  lr2               (already safe, emitted as-is)
    ro"les       ->  "ro""les"
    Users        ->  "Users"

String literal forms::

    dog          ->  'dog'
    C:\\tmp       ->  'C:\\tmp'          (plain form, backslash untouched)
    x<NL>b'z     ->  E'x\\nb\\'z'        (extended form)
"""

from __future__ import annotations

from typing import NamedTuple

from sqlbrick import failures
from sqlbrick.failures import Failure

#: Characters allowed in an identifier that is emitted without quotes.
SAFE_IDENTIFIER_CHARS: frozenset[str] = frozenset(
    "abcdefghijklmnopqrstuvwxyz0123456789_"
)

_ASCII_DIGITS = frozenset("0123456789")

#: Opener of a PostgreSQL extended (backslash-escaping) string literal.
EXTENDED_STRING_OPENER = "E'"

# Control characters rendered as two-character backslash escapes in both
# quoted identifiers and extended string literals.
_CONTROL_ESCAPES: dict[str, str] = {
    "\b": "\\b",
    "\f": "\\f",
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
}

_IDENTIFIER_ESCAPES: dict[str, str] = {'"': '""', **_CONTROL_ESCAPES}

_STRING_ESCAPES: dict[str, str] = {"\\": "\\\\", "'": "\\'", **_CONTROL_ESCAPES}

# Any of these forces the extended string form.
_EXTENDED_TRIGGERS: frozenset[str] = frozenset("\0'" + "".join(_CONTROL_ESCAPES))


class Escaped(NamedTuple):
    """Result of an escaping primitive."""

    text: str
    failures: tuple[Failure, ...] = ()


def needs_quoting(value: str) -> bool:
    """Return True when ``value`` must be double-quoted to be a safe identifier."""
    if value[:1] in _ASCII_DIGITS:
        return True
    return any(c not in SAFE_IDENTIFIER_CHARS for c in value)


def needs_extended_form(value: str) -> bool:
    """Return True when ``value`` contains a character forcing ``E'...'``."""
    return any(c in _EXTENDED_TRIGGERS for c in value)


def escape_identifier(value: str) -> Escaped:
    """Encode a table, column or schema name.

    Args:
        value: The raw identifier.

    Returns:
        The identifier, quoted only when needed, plus any failures.  An empty
        identifier yields no text and an ``empty identifier`` failure.
    """
    if not value:
        return Escaped("", (failures.empty_identifier(),))

    if not needs_quoting(value):
        return Escaped(value)

    found: list[Failure] = []
    parts = ['"']
    for c in value:
        if c == "\0":
            found.append(failures.null_character("string contains the null character"))
            continue
        parts.append(_IDENTIFIER_ESCAPES.get(c, c))
    parts.append('"')
    return Escaped("".join(parts), tuple(found))


def escape_string(value: str) -> Escaped:
    """Encode ``value`` as a SQL string literal.

    The plain ``'...'`` form is used unless a quote, NUL or control
    character is present; then the whole value is rewritten in the extended
    form, where backslashes are doubled too.
    """
    if not needs_extended_form(value):
        return Escaped(f"'{value}'")

    found: list[Failure] = []
    parts = [EXTENDED_STRING_OPENER]
    for c in value:
        if c == "\0":
            found.append(failures.null_character("Zero character in string"))
            continue
        parts.append(_STRING_ESCAPES.get(c, c))
    parts.append("'")
    return Escaped("".join(parts), tuple(found))
