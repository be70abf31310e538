"""Placeholder substitution over literal SQL skeletons.

Template syntax
---------------
``{name}``
    Replaced by the text of the first fragment supplied under ``name``.
    Later pairs with the same name are never reached.
``\\{``
    A literal ``{``.  This is the only escape sequence; any other backslash
    is copied through unchanged.

Everything else is copied verbatim.  An unknown name records a
``missing variable`` failure and leaves ``<name> <- VARIABLE NOT FOUND`` in
the output so the broken statement can still be inspected.  A ``{`` with no
closing ``}`` records an ``unterminated placeholder`` failure and the rest of
the template is copied as-is.

The token pattern is compiled on first use and shared read-only afterwards.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Sequence
from functools import lru_cache
from typing import TYPE_CHECKING

from sqlbrick import failures
from sqlbrick.failures import Failure
from sqlbrick.settings import get_settings

if TYPE_CHECKING:
    from sqlbrick.fragment import Fragment

logger = logging.getLogger(__name__)

_TOKEN_PATTERN = r"""
    (?P<escape>\\\{)
  | (?P<placeholder>\{(?P<name>[^}]*)\})
  | (?P<unterminated>\{[^}]*\Z)
  | (?P<literal>(?:[^{\\]|\\(?!\{))+)
"""


@lru_cache(maxsize=None)
def _token_regex() -> re.Pattern[str]:
    return re.compile(_TOKEN_PATTERN, re.VERBOSE | re.DOTALL)


def placeholders(template: str) -> list[str]:
    """Return the placeholder names in ``template``, in order of appearance."""
    return [
        m.group("name")
        for m in _token_regex().finditer(template)
        if m.group("placeholder") is not None
    ]


def substitute(
    template: str,
    values: Sequence[tuple[str, Fragment]],
) -> tuple[str, tuple[Failure, ...]]:
    """Expand ``template`` with the named fragments in ``values``.

    Args:
        template: Trusted SQL skeleton text containing placeholders.
        values: ``(name, fragment)`` pairs, searched first to last.

    Returns:
        The substituted text and every failure met along the way: those of
        the substituted fragments plus missing or unterminated placeholders,
        in encounter order.
    """
    settings = get_settings()
    parts: list[str] = []
    found: list[Failure] = []

    for match in _token_regex().finditer(template):
        if match.group("escape") is not None:
            parts.append("{")
        elif match.group("placeholder") is not None:
            name = match.group("name")
            fragment = _lookup(values, name)
            if fragment is None:
                found.append(failures.missing_variable(name))
                parts.append(settings.poison_marker)
                parts.append(f"{name}{settings.missing_variable_notice}")
                if settings.log_failures:
                    logger.warning("template variable not found: %r", name)
            else:
                if fragment.failed:
                    found.extend(fragment.failures)
                    parts.append(settings.poison_marker)
                parts.append(fragment.buffer)
        elif match.group("unterminated") is not None:
            found.append(failures.unterminated_placeholder(match.group()))
            parts.append(settings.poison_marker)
            parts.append(match.group())
            if settings.log_failures:
                logger.warning("unterminated template placeholder at offset %d", match.start())
        else:
            parts.append(match.group())

    return "".join(parts), tuple(found)


def _lookup(values: Sequence[tuple[str, Fragment]], name: str) -> Fragment | None:
    for candidate, fragment in values:
        if candidate == name:
            return fragment
    return None
