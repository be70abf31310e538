"""Fragment combinators: joins, boolean clauses and IN lists.

Every combinator builds on :meth:`Fragment.push`, so a failure anywhere in
the inputs carries through to the result.

Empty inputs never produce broken SQL: ``and_([], True)`` is ``TRUE`` and
``in_list(expr, [], False)`` is ``FALSE`` rather than ``()`` or ``IN ()``.
"""

from __future__ import annotations

from collections.abc import Iterable

from sqlbrick.constructors import boolean, sql
from sqlbrick.fragment import Fragment

AND_DELIMITER = " AND\n"
OR_DELIMITER = " OR\n"
LIST_DELIMITER = ", "


def join(delimiter: Fragment | str, items: Iterable[Fragment]) -> Fragment:
    """Join ``items`` into a new fragment with ``delimiter`` between them.

    A ``str`` delimiter is trusted SQL.
    """
    return Fragment().append_join(_as_fragment(delimiter), items)


def clause(
    delimiter: Fragment | str,
    items: Iterable[Fragment],
    on_empty: bool,
) -> Fragment:
    """Parenthesised, delimiter-joined boolean expression.

    Args:
        delimiter: Placed between items, e.g. ``" AND\\n"``.
        items: The sub-expressions.
        on_empty: Literal returned when ``items`` is empty.

    Returns:
        ``(\\n<a><delimiter><b>\\n)`` or ``TRUE``/``FALSE``.
    """
    items = list(items)
    if not items:
        return boolean(on_empty)
    result = Fragment("(\n")
    result.append_join(_as_fragment(delimiter), items)
    result.push(sql("\n)"))
    return result


def and_(items: Iterable[Fragment], on_empty: bool) -> Fragment:
    """Conjunction of ``items``; ``on_empty`` when there are none."""
    return clause(AND_DELIMITER, items, on_empty)


def or_(items: Iterable[Fragment], on_empty: bool) -> Fragment:
    """Disjunction of ``items``; ``on_empty`` when there are none."""
    return clause(OR_DELIMITER, items, on_empty)


def in_list(expr: Fragment, items: Iterable[Fragment], on_empty: bool) -> Fragment:
    """``expr IN (a, b, ...)``, or ``on_empty`` when there are no items.

    An empty ``IN ()`` is a syntax error; the literal keeps the enclosing
    predicate valid (``FALSE`` is the usual choice, matching nothing).
    """
    items = list(items)
    if not items:
        return boolean(on_empty)
    result = Fragment().push(expr)
    result.push(sql(" IN ("))
    result.append_join(sql(LIST_DELIMITER), items)
    result.push(sql(")"))
    return result


def _as_fragment(delimiter: Fragment | str) -> Fragment:
    if isinstance(delimiter, str):
        return sql(delimiter)
    return delimiter
