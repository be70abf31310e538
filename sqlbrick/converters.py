"""Identifier fragments from SQLAlchemy table metadata.

Install the optional dependency before using this module::

    pip install "sqlbrick[sqlalchemy]"

Example::

    from sqlalchemy import Column, Integer, MetaData, String, Table
    from sqlbrick import join, sql
    from sqlbrick.converters import column_identifiers, table_identifier

    users = Table("users", MetaData(), Column("id", Integer), Column("Name", String),
                  schema="app")

    sql("SELECT {cols} FROM {table}").format({
        "cols": join(", ", column_identifiers(users)),
        "table": table_identifier(users),
    }).build()
    # SELECT id, "Name" FROM app.users
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlbrick.constructors import identifier, qualified_identifier
from sqlbrick.fragment import Fragment

if TYPE_CHECKING:
    from sqlalchemy import Table


def table_identifier(table: Table) -> Fragment:
    """Return the table name, qualified with its schema when it has one."""
    if table.schema:
        return qualified_identifier(table.schema, table.name)
    return identifier(table.name)


def column_identifiers(
    table: Table,
    *,
    include: list[str] | None = None,
    qualify: bool = False,
) -> list[Fragment]:
    """Return one identifier fragment per column, in declaration order.

    Args:
        table: The SQLAlchemy table.
        include: Optional allowlist of column names.  Names not on the table
            are ignored.
        qualify: Prefix each column with the table name (``users.id``).

    Returns:
        Identifier fragments ready to be joined.
    """
    wanted = set(include) if include is not None else None
    result: list[Fragment] = []
    for column in table.columns:
        if wanted is not None and column.name not in wanted:
            continue
        if qualify:
            result.append(qualified_identifier(table.name, column.name))
        else:
            result.append(identifier(column.name))
    return result
