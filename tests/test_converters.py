"""Unit tests for sqlbrick.converters (SQLAlchemy table metadata)."""

from __future__ import annotations

from sqlalchemy import Column, Integer, MetaData, String, Table

from sqlbrick.combinators import join
from sqlbrick.constructors import sql
from sqlbrick.converters import column_identifiers, table_identifier


def _users(schema: str | None = None) -> Table:
    return Table(
        "users",
        MetaData(),
        Column("id", Integer, primary_key=True),
        Column("Name", String),
        Column("email", String),
        schema=schema,
    )


def test_table_identifier_without_schema():
    assert table_identifier(_users()).build() == "users"


def test_table_identifier_with_schema():
    assert table_identifier(_users("Reporting")).build() == '"Reporting".users'


def test_column_identifiers_in_declaration_order():
    cols = column_identifiers(_users())
    assert [c.build() for c in cols] == ["id", '"Name"', "email"]


def test_column_identifiers_include_filter():
    cols = column_identifiers(_users(), include=["email", "id", "missing"])
    assert [c.build() for c in cols] == ["id", "email"]


def test_column_identifiers_qualified():
    cols = column_identifiers(_users(), include=["id"], qualify=True)
    assert [c.build() for c in cols] == ["users.id"]


def test_select_from_table_metadata():
    table = _users("app")
    statement = sql("SELECT {cols} FROM {table}").format(
        {
            "cols": join(", ", column_identifiers(table)),
            "table": table_identifier(table),
        }
    )
    assert statement.build() == 'SELECT id, "Name", email FROM app.users'
