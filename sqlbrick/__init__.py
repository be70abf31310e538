"""sqlbrick – injection-safe SQL fragments.

Encode values, don't concatenate them.

Public API
----------
Typed constructors
    ``identifier``, ``qualified_identifier``, ``text``, ``varchar``,
    ``smallint``, ``integer``, ``int_``, ``bigint``, ``real``, ``double``,
    ``boolean``, ``timestamp``, ``date_``, ``literal`` and the trusted
    ``sql`` pass-through.

Combinators
    ``join``, ``clause``, ``and_``, ``or_``, ``in_list``.

Templates
    ``Fragment.format`` substitutes ``{name}`` placeholders::

        import sqlbrick
        from sqlbrick import identifier, sql, text

        statement = (
            sql("SELECT {col} FROM {table} WHERE name = {name}")
            .format([
                ("col", identifier("id")),
                ("table", identifier("Users")),
                ("name", text("O'Brien")),
            ])
            .build()
        )
        # SELECT id FROM "Users" WHERE name = E'O\\'Brien'

Failures never raise while a fragment is composed.  They accumulate and are
reported together by ``build()`` as a :class:`FragmentBuildError`.

Configuration
-------------
``configure`` / ``get_settings`` / ``reset_settings`` control the diagnostic
text written into broken fragments and whether failures are logged.
"""

from __future__ import annotations

from sqlbrick.combinators import and_, clause, in_list, join, or_
from sqlbrick.constructors import (
    bigint,
    boolean,
    date_,
    double,
    identifier,
    int_,
    integer,
    literal,
    qualified_identifier,
    real,
    smallint,
    sql,
    text,
    timestamp,
    varchar,
)
from sqlbrick.errors import FragmentBuildError, FragmentConsumedError, SqlBrickError
from sqlbrick.escape import escape_identifier, escape_string
from sqlbrick.failures import Failure, FailureCode
from sqlbrick.fragment import Fragment
from sqlbrick.settings import FragmentSettings, configure, get_settings, reset_settings
from sqlbrick.template import placeholders

__all__ = [
    # Core type
    "Fragment",
    # Constructors
    "sql",
    "identifier",
    "qualified_identifier",
    "text",
    "varchar",
    "smallint",
    "integer",
    "int_",
    "bigint",
    "real",
    "double",
    "boolean",
    "timestamp",
    "date_",
    "literal",
    # Combinators
    "join",
    "clause",
    "and_",
    "or_",
    "in_list",
    # Templates
    "placeholders",
    # Escaping primitives
    "escape_identifier",
    "escape_string",
    # Configuration
    "FragmentSettings",
    "configure",
    "get_settings",
    "reset_settings",
    # Failures and errors
    "Failure",
    "FailureCode",
    "SqlBrickError",
    "FragmentBuildError",
    "FragmentConsumedError",
]
