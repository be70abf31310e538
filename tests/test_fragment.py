"""Unit tests for the Fragment value model and terminal build."""

from __future__ import annotations

import logging

import pytest

from sqlbrick.constructors import identifier, integer, sql, text, varchar
from sqlbrick.errors import FragmentBuildError, FragmentConsumedError
from sqlbrick.failures import FailureCode
from sqlbrick.fragment import Fragment


def test_new_fragment_is_clean():
    frag = Fragment()
    assert frag.buffer == ""
    assert frag.failure is None
    assert not frag.failed
    assert frag.build() == ""


def test_push_appends_text():
    frag = sql("SELECT ").push(identifier("id")).push(sql(" FROM ")).push(identifier("t"))
    assert frag.build() == "SELECT id FROM t"


def test_push_returns_self():
    frag = sql("a")
    assert frag.push(sql("b")) is frag


def test_fail_poisons_buffer(poison):
    frag = sql("SELECT 1").fail("not allowed")
    assert frag.failure == "not allowed"
    assert frag.failures[0].code is FailureCode.EXPLICIT
    assert frag.buffer == f"SELECT 1{poison}"


def test_failures_accumulate_in_order():
    frag = sql("x").fail("first").fail("second")
    assert frag.failure == "first, second"


def test_push_propagates_failure(poison):
    frag = sql("SELECT ").push(identifier("")).push(sql(" FROM t"))
    assert frag.failure == "empty identifier"
    assert poison in frag.buffer
    assert frag.buffer.endswith(" FROM t")


def test_failure_never_overwritten():
    frag = sql("a").fail("mine")
    frag.push(varchar("toolong", 3)).push(text("\0"))
    assert frag.failure == "mine, varchar too long: 7 vs 3, Zero character in string"


def test_nested_failures_reported_in_encounter_order():
    inner = sql("(").push(identifier("")).push(sql(")"))
    outer = sql("SELECT ").push(integer(2**40)).push(inner)
    with pytest.raises(FragmentBuildError) as exc_info:
        outer.build()
    assert str(exc_info.value) == "integer out of range: 1099511627776, empty identifier"
    assert exc_info.value.codes == ["OUT_OF_RANGE", "EMPTY_IDENTIFIER"]


def test_build_error_response():
    with pytest.raises(FragmentBuildError) as exc_info:
        identifier("").build()
    response = exc_info.value.to_error_response()
    assert response["error"] == "FRAGMENT_BUILD_FAILED"
    assert response["message"] == "empty identifier"
    assert response["details"]["failures"] == [
        {"code": "EMPTY_IDENTIFIER", "message": "empty identifier"}
    ]


def test_build_error_keeps_poisoned_sql(poison):
    with pytest.raises(FragmentBuildError) as exc_info:
        sql("SELECT ").fail("boom").build()
    assert exc_info.value.sql == f"SELECT {poison}"


def test_append_join_delimits_between_items_only():
    frag = sql("cols: ").append_join(sql(", "), [identifier("a"), identifier("b"), identifier("c")])
    assert frag.build() == "cols: a, b, c"


def test_append_join_single_and_empty():
    assert Fragment().append_join(sql(", "), [identifier("a")]).build() == "a"
    assert sql("x").append_join(sql(", "), []).build() == "x"


def test_append_join_accepts_generator():
    frag = Fragment().append_join(sql(","), (integer(i) for i in range(3)))
    assert frag.build() == "0,1,2"


def test_append_join_failed_delimiter_reported_per_use():
    delim = sql(",").fail("bad delimiter")
    frag = Fragment().append_join(delim, [sql("a"), sql("b"), sql("c")])
    assert frag.failure == "bad delimiter, bad delimiter"


# ---------------------------------------------------------------------------
# Consumption
# ---------------------------------------------------------------------------


def test_build_consumes():
    frag = sql("SELECT 1")
    assert frag.build() == "SELECT 1"
    assert frag.consumed
    with pytest.raises(FragmentConsumedError):
        frag.build()
    with pytest.raises(FragmentConsumedError):
        frag.push(sql("x"))


def test_failed_build_still_consumes():
    frag = identifier("")
    with pytest.raises(FragmentBuildError):
        frag.build()
    assert frag.consumed


def test_render_does_not_consume():
    frag = sql("SELECT 1")
    assert frag.render() == "SELECT 1"
    assert not frag.consumed
    assert frag.push(sql(";")).build() == "SELECT 1;"


def test_render_raises_on_failure():
    frag = identifier("")
    with pytest.raises(FragmentBuildError, match="empty identifier"):
        frag.render()
    assert not frag.consumed


def test_pushing_consumed_fragment_rejected():
    done = sql("x")
    done.build()
    with pytest.raises(FragmentConsumedError):
        sql("y").push(done)


# ---------------------------------------------------------------------------
# Misuse
# ---------------------------------------------------------------------------


def test_push_rejects_plain_string():
    with pytest.raises(TypeError, match="Expected a Fragment"):
        sql("SELECT ").push("1; DROP TABLE users")  # type: ignore[arg-type]


def test_push_into_itself_rejected():
    frag = sql("x")
    with pytest.raises(ValueError):
        frag.push(frag)


def test_str_and_repr():
    assert str(identifier("Users")) == '"Users"'
    assert repr(sql("a")) == "Fragment('a')"
    assert "failure='empty identifier'" in repr(identifier(""))


def test_failures_logged_at_debug(caplog):
    with caplog.at_level(logging.DEBUG, logger="sqlbrick.fragment"):
        identifier("")
    assert "empty identifier" in caplog.text
