"""Failure taxonomy for fragment construction.

A :class:`Failure` is plain data carried alongside the text a fragment
accumulates.  Recording one never interrupts construction; the terminal
``build()`` turns the collected failures into a single
:class:`~sqlbrick.errors.FragmentBuildError`.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class FailureCode(str, Enum):
    """Machine-readable failure kinds."""

    EMPTY_IDENTIFIER = "EMPTY_IDENTIFIER"
    NULL_CHARACTER = "NULL_CHARACTER"
    VARCHAR_TOO_LONG = "VARCHAR_TOO_LONG"
    MISSING_VARIABLE = "MISSING_VARIABLE"
    UNTERMINATED_PLACEHOLDER = "UNTERMINATED_PLACEHOLDER"
    OUT_OF_RANGE = "OUT_OF_RANGE"
    NON_FINITE = "NON_FINITE"
    EXPLICIT = "EXPLICIT"


@dataclass(frozen=True)
class Failure:
    """A single recorded failure.

    Attributes:
        code: The failure kind.
        message: Human-readable reason; this is what appears in the
            aggregated build error.
    """

    code: FailureCode
    message: str

    def __str__(self) -> str:
        return self.message


# ---------------------------------------------------------------------------
# Factories
# ---------------------------------------------------------------------------


def empty_identifier() -> Failure:
    return Failure(FailureCode.EMPTY_IDENTIFIER, "empty identifier")


def null_character(message: str) -> Failure:
    """NUL inside an identifier or string literal.

    The two escapers report it with different wording, so the message is
    supplied by the caller.
    """
    return Failure(FailureCode.NULL_CHARACTER, message)


def varchar_too_long(actual: int, max_length: int) -> Failure:
    return Failure(
        FailureCode.VARCHAR_TOO_LONG,
        f"varchar too long: {actual} vs {max_length}",
    )


def missing_variable(name: str) -> Failure:
    return Failure(FailureCode.MISSING_VARIABLE, f"missing variable: {name}")


def unterminated_placeholder(text: str) -> Failure:
    return Failure(
        FailureCode.UNTERMINATED_PLACEHOLDER,
        f"unterminated placeholder: {text}",
    )


def out_of_range(kind: str, value: int) -> Failure:
    return Failure(FailureCode.OUT_OF_RANGE, f"{kind} out of range: {value}")


def non_finite(kind: str, value: float) -> Failure:
    return Failure(FailureCode.NON_FINITE, f"{kind} is not finite: {value!r}")


def explicit(message: str) -> Failure:
    return Failure(FailureCode.EXPLICIT, message)
