"""Tests for failure-kind declarations, the Unit marker and failure descriptions."""

from __future__ import annotations

import pickle

import pytest
from helpers import DeclaredFailure, OtherFailure

from fallible import UNIT, FailureInfo, Recoverable, Result, Unit, declared_failures, throws


# ═════════════════════════════════════════════════════════════════════════════
# Declarations
# ═════════════════════════════════════════════════════════════════════════════


def test_throws_records_kinds() -> None:
    @throws(ValueError, KeyError)
    def op() -> None: ...

    assert op.__throws__ == (ValueError, KeyError)  # type: ignore[attr-defined]


def test_throws_stacking_accumulates() -> None:
    @throws(OSError)
    @throws(ValueError)
    def op() -> None: ...

    assert op.__throws__ == (ValueError, OSError)  # type: ignore[attr-defined]


def test_throws_leaves_original_untouched() -> None:
    def op(x: int) -> int:
        return x + 1

    declared = throws(ValueError)(op)

    assert not hasattr(op, "__throws__")
    assert declared.__throws__ == (ValueError,)  # type: ignore[attr-defined]
    assert declared.__wrapped__ is op  # type: ignore[attr-defined]
    assert declared.__name__ == "op"
    assert declared(1) == 2


def test_throws_accepts_builtins_and_classes() -> None:
    safe_int = throws(ValueError)(int)

    assert safe_int("7") == 7
    assert Result.convert(safe_int)("x").is_error()
    assert Result.convert(safe_int)("8") == Result.value(8)
    assert not hasattr(int, "__throws__")


def test_throws_rejects_non_exception_types() -> None:
    with pytest.raises(TypeError):
        throws(str)  # type: ignore[arg-type]


def test_declared_failures_order() -> None:
    """Recoverable first, then explicit kinds, then @throws kinds."""
    @throws(KeyError)
    def op() -> None: ...

    assert declared_failures(op, (ValueError,)) == (Recoverable, ValueError, KeyError)
    assert declared_failures(lambda: None) == (Recoverable,)


# ═════════════════════════════════════════════════════════════════════════════
# Recoverable
# ═════════════════════════════════════════════════════════════════════════════


def test_recoverable_structural_equality() -> None:
    assert DeclaredFailure("x") == DeclaredFailure("x")
    assert DeclaredFailure("x") != DeclaredFailure("y")
    assert DeclaredFailure("x") != OtherFailure("x")
    assert DeclaredFailure("x") != ValueError("x")
    assert hash(DeclaredFailure("x", 1)) == hash(DeclaredFailure("x", 1))


# ═════════════════════════════════════════════════════════════════════════════
# Unit
# ═════════════════════════════════════════════════════════════════════════════


def test_unit_is_singleton() -> None:
    assert Unit() is UNIT
    assert Unit() is Unit()
    assert pickle.loads(pickle.dumps(UNIT)) is UNIT
    assert repr(UNIT) == "Unit"


def test_unit_convert() -> None:
    received: list[tuple[int, str]] = []

    def store(n: int, label: str = "") -> str:
        """Store a pair."""
        received.append((n, label))
        return "ignored"

    converted = Unit.convert(store)

    assert converted(1, label="a") is UNIT
    assert received == [(1, "a")]
    assert converted.__name__ == "store"


def test_unit_convert_propagates_failure() -> None:
    def boom() -> None:
        raise DeclaredFailure("boom")

    with pytest.raises(DeclaredFailure):
        Unit.convert(boom)()


# ═════════════════════════════════════════════════════════════════════════════
# FailureInfo
# ═════════════════════════════════════════════════════════════════════════════


def test_failure_info_from_recoverable() -> None:
    info = FailureInfo.from_exc(DeclaredFailure("bad input"))

    assert info.kind.endswith("DeclaredFailure")
    assert info.message == "bad input"
    assert info.recoverable is True
    assert str(info).endswith("DeclaredFailure: bad input")


def test_failure_info_from_fault() -> None:
    info = FailureInfo.from_exc(KeyError())

    assert info.kind == "builtins.KeyError"
    assert info.message == ""
    assert info.recoverable is False
    assert str(info) == "builtins.KeyError"


def test_failure_info_validation() -> None:
    from pydantic import ValidationError

    with pytest.raises(ValidationError):
        FailureInfo(kind="")
    assert FailureInfo(kind="x.Y", message="m").model_dump() == {"kind": "x.Y", "message": "m", "recoverable": True}
