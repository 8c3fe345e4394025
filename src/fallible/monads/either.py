"""Either: immutable two-variant disjoint union.

Holds exactly one of a left or a right payload. By convention left is the
failure-like side. Folding is the only way to reach the payload.
"""

from __future__ import annotations

from typing import Callable, Generic, NoReturn, TypeVar

L = TypeVar("L")  # Left type
R = TypeVar("R")  # Right type
T = TypeVar("T")  # Fold result type


class Either(Generic[L, R]):
    """Tagged union of a Left(L) or a Right(R).

    Examples:
        >>> Either.right(3).match(lambda l: f"left {l}", lambda r: f"right {r}")
        'right 3'
        >>> Either.left("x") == Either.left("x")
        True
        >>> Either.left(1) == Either.right(1)
        False
    """

    __slots__ = ("_value", "_is_left")

    def __init__(self, value: L | R, is_left: bool) -> None:
        """Private constructor. Use Either.left() or Either.right() instead."""
        object.__setattr__(self, "_value", value)
        object.__setattr__(self, "_is_left", is_left)

    @staticmethod
    def left(value: L) -> Either[L, R]:
        """Construct the Left variant."""
        return Either(value, True)

    @staticmethod
    def right(value: R) -> Either[L, R]:
        """Construct the Right variant."""
        return Either(value, False)

    def is_left(self) -> bool:
        return self._is_left

    def is_right(self) -> bool:
        return not self._is_left

    # ─── Folding ─────────────────────────────────────────────────────────

    def match(self, on_left: Callable[[L], T], on_right: Callable[[R], T]) -> T:
        """Total fold. Exactly one callback runs, on the active payload."""
        return on_left(self._value) if self._is_left else on_right(self._value)  # type: ignore[arg-type]

    def consume(self, on_left: Callable[[L], object], on_right: Callable[[R], object]) -> None:
        """Fold for side effects only; callback return values are dropped."""
        if self._is_left:
            on_left(self._value)  # type: ignore[arg-type]
        else:
            on_right(self._value)  # type: ignore[arg-type]

    def unsafe_match(self, on_left: Callable[[L], T | NoReturn], on_right: Callable[[R], T]) -> T:
        """Fold whose callbacks may raise instead of returning.

        Used to turn the left case back into a raised failure; whatever a
        callback raises propagates to the caller unchanged.
        """
        if self._is_left:
            return on_left(self._value)  # type: ignore[arg-type,return-value]
        return on_right(self._value)  # type: ignore[arg-type]

    # ─── Dunder Methods ──────────────────────────────────────────────────

    def __setattr__(self, name: str, value: object) -> NoReturn:
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __delattr__(self, name: str) -> NoReturn:
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __reduce__(self) -> tuple[type[Either], tuple[object, bool]]:
        return (Either, (self._value, self._is_left))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Either):
            return NotImplemented
        return self._is_left == other._is_left and self._value == other._value

    def __hash__(self) -> int:
        return hash((self._is_left, self._value))

    def __repr__(self) -> str:
        return f"{'Left' if self._is_left else 'Right'}({self._value!r})"
