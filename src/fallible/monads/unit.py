"""Unit: the value of an operation with nothing meaningful to return.

Lets side-effecting actions fit the same Result[E, V] shape as value-producing
ones: Result.of(action, unit=True) yields Result[E, Unit].
"""

from __future__ import annotations

from functools import wraps
from typing import Callable, ParamSpec, final

P = ParamSpec("P")


@final
class Unit:
    """Singleton marker. Unit() always returns UNIT."""

    __slots__ = ()
    _instance: Unit | None = None

    def __new__(cls) -> Unit:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "Unit"

    def __reduce__(self) -> tuple[type[Unit], tuple[()]]:
        return (Unit, ())

    @staticmethod
    def convert(action: Callable[P, object]) -> Callable[P, Unit]:
        """Wrap action so that it returns UNIT instead of its own return value.

        Example:
            >>> log = []
            >>> Unit.convert(log.append)("x")
            Unit
        """
        @wraps(action)
        def run(*args: P.args, **kwargs: P.kwargs) -> Unit:
            action(*args, **kwargs)
            return UNIT

        return run


UNIT = Unit()
