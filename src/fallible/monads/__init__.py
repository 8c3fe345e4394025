"""Result/Either types for explicit, inspectable failure handling.

Example:
    >>> from fallible.monads import Result
    >>>
    >>> safe_div = Result.convert(lambda a, b: a / b, ZeroDivisionError)
    >>> safe_div(10, 2).map(lambda x: x * 2).get()
    10.0
    >>> safe_div(1, 0).is_error()
    True
"""

from .either import Either
from .result import Result, convert, error, join, of, of_runtime, sequence, traverse, value
from .throwing import (
    ThrowingConsumer,
    ThrowingFunction,
    ThrowingRunnable,
    ThrowingSupplier,
    declared_failures,
    throws,
)
from .unit import UNIT, Unit

__all__ = [
    # Core types
    "Either",
    "Result",
    "Unit",
    "UNIT",
    # Construction
    "value",
    "error",
    "of",
    "of_runtime",
    "convert",
    "join",
    # Throwing shapes
    "ThrowingSupplier",
    "ThrowingFunction",
    "ThrowingConsumer",
    "ThrowingRunnable",
    "throws",
    "declared_failures",
    # Collection ops
    "sequence",
    "traverse",
]
