"""fallible - operations that may fail, as values.

Wraps a fallible operation into a Result that can be mapped, chained and
finally matched or unwrapped, instead of unwinding the stack.

Quick Start:
    >>> from fallible import Recoverable, Result
    >>>
    >>> class NotFound(Recoverable): ...
    >>>
    >>> def lookup(key: str) -> int:
    ...     table = {"a": 1}
    ...     if key not in table:
    ...         raise NotFound(key)
    ...     return table[key]
    >>>
    >>> Result.of(lambda: lookup("a")).map(lambda n: n + 1)
    Value(2)
    >>> Result.of(lambda: lookup("b")).match(lambda e: f"missing {e}", str)
    'missing b'

Declaring failure kinds:
    Only declared failures become Errors. A failure is declared when it
    subclasses Recoverable, is passed to the constructor, or is listed with
    @throws. Any other exception is treated as a bug and re-raised.

    >>> from fallible import throws
    >>> @throws(ValueError)
    ... def parse(s: str) -> int:
    ...     return int(s)
    >>> Result.value("x").bind_t(parse).is_error()
    True
"""

from __future__ import annotations

__version__ = "0.1.0"

from .foundation import FailureInfo, FallibleSettings, Recoverable, UnwrapError, get_settings
from .monads import (
    UNIT,
    Either,
    Result,
    ThrowingConsumer,
    ThrowingFunction,
    ThrowingRunnable,
    ThrowingSupplier,
    Unit,
    convert,
    declared_failures,
    error,
    join,
    of,
    of_runtime,
    sequence,
    throws,
    traverse,
    value,
)
from .runtime.observability import configure_logging, get_logger

__all__ = [
    "__version__",
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
    "sequence",
    "traverse",
    # Failure kinds
    "Recoverable",
    "UnwrapError",
    "FailureInfo",
    "throws",
    "declared_failures",
    "ThrowingSupplier",
    "ThrowingFunction",
    "ThrowingConsumer",
    "ThrowingRunnable",
    # Configuration & logging
    "FallibleSettings",
    "get_settings",
    "configure_logging",
    "get_logger",
]
