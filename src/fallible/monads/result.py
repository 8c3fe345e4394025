"""Result: the outcome of an operation that may fail, as a value.

A Result[E, V] is either an Error carrying a failure E or a Value carrying
the produced V. It is built on Either (Error = left, Value = right) but never
exposes it.

- Construction: value, error, of, of_runtime, convert
- Matching/extraction: match, consume, get
- Monad: map, bind (map + join), then, peek, set, set_value
- Throwing sugar: bind_t, then_t, peek_t
- Collections: sequence, traverse

Every combinator short-circuits on Error: its callback is not invoked and
the same failure is passed along. Only match/consume/get ever look at a
failure.

Capture rules for of()/convert(): a raised exception becomes an Error only
when it is a declared failure kind (a Recoverable subclass, one of the
`*errors` passed in, or one declared with @throws). Anything else is an
undeclared fault and is re-raised immediately. of_runtime() captures every
Exception. KeyboardInterrupt, SystemExit and other non-Exception
BaseExceptions are never captured unless declared explicitly.
"""

from __future__ import annotations

from functools import wraps
from typing import (
    TYPE_CHECKING,
    Callable,
    Generic,
    Literal,
    NoReturn,
    ParamSpec,
    TypeVar,
    overload,
)

from pydantic import ValidationError

from fallible.foundation.config import get_settings
from fallible.foundation.errors import FailureInfo, UnwrapError
from fallible.runtime.observability.logging import get_logger

from .either import Either
from .throwing import FailureKinds, declared_failures
from .unit import Unit

if TYPE_CHECKING:
    from collections.abc import Iterable

E = TypeVar("E")  # Error type
V = TypeVar("V")  # Value type
T = TypeVar("T")  # Mapped value / fold result type
U = TypeVar("U")
P = ParamSpec("P")

_log = get_logger("fallible.result")


class Result(Generic[E, V]):
    """Error(E) or Value(V), with a monadic combinator suite.

    Examples:
        >>> from fallible import Recoverable
        >>> class ParseFailure(Recoverable): ...
        >>> def parse(s: str) -> int:
        ...     if not s.isdigit():
        ...         raise ParseFailure(s)
        ...     return int(s)
        >>>
        >>> Result.of(lambda: parse("21")).map(lambda n: n * 2).get()
        42
        >>> Result.of(lambda: parse("x")).map(lambda n: n * 2)
        Error(ParseFailure('x'))

        Chaining dependent steps:
        >>> (
        ...     Result.value("7")
        ...     .bind_t(parse)
        ...     .peek(lambda n: Result.value(None) if n > 0 else Result.error("not positive"))
        ...     .match(lambda e: f"failed: {e}", lambda n: f"got {n}")
        ... )
        'got 7'
    """

    __slots__ = ("_either",)

    def __init__(self, either: Either[E, V]) -> None:
        """Private constructor. Use Result.value(), Result.error() or Result.of() instead."""
        object.__setattr__(self, "_either", either)

    # ─────────────────────────────────────────────────────────────────
    # Construction
    # ─────────────────────────────────────────────────────────────────

    @staticmethod
    def value(value: V) -> Result[E, V]:
        """Wrap a successful outcome."""
        return Result(Either.right(value))

    @staticmethod
    def error(error: E) -> Result[E, V]:
        """Wrap a failure."""
        return Result(Either.left(error))

    @overload
    @staticmethod
    def of(operation: Callable[[], V], *errors: type[BaseException],
           unit: Literal[False] = ...) -> Result[BaseException, V]: ...

    @overload
    @staticmethod
    def of(operation: Callable[[], object], *errors: type[BaseException],
           unit: Literal[True]) -> Result[BaseException, Unit]: ...

    @staticmethod
    def of(operation: Callable[[], object], *errors: type[BaseException],
           unit: bool = False) -> Result[BaseException, object]:
        """Run operation and encapsulate its outcome.

        Returns Value(returned) on normal return and Error(exc) when it raises
        a declared failure kind. Undeclared faults propagate unchanged. With
        unit=True the returned value is discarded and the Value is UNIT.

        Conceptually the inverse of get(): `Result.of(r.get) == r`.

        Raises:
            TypeError: If an entry of errors is not an exception type.
        """
        declared = declared_failures(operation, errors)
        return _capture(Unit.convert(operation) if unit else operation, declared)

    @overload
    @staticmethod
    def of_runtime(operation: Callable[[], V], unit: Literal[False] = ...) -> Result[Exception, V]: ...

    @overload
    @staticmethod
    def of_runtime(operation: Callable[[], object], unit: Literal[True]) -> Result[Exception, Unit]: ...

    @staticmethod
    def of_runtime(operation: Callable[[], object], unit: bool = False) -> Result[Exception, object]:
        """Run operation and capture any Exception it raises into the Error variant."""
        return _capture(Unit.convert(operation) if unit else operation, (Exception,))

    @overload
    @staticmethod
    def convert(fn: Callable[P, V], *errors: type[BaseException],
                unit: Literal[False] = ...) -> Callable[P, Result[BaseException, V]]: ...

    @overload
    @staticmethod
    def convert(fn: Callable[P, object], *errors: type[BaseException],
                unit: Literal[True]) -> Callable[P, Result[BaseException, Unit]]: ...

    @staticmethod
    def convert(fn: Callable[P, object], *errors: type[BaseException],
                unit: bool = False) -> Callable[P, Result[BaseException, object]]:
        """Lift a fallible callable into one that returns a Result.

        Works for suppliers, functions, consumers and actions alike: each call
        of the returned callable runs fn under of() semantics with the same
        declared failure kinds.

        Example:
            >>> safe_int = Result.convert(int, ValueError)
            >>> safe_int("12")
            Value(12)
            >>> safe_int("twelve").is_error()
            True
        """
        declared = declared_failures(fn, errors)
        target = Unit.convert(fn) if unit else fn

        @wraps(fn)
        def converted(*args: P.args, **kwargs: P.kwargs) -> Result[BaseException, object]:
            return _capture(lambda: target(*args, **kwargs), declared)

        return converted

    # ─────────────────────────────────────────────────────────────────
    # Matching & Extraction
    # ─────────────────────────────────────────────────────────────────

    def is_value(self) -> bool:
        return self._either.is_right()

    def is_error(self) -> bool:
        return self._either.is_left()

    def match(self, on_error: Callable[[E], T], on_value: Callable[[V], T]) -> T:
        """Apply the callback for the contained variant and return its result.

        Example:
            >>> Result.error("boom").match(lambda e: f"failed: {e}", lambda v: f"ok: {v}")
            'failed: boom'
        """
        return self._either.match(on_error, on_value)

    def consume(self, on_error: Callable[[E], object], on_value: Callable[[V], object]) -> None:
        """Run the callback for the contained variant, for side effects only."""
        self._either.consume(on_error, on_value)

    def get(self) -> V:
        """Return the value, or raise the contained failure.

        This is where a Result chain rejoins ordinary exception propagation.
        The failure is raised as is (same object); an Error payload that is
        not an exception is raised wrapped in UnwrapError.

        Raises:
            E: The contained failure.
            UnwrapError: If the failure is not an exception instance.
        """
        return self._either.unsafe_match(_raise, _identity)

    # ─────────────────────────────────────────────────────────────────
    # Monad Operations
    # ─────────────────────────────────────────────────────────────────

    def map(self, f: Callable[[V], T]) -> Result[E, T]:
        """Transform the value. Error passes through untouched.

        Type signature: Result[E, V] -> (V -> T) -> Result[E, T]
        """
        return self._either.match(Result.error, lambda v: Result.value(f(v)))

    def bind(self, f: Callable[[V], Result[E, T]]) -> Result[E, T]:
        """Monadic bind (>>=): sequence a dependent fallible step.

        map() with a Result-returning function would nest; join() flattens it.

        Type signature: Result[E, V] -> (V -> Result[E, T]) -> Result[E, T]

        Raises:
            TypeError: If f returns something other than a Result.
        """
        return join(self.map(f))

    def then(self, f: Callable[[], Result[E, T]]) -> Result[E, T]:
        """Sequence an independent fallible step, discarding the current value (*>)."""
        return self.bind(lambda _: f())

    def peek(self, f: Callable[[V], Result[E, object]]) -> Result[E, V]:
        """Run a fallible step against the value but keep the original value.

        The step's own value is discarded; its failure, if any, is propagated.
        Useful for validation or auditing steps inside a chain.
        """
        return self.bind(lambda v: _expect_result(f(v), "peek()").set_value(v))

    def set(self, result: Result[E, T]) -> Result[E, T]:
        """Replace the value by a fixed successor Result, unless already an Error."""
        return self.then(lambda: result)

    def set_value(self, value: T) -> Result[E, T]:
        """Replace the value by a fixed value, unless already an Error."""
        return self.set(Result.value(value))

    def flatten(self: Result[E, Result[E, T]]) -> Result[E, T]:
        """Collapse one level of nesting. Same as join(self)."""
        return join(self)

    # ─────────────────────────────────────────────────────────────────
    # Throwing Variants
    # ─────────────────────────────────────────────────────────────────

    def bind_t(self, f: Callable[[V], T], *errors: type[BaseException], unit: bool = False) -> Result[E, T]:
        """bind() with a plain fallible function, lifted with convert()."""
        return self.bind(Result.convert(f, *errors, unit=unit))  # type: ignore[arg-type,call-overload]

    def then_t(self, f: Callable[[], T], *errors: type[BaseException], unit: bool = False) -> Result[E, T]:
        """then() with a plain fallible operation, lifted with convert()."""
        return self.then(Result.convert(f, *errors, unit=unit))  # type: ignore[arg-type,call-overload]

    def peek_t(self, f: Callable[[V], object], *errors: type[BaseException]) -> Result[E, V]:
        """peek() with a plain fallible function or consumer, lifted with convert()."""
        return self.peek(Result.convert(f, *errors))  # type: ignore[arg-type]

    # ─────────────────────────────────────────────────────────────────
    # Dunder Methods
    # ─────────────────────────────────────────────────────────────────

    def __setattr__(self, name: str, value: object) -> NoReturn:
        raise AttributeError("Result is immutable")

    def __delattr__(self, name: str) -> NoReturn:
        raise AttributeError("Result is immutable")

    def __reduce__(self) -> tuple[type[Result], tuple[Either[E, V]]]:
        return (Result, (self._either,))

    def __eq__(self, other: object) -> bool:
        """Structural equality: same variant and equal payload."""
        if not isinstance(other, Result):
            return NotImplemented
        return self._either == other._either

    def __hash__(self) -> int:
        return hash(self._either)

    def __repr__(self) -> str:
        return self._either.match(lambda e: f"Error({e!r})", lambda v: f"Value({v!r})")


# ═════════════════════════════════════════════════════════════════════════════
# Module-level Functions
# ═════════════════════════════════════════════════════════════════════════════


def join(nested: Result[E, Result[E, T]]) -> Result[E, T]:
    """Convert a Result of a Result into a single Result.

    Error stays the outer Error; Value(inner) becomes inner.

    Raises:
        TypeError: If the outer Value does not hold a Result.
    """
    return nested.match(Result.error, _expect_result)


def sequence(results: Iterable[Result[E, V]]) -> Result[E, list[V]]:
    """[Result[E, V]] -> Result[E, [V]]. Fails fast on the first Error.

    Example:
        >>> sequence([Result.value(1), Result.value(2)])
        Value([1, 2])
    """
    values: list[V] = []
    for r in results:
        if r.is_error():
            return r  # type: ignore[return-value]
        values.append(r.get())
    return Result.value(values)


def traverse(items: Iterable[T], f: Callable[[T], Result[E, U]]) -> Result[E, list[U]]:
    """Map f over items and sequence the Results. f is not called past the first Error."""
    values: list[U] = []
    for item in items:
        r = f(item)
        if r.is_error():
            return r  # type: ignore[return-value]
        values.append(r.get())
    return Result.value(values)


value = Result.value
error = Result.error
of = Result.of
of_runtime = Result.of_runtime
convert = Result.convert


# ═════════════════════════════════════════════════════════════════════════════
# Internals
# ═════════════════════════════════════════════════════════════════════════════


def _capture(operation: Callable[[], V], declared: FailureKinds) -> Result[BaseException, V]:
    try:
        produced = operation()
    except declared as exc:
        _trace("failure captured", exc)
        return Result(Either.left(exc))
    except Exception as exc:
        _trace("undeclared fault re-raised", exc)
        raise
    return Result(Either.right(produced))


def _trace(event: str, exc: BaseException) -> None:
    """Emit a capture diagnostic. Never alters the outcome it describes.

    Invalid configuration counts as tracing off; a renderer that cannot write
    drops the event.
    """
    try:
        settings = get_settings()
    except ValidationError:
        return
    if not (settings.trace_captures or settings.debug):
        return
    try:
        _log.debug(event, **FailureInfo.from_exc(exc).model_dump())
    except (OSError, ValueError):
        pass


def _expect_result(inner: object, caller: str = "bind()") -> Result:
    if not isinstance(inner, Result):
        raise TypeError(f"{caller} callback must return a Result, got {type(inner).__name__}")
    return inner


def _raise(failure: object) -> NoReturn:
    if isinstance(failure, BaseException):
        raise failure
    raise UnwrapError(failure)


def _identity(v: V) -> V:
    return v
