"""Throwing callable shapes and failure-kind declarations.

The Result constructors accept plain callables. The protocols below name the
shapes they are used with; @throws attaches the failure kinds a callable
declares, the way a `throws` clause would in a language with checked
exceptions:

    >>> from fallible import Result, throws
    >>> @throws(ValueError)
    ... def parse(s: str) -> int:
    ...     return int(s)
    >>> Result.convert(parse)("x").is_error()
    True
"""

from __future__ import annotations

from functools import update_wrapper
from typing import Any, Callable, Iterable, Protocol, TypeVar, cast

from fallible.foundation.errors import Recoverable

T_contra = TypeVar("T_contra", contravariant=True)
V_co = TypeVar("V_co", covariant=True)
C = TypeVar("C", bound=Callable[..., object])

FailureKinds = tuple[type[BaseException], ...]


class ThrowingSupplier(Protocol[V_co]):
    """Zero-argument operation producing a value; may raise a declared failure."""

    def __call__(self) -> V_co: ...


class ThrowingFunction(Protocol[T_contra, V_co]):
    """One-argument operation producing a value; may raise a declared failure."""

    def __call__(self, arg: T_contra, /) -> V_co: ...


class ThrowingConsumer(Protocol[T_contra]):
    """One-argument operation run for its effect; may raise a declared failure."""

    def __call__(self, arg: T_contra, /) -> object: ...


class ThrowingRunnable(Protocol):
    """Zero-argument operation run for its effect; may raise a declared failure."""

    def __call__(self) -> object: ...


def throws(*errors: type[BaseException]) -> Callable[[C], C]:
    """Declare the failure kinds a callable may raise.

    Returns a wrapper carrying the declaration, so builtins and classes can be
    decorated and the original callable is left untouched:

        >>> safe_int = throws(ValueError)(int)
        >>> safe_int("7")
        7

    Stacking accumulates: the outermost decorator's kinds are added to the
    ones already declared.
    """
    kinds = _check_kinds(errors)

    def decorate(fn: C) -> C:
        def declared(*args: Any, **kwargs: Any) -> object:
            return fn(*args, **kwargs)

        update_wrapper(declared, fn, updated=())
        declared.__throws__ = (*getattr(fn, "__throws__", ()), *kinds)  # type: ignore[attr-defined]
        return cast(C, declared)

    return decorate


def declared_failures(fn: Callable[..., object], errors: Iterable[type[BaseException]] = ()) -> FailureKinds:
    """Failure kinds to capture when running fn.

    Recoverable, then the explicitly passed kinds, then those declared on fn
    with @throws.
    """
    return (Recoverable, *_check_kinds(tuple(errors)), *getattr(fn, "__throws__", ()))


def _check_kinds(errors: tuple[object, ...]) -> FailureKinds:
    for kind in errors:
        if not (isinstance(kind, type) and issubclass(kind, BaseException)):
            raise TypeError(f"failure kind must be an exception type, got {kind!r}")
    return errors  # type: ignore[return-value]
