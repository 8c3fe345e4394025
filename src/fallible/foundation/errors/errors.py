"""Failure taxonomy for Result construction.

Python has no checked exceptions, so "this failure is expected and
recoverable" has to be stated explicitly. Subclassing Recoverable is one way
to state it; the others are the `*errors` argument of the constructors and
the @throws decorator (see fallible.monads.throwing).
"""

from __future__ import annotations

from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field


class Recoverable(Exception):
    """Base class for declared failure kinds.

    Any subclass raised inside Result.of() is captured into the Error variant
    without further declaration. Instances compare structurally (same concrete
    type and same args) so that two equal failures produce equal Results.

    Example:
        >>> class ParseFailure(Recoverable): ...
        >>> ParseFailure("bad") == ParseFailure("bad")
        True
    """

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Recoverable):
            return NotImplemented
        return type(self) is type(other) and self.args == other.args

    def __hash__(self) -> int:
        return hash((type(self), self.args))


class UnwrapError(Exception):
    """Raised by Result.get() when the Error payload is not an exception."""

    __slots__ = ("payload",)

    def __init__(self, payload: object) -> None:
        self.payload = payload
        super().__init__(f"get() on Error: {payload!r}")


class FailureInfo(BaseModel):
    """Serializable description of a captured failure. Used in log events."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    kind: Annotated[str, Field(min_length=1)]
    message: str = ""
    recoverable: bool = True

    @classmethod
    def from_exc(cls, exc: BaseException) -> FailureInfo:
        """Describe an exception. Fast path, skips validation."""
        return cls.model_construct(
            kind=f"{type(exc).__module__}.{type(exc).__qualname__}",
            message=str(exc),
            recoverable=isinstance(exc, Recoverable),
        )

    def __str__(self) -> str:
        return f"{self.kind}: {self.message}" if self.message else self.kind
