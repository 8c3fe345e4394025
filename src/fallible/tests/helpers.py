"""Failure kinds shared by the test modules."""

from __future__ import annotations

from fallible import Recoverable


class DeclaredFailure(Recoverable):
    """Declared failure kind used across the test suite."""


class OtherFailure(Recoverable):
    """A second, unrelated declared failure kind."""
