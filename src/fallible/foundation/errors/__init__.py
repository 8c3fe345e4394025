"""Failure kinds and failure descriptions.

- Recoverable: marker base class for declared failure kinds
- UnwrapError: get() on an Error whose payload is not an exception
- FailureInfo: pydantic description of a captured failure
"""

from .errors import FailureInfo, Recoverable, UnwrapError

__all__ = ["FailureInfo", "Recoverable", "UnwrapError"]
