"""Exception types for request construction.

Every failure is local and synchronous: a construction function either returns a
complete request or raises one of these.
"""

from __future__ import annotations


class PerpRequestError(Exception):
    """Base class for all errors raised by `perp_requests`."""


class InvalidInstanceIndex(PerpRequestError, IndexError):
    """Raised when an instance index has no entry in `MarketContext.instances`."""

    def __init__(self, index: object, count: int) -> None:
        self.index = index
        self.count = count
        super().__init__(f"instance index {index!r} out of range (market has {count} instance(s))")


class EncodingError(PerpRequestError, ValueError):
    """Raised when an argument cannot be represented in the binary schema."""

    def __init__(self, message: str, *, field: str | None = None) -> None:
        self.field = field
        super().__init__(message)


class DecodingError(PerpRequestError, ValueError):
    """Raised when a payload does not decode to exactly one operation."""


class MissingOptionalAccount(PerpRequestError, ValueError):
    """Raised for an incomplete discount pair or optional segments out of order."""


class AccountOrderError(PerpRequestError, RuntimeError):
    """Raised when a fixed-prefix account is appended after a later segment."""

