"""
Reconciliation errors.

Every failure raised by the engine derives from NetBoxError. A record that
is missing remotely is never reported through these types; it is the
Absent outcome of a lifecycle call.
"""

from typing import Optional


class NetBoxError(Exception):
    """Base class for reconciliation failures."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class FetchError(NetBoxError):
    """Raised when a request to the inventory API fails."""

    def __init__(self, message: str, status: Optional[int] = None):
        self.status = status
        super().__init__(message)


class ParseError(NetBoxError):
    """Raised when a pagination cursor cannot be interpreted."""


class ValidationError(NetBoxError):
    """Raised when a create payload is rejected."""


class UpdateError(NetBoxError):
    """Raised when a partial update cannot be applied."""


class ConversionError(NetBoxError):
    """Raised when an identity is not a numeric id."""
