"""Errors raised by the key manager.

Host applications map these onto their own responses; ``status_code`` is the
HTTP status a web service would normally answer with.
"""

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .models import KeyStatus


class APIKeyError(Exception):
    """Base class for all API key failures."""

    status_code: int | None = None


class MissingKeyError(APIKeyError):
    status_code = 401

    def __init__(self, message: str = "API key was not specified in request header"):
        super().__init__(message)


class UnknownKeyError(APIKeyError):
    status_code = 401

    def __init__(self, message: str = "API key does not exist"):
        super().__init__(message)


class InvalidKeyError(APIKeyError):
    status_code = 403

    def __init__(
        self, status: "KeyStatus | None" = None, message: str = "API key is invalid"
    ):
        super().__init__(message)
        self.status = status


class StoreError(APIKeyError):
    """The underlying configuration store failed to read or write."""
