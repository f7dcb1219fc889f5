"""
Error taxonomy shared by the services and the HTTP layer.

Services raise subclasses of ``RegistryError``; the application
registers a single exception handler that turns them into JSON
responses using ``status_code`` and ``message``.
"""

from typing import List, Optional


class RegistryError(Exception):
    """Base class for errors surfaced to API clients."""

    status_code: int = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationError(RegistryError):
    """A payload failed the required-field rules."""

    status_code = 400

    def __init__(self, message: str, fields: Optional[List[str]] = None) -> None:
        super().__init__(message)
        self.fields = fields or []


class InvalidFormat(RegistryError):
    """A ``"First Last"`` path segment could not be resolved."""

    status_code = 400


class InvalidID(RegistryError):
    """A numeric path parameter is not a positive integer."""

    status_code = 400


class NotFound(RegistryError):
    status_code = 404


class Conflict(RegistryError):
    """A natural key (course name, person full name) is already taken."""

    status_code = 409


class InternalError(RegistryError):
    """The store failed; the surrounding transaction was rolled back."""

    status_code = 500
