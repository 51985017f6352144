"""
Error taxonomy shared by the resource services.

Validators and the repository raise these; request handlers translate
them into HTTP responses. ``ConfigurationError`` is the only one that
is never turned into a response: it stops the process at startup.
"""

from typing import Optional


class ServiceError(Exception):
    """Base class for every domain error."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ConfigurationError(ServiceError):
    pass


class ValidationError(ServiceError):
    status_code = 400


class NotFoundError(ServiceError):
    status_code = 404


class ConflictError(ServiceError):
    status_code = 409


class StoreError(ServiceError):
    """Any failure reported by the document store."""

    def __init__(self, message: str, cause: Optional[BaseException] = None):
        super().__init__(message)
        self.cause = cause


class DuplicateRecordError(StoreError):
    """A unique index rejected the write."""
