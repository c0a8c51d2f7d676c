# crm/core/errors.py
from fastapi import status


class CRMError(Exception):
    """Base class for errors that are reported to the caller as {"error": message}."""
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(CRMError):
    """A field is missing or malformed, or paging/sorting parameters are invalid."""
    status_code = status.HTTP_400_BAD_REQUEST


class NotFound(CRMError):
    status_code = status.HTTP_404_NOT_FOUND


class Conflict(CRMError):
    """A unique value (the customer's phone number) is already taken."""
    status_code = status.HTTP_409_CONFLICT


class StorageFault(CRMError):
    """
    The database failed. The message is deliberately opaque; the original
    exception is logged where it is caught and never sent to the caller.
    """
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
