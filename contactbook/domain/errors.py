"""
Domain errors raised by the ContactStore and the blob-store adapters.

ValidationError, NotFoundError and ForbiddenOperationError reach the caller
and leave the store untouched. PersistenceError is raised by adapters and
only ever logged by the store.
"""

from typing import List, Optional


class ContactBookError(Exception):
    """Base exception for all contact book errors."""
    pass


class ValidationError(ContactBookError):
    """Raised when a draft is missing required fields."""

    def __init__(self, fields: List[str]):
        self.fields = list(fields)
        super().__init__(f"Missing required field(s): {', '.join(self.fields)}")


class NotFoundError(ContactBookError):
    """Raised when an operation references an unknown contact id."""

    def __init__(self, contact_id: str):
        self.contact_id = contact_id
        super().__init__(f"Contact not found: {contact_id!r}")


class ForbiddenOperationError(ContactBookError):
    """Raised when an operation is not allowed on a record (e.g. deleting the profile)."""

    def __init__(self, operation: str, contact_id: str):
        self.operation = operation
        self.contact_id = contact_id
        super().__init__(f"Cannot {operation} contact {contact_id!r}")


class PersistenceError(ContactBookError):
    """Raised when the blob store cannot be read or written."""

    def __init__(self, message: str, key: Optional[str] = None):
        self.key = key
        super().__init__(message)
