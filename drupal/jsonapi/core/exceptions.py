"""Custom exception hierarchy."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from ..models.document import ErrorObject


class JSONAPIError(Exception):
    """Base exception for all library errors."""

    pass


class TransportError(JSONAPIError):
    """A document could not be fetched or parsed.

    Raised for network failures, non-success HTTP responses and response
    bodies that are not valid JSON. ``status_code`` is None when no HTTP
    status was received.
    """

    def __init__(
        self,
        message: str,
        url: str | None = None,
        status_code: int | None = None,
    ) -> None:
        super().__init__(message)
        self.url = url
        self.status_code = status_code


class DocumentError(JSONAPIError):
    """A transported document carries errors, or neither data nor errors."""

    def __init__(
        self,
        message: str,
        errors: list[ErrorObject] | None = None,
        document: Any = None,
    ) -> None:
        super().__init__(message)
        self.errors = errors or []
        self.document = document


class UnknownTypeError(JSONAPIError):
    """Resource type is not listed in the API's root link table."""

    def __init__(self, message: str, type_name: str, base_url: str | None = None) -> None:
        super().__init__(message)
        self.type_name = type_name
        self.base_url = base_url


class MissingRelationshipLinkError(JSONAPIError):
    """Resource has no related link for a requested relationship."""

    def __init__(
        self,
        message: str,
        field: str,
        resource_type: str | None = None,
        resource_id: str | None = None,
    ) -> None:
        super().__init__(message)
        self.field = field
        self.resource_type = resource_type
        self.resource_id = resource_id
