"""Core components."""

from .config import (
    DEFAULT_API_PREFIX,
    DEFAULT_PAGE_LIMIT,
    DEFAULT_TIMEOUT,
    JSONAPI_MEDIA_TYPE,
    UNLIMITED,
    ClientConfig,
)
from .exceptions import (
    DocumentError,
    JSONAPIError,
    MissingRelationshipLinkError,
    TransportError,
    UnknownTypeError,
)

__all__ = [
    "ClientConfig",
    "DEFAULT_API_PREFIX",
    "DEFAULT_PAGE_LIMIT",
    "DEFAULT_TIMEOUT",
    "JSONAPI_MEDIA_TYPE",
    "UNLIMITED",
    "JSONAPIError",
    "TransportError",
    "DocumentError",
    "UnknownTypeError",
    "MissingRelationshipLinkError",
]
