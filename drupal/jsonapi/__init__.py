"""Drupal JSON:API client - lazy, resumable access to paginated collections."""

from .api import Filter, JSONAPIClient
from .core import (
    UNLIMITED,
    ClientConfig,
    DocumentError,
    JSONAPIError,
    MissingRelationshipLinkError,
    TransportError,
    UnknownTypeError,
)
from .models import Document, ErrorObject, Relationship, RelationshipSpec, Resource
from .runtime import (
    Collection,
    DocumentTransport,
    HTTPClient,
    LinkTable,
    OrderedTaskQueue,
    PullState,
    RelationshipExpander,
    ResourceCursor,
)

__version__ = "0.1.0"

__all__ = [
    "JSONAPIClient",
    "Filter",
    "ClientConfig",
    "UNLIMITED",
    "JSONAPIError",
    "TransportError",
    "DocumentError",
    "UnknownTypeError",
    "MissingRelationshipLinkError",
    "Document",
    "ErrorObject",
    "Relationship",
    "RelationshipSpec",
    "Resource",
    "Collection",
    "DocumentTransport",
    "HTTPClient",
    "LinkTable",
    "OrderedTaskQueue",
    "PullState",
    "RelationshipExpander",
    "ResourceCursor",
]
