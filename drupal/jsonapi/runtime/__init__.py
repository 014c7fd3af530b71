"""Runtime components: transport, link table and pagination."""

from .links import LinkTable
from .pagination import Collection, OrderedTaskQueue, PullState, RelationshipExpander, ResourceCursor
from .rest import DocumentTransport, HTTPClient, Transport

__all__ = [
    "Collection",
    "DocumentTransport",
    "HTTPClient",
    "LinkTable",
    "OrderedTaskQueue",
    "PullState",
    "RelationshipExpander",
    "ResourceCursor",
    "Transport",
]
