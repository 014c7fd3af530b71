"""REST runtime abstractions."""

from .http_client import HTTPClient
from .transport import DocumentTransport, Transport

__all__ = [
    "HTTPClient",
    "DocumentTransport",
    "Transport",
]
