"""Data models for JSON:API documents.

All models are Pydantic v2 and frozen: resources are handed to caller
visitors as received and must not be modified in flight.
"""

from .document import Document, ErrorObject, Relationship, Resource, link_href
from .relationships import RelationshipSpec, expand_relationships

__all__ = [
    "Document",
    "ErrorObject",
    "Relationship",
    "Resource",
    "RelationshipSpec",
    "expand_relationships",
    "link_href",
]
