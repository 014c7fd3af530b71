"""Lazy pagination and consumption engine.

Architecture:
    - cursor.py: ResourceCursor, the demand-driven sequence over one link chain
    - expander.py: RelationshipExpander, nested collections per relationship
    - queue.py: OrderedTaskQueue, serialized visitor calls
    - collection.py: Collection, the consumption driver
    - telemetry.py: Structured logging
"""

from __future__ import annotations

from .collection import Collection, Continuation, Visitor
from .cursor import PullState, ResourceCursor
from .expander import RelationshipExpander
from .queue import OrderedTaskQueue

__all__ = [
    "Collection",
    "Continuation",
    "Visitor",
    "PullState",
    "ResourceCursor",
    "RelationshipExpander",
    "OrderedTaskQueue",
]
