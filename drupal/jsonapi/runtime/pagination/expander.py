"""Relationship expansion for yielded resources."""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from typing import TYPE_CHECKING, Any

from ...core.exceptions import MissingRelationshipLinkError
from ...models.document import Resource
from ...models.relationships import RelationshipSpec

if TYPE_CHECKING:
    from .collection import Collection

logger = logging.getLogger(__name__)

Paginate = Callable[[str, int, "Mapping[str, RelationshipSpec] | None"], "Collection"]
Fail = Callable[[Exception], "Collection"]


class RelationshipExpander:
    """Pairs each resource with nested collections for its relationships.

    Every requested relationship becomes a fresh collection over the
    resource's ``related`` link, built with the spec's own cap and nested
    specs, so expansion recurses as deep as the specs go. A resource with no
    related link for a field gets a failed placeholder for that field only.
    """

    def __init__(
        self,
        relationships: Mapping[str, RelationshipSpec] | None,
        paginate: Paginate | None,
        fail: Fail,
    ) -> None:
        if relationships and paginate is None:
            raise ValueError("Relationship expansion requires a paginate factory")
        self._relationships = dict(relationships or {})
        self._paginate = paginate
        self._fail = fail

    @property
    def relationships(self) -> dict[str, RelationshipSpec]:
        return dict(self._relationships)

    def expand(self, resource: Resource) -> dict[str, Collection]:
        mirror: dict[str, Collection] = {}
        for name, spec in self._relationships.items():
            link = resource.related_link(spec.field)
            if link is None:
                logger.debug(
                    "relationship_link_missing",
                    extra={"field": spec.field, "resource_type": resource.type, "resource_id": resource.id},
                )
                mirror[name] = self._fail(
                    MissingRelationshipLinkError(
                        f"{resource.type} {resource.id} has no related link for '{spec.field}'",
                        field=spec.field,
                        resource_type=resource.type,
                        resource_id=resource.id,
                    )
                )
            else:
                mirror[name] = self._paginate(link, spec.limit, spec.relationships)
        return mirror

    def decorate(self, visitor: Callable[..., Any]) -> Callable[[Resource], Any]:
        """Wrap ``visitor`` to receive ``(resource, relationships)``.

        Returns ``visitor`` itself when no relationships were requested.
        """
        if not self._relationships:
            return visitor

        def decorated(resource: Resource) -> Any:
            return visitor(resource, self.expand(resource))

        return decorated
