"""Relationship expansion specs."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from ..core.config import UNLIMITED


class RelationshipSpec(BaseModel):
    """Request to expand one relationship of each yielded resource.

    ``relationships`` nests the same structure for the related resources, so
    expansion depth follows the shape of the spec.

    Example:
        >>> RelationshipSpec.model_validate("author")
        RelationshipSpec(field='author', limit=-1, relationships=None)
    """

    field: str = Field(..., min_length=1)
    limit: int = UNLIMITED
    relationships: dict[str, RelationshipSpec] | None = None

    model_config = ConfigDict(frozen=True)

    @model_validator(mode="before")
    @classmethod
    def _from_name(cls, value: Any) -> Any:
        if isinstance(value, str):
            return {"field": value}
        return value

    @field_validator("limit")
    @classmethod
    def _validate_limit(cls, v: int) -> int:
        if v < UNLIMITED:
            raise ValueError("limit must be -1 (unlimited) or >= 0")
        return v

    @field_validator("relationships", mode="before")
    @classmethod
    def _expand_nested(cls, v: Any) -> Any:
        if v is None:
            return None
        return expand_relationships(v)


def expand_relationships(relationships: Any) -> dict[str, RelationshipSpec] | None:
    """Normalize caller relationship input to ``{name: RelationshipSpec}``.

    Accepts a single name, a list of names/specs (keyed by field), or a mapping
    of alias to name/spec. Returns None when nothing was requested.

    Raises:
        ValueError: If an entry cannot be read as a relationship spec
    """
    if relationships is None:
        return None

    if isinstance(relationships, (str, RelationshipSpec)):
        relationships = [relationships]

    expanded: dict[str, RelationshipSpec] = {}
    if isinstance(relationships, Mapping):
        for alias, node in relationships.items():
            expanded[alias] = _to_spec(node)
    elif isinstance(relationships, (list, tuple)):
        for node in relationships:
            spec = _to_spec(node)
            expanded[spec.field] = spec
    else:
        raise ValueError(f"Unsupported relationships value: {relationships!r}")

    return expanded or None


def _to_spec(node: Any) -> RelationshipSpec:
    if isinstance(node, RelationshipSpec):
        return node
    return RelationshipSpec.model_validate(node)
