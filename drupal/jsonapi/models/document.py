"""JSON:API document and resource models."""

from __future__ import annotations

import logging
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from ..core.exceptions import DocumentError

logger = logging.getLogger(__name__)


def link_href(link: Any) -> str | None:
    """Return the URL of a link given as a string or a ``{"href": ...}`` object."""
    if isinstance(link, str):
        return link or None
    if isinstance(link, dict):
        href = link.get("href")
        if isinstance(href, str) and href:
            return href
    return None


class ErrorObject(BaseModel):
    """One entry of a document's ``errors`` member."""

    id: str | None = None
    status: str | None = None
    code: str | None = None
    title: str | None = None
    detail: str | None = None
    source: dict[str, Any] | None = None
    links: dict[str, Any] = Field(default_factory=dict)
    meta: dict[str, Any] = Field(default_factory=dict)

    model_config = ConfigDict(frozen=True, extra="allow", coerce_numbers_to_str=True)

    @property
    def info_link(self) -> str | None:
        return link_href(self.links.get("info")) or link_href(self.links.get("about"))

    def describe(self) -> str:
        return f"{self.title}: {self.detail}."


class Relationship(BaseModel):
    """Relationship object: linkage data plus links to the related collection."""

    data: Any = None
    links: dict[str, Any] = Field(default_factory=dict)
    meta: dict[str, Any] = Field(default_factory=dict)

    model_config = ConfigDict(frozen=True, extra="allow")

    @property
    def related_link(self) -> str | None:
        return link_href(self.links.get("related"))


class Resource(BaseModel):
    """A single resource object identified by type and id."""

    type: str = Field(..., min_length=1)
    id: str | None = None
    attributes: dict[str, Any] = Field(default_factory=dict)
    relationships: dict[str, Relationship] = Field(default_factory=dict)
    links: dict[str, Any] = Field(default_factory=dict)
    meta: dict[str, Any] = Field(default_factory=dict)

    model_config = ConfigDict(frozen=True, extra="allow")

    def related_link(self, field: str) -> str | None:
        """URL of the related collection for ``field``, if the resource has one."""
        relationship = self.relationships.get(field)
        return relationship.related_link if relationship is not None else None

    @property
    def self_link(self) -> str | None:
        return link_href(self.links.get("self"))


class Document(BaseModel):
    """Top-level document of one response.

    Exactly one of ``data`` or ``errors`` is expected. ``data`` may legitimately
    be null (an empty to-one), so presence is checked against the fields that
    were actually set rather than against None.
    """

    data: Any = None
    errors: list[ErrorObject] | None = None
    links: dict[str, Any] = Field(default_factory=dict)
    meta: dict[str, Any] = Field(default_factory=dict)
    included: list[dict[str, Any]] = Field(default_factory=list)
    jsonapi: dict[str, Any] | None = None

    model_config = ConfigDict(frozen=True, extra="allow")

    @property
    def has_data(self) -> bool:
        return "data" in self.model_fields_set

    @property
    def next_link(self) -> str | None:
        return link_href(self.links.get("next"))

    def unwrap(self) -> Resource | list[Resource] | None:
        """Return the document's primary data as resources.

        Raises:
            DocumentError: If the document carries errors or has no data
        """
        # Errors take precedence over data
        if self.errors:
            for error in self.errors:
                logger.info("%s %s", error.describe(), error.info_link or "")
            first = self.errors[0]
            raise DocumentError(
                f"The server returned {len(self.errors)} error(s): {first.describe()}",
                errors=list(self.errors),
                document=self,
            )

        if self.has_data:
            try:
                if isinstance(self.data, list):
                    return [Resource.model_validate(item) for item in self.data]
                if self.data is None:
                    return None
                return Resource.model_validate(self.data)
            except ValidationError as e:
                raise DocumentError(f"Document contains an unprocessable resource: {e}", document=self) from e

        raise DocumentError(
            "The server returned an unprocessable document with no data or errors.",
            document=self,
        )

    def resources(self) -> list[Resource]:
        """Primary data as a list; a single resource becomes a one-element list."""
        data = self.unwrap()
        if data is None:
            return []
        if isinstance(data, list):
            return data
        return [data]
