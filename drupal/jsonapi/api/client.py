"""JSON:API client facade.

The client resolves resource types through the API's root link table and
hands back lazily paginated ``Collection`` handles.

Example:
    >>> async with JSONAPIClient("https://example.com", authorization="Bearer t") as client:
    ...     articles = await client.all("node--article", limit=20, sort="-created")
    ...     more = await articles.consume(lambda article: print(article.attributes["title"]))
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import replace
from typing import Any

from ..core.config import UNLIMITED, ClientConfig
from ..models.document import Resource
from ..models.relationships import expand_relationships
from ..runtime.links import LinkTable
from ..runtime.pagination import Collection, ResourceCursor
from ..runtime.rest.transport import DocumentTransport, Transport
from .filters import Filter, sort_param

logger = logging.getLogger(__name__)


class JSONAPIClient:
    """Read-only client for a Drupal-style JSON:API server."""

    def __init__(
        self,
        base_url: str,
        *,
        authorization: str | None = None,
        config: ClientConfig | None = None,
        transport: Transport | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            base_url: Site URL; the root document lives at ``base_url + api_prefix``
            authorization: Authorization header value (overrides config)
            config: Connection settings (defaults to ``ClientConfig()``)
            transport: Optional document transport (created when not provided)
        """
        config = config or ClientConfig()
        if authorization is not None:
            config = replace(config, authorization=authorization)
        self.base_url = base_url.rstrip("/")
        self.config = config
        self._owns_transport = transport is None
        self._transport = transport or DocumentTransport(
            authorization=config.authorization,
            accept=config.accept,
            timeout=config.timeout,
        )
        self._links = LinkTable(self._transport, config.root_url(self.base_url))

    @property
    def transport(self) -> Transport:
        return self._transport

    @property
    def links(self) -> LinkTable:
        return self._links

    async def get_link(self, type_name: str) -> str:
        """Collection URL for a resource type.

        Raises:
            UnknownTypeError: If the type is not in the root link table
        """
        return await self._links.resolve(type_name)

    async def get(self, type_name: str, id: str) -> Resource | list[Resource] | None:
        """Fetch a single resource by id."""
        link = f"{await self.get_link(type_name)}/{id}"
        document = await self._transport.fetch(link)
        return document.unwrap()

    async def all(
        self,
        type_name: str,
        *,
        limit: int = UNLIMITED,
        sort: str | Sequence[str] = "",
        filter: str | Filter = "",
        relationships: Any = None,
        page_limit: int | None = None,
    ) -> Collection:
        """Lazily paginated collection of every resource of a type.

        Args:
            type_name: Resource type, e.g. ``node--article``
            limit: Element cap, -1 for unlimited
            sort: Sort fields (``-created`` or ``["-sticky", "title"]``)
            filter: Filter builder or pre-rendered filter fragment
            relationships: Relationship names/specs to expand on each resource
            page_limit: Page size override

        Raises:
            UnknownTypeError: If the type is not in the root link table
            ValueError: If the relationship specs or page size are invalid
        """
        page_limit = page_limit if page_limit is not None else self.config.page_limit
        if page_limit <= 0:
            raise ValueError("page_limit must be positive")
        expanded = expand_relationships(relationships)
        link = await self.collection_link(
            type_name, sort=sort, filter=filter, page=f"page[limit]={page_limit}"
        )
        logger.debug("collection_requested", extra={"type": type_name, "link": link, "limit": limit})
        return self.paginate(link, limit, expanded)

    def paginate(self, link: str, limit: int = UNLIMITED, relationships: Any = None) -> Collection:
        """Collection over an arbitrary link chain starting at ``link``."""
        cursor = ResourceCursor(self._transport, link, limit)
        return Collection(cursor, expand_relationships(relationships), self.paginate)

    def filter(self, expr: Any = None) -> Filter:
        """New filter builder, optionally seeded with shorthand ``{field: value}``."""
        return Filter(expr)

    async def collection_link(
        self,
        type_name: str,
        *,
        sort: str | Sequence[str] = "",
        filter: str | Filter = "",
        page: str = "",
    ) -> str:
        """Collection URL with filter, sort and page query parts, in that order."""
        parts = []
        filter_query = str(filter) if filter else ""
        if filter_query:
            parts.append(filter_query)
        sort_query = sort_param(sort) if sort else ""
        if sort_query:
            parts.append(f"sort={sort_query}")
        if page:
            parts.append(page)
        link = await self.get_link(type_name)
        if not parts:
            return link
        separator = "&" if "?" in link else "?"
        return f"{link}{separator}{'&'.join(parts)}"

    async def close(self) -> None:
        """Close the owned transport."""
        if self._owns_transport and isinstance(self._transport, DocumentTransport):
            await self._transport.close()

    async def __aenter__(self) -> JSONAPIClient:
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()
