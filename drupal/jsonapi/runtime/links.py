"""Root link table: resource type to collection URL."""

from __future__ import annotations

import asyncio
import logging

from ..core.exceptions import UnknownTypeError
from ..models.document import link_href
from .rest.transport import Transport

logger = logging.getLogger(__name__)


class LinkTable:
    """Resolves resource types against the root document's ``links`` map.

    The root document is fetched once, on first use, and the table is
    read-only afterwards. A failed root fetch is not remembered, so a later
    call retries it.
    """

    def __init__(self, transport: Transport, root_url: str) -> None:
        self._transport = transport
        self.root_url = root_url
        self._links: dict[str, str] | None = None
        self._lock = asyncio.Lock()

    @property
    def loaded(self) -> bool:
        return self._links is not None

    async def links(self) -> dict[str, str]:
        """Return the resolved ``{type: url}`` map, loading it if needed."""
        if self._links is not None:
            return self._links
        async with self._lock:
            if self._links is None:
                try:
                    document = await self._transport.fetch(self.root_url)
                except Exception:
                    logger.error("Unable to resolve resource links.", extra={"root_url": self.root_url})
                    raise
                resolved: dict[str, str] = {}
                for name, link in document.links.items():
                    href = link_href(link)
                    if href is not None:
                        resolved[name] = href
                self._links = resolved
                logger.debug("link_table_loaded", extra={"root_url": self.root_url, "types": len(resolved)})
        return self._links

    async def resolve(self, type_name: str) -> str:
        """Collection URL for ``type_name``.

        Raises:
            UnknownTypeError: If the type is not in the root link table
        """
        links = await self.links()
        try:
            return links[type_name]
        except KeyError:
            raise UnknownTypeError(
                f"'{type_name}' is not a valid type for {self.root_url}.",
                type_name=type_name,
                base_url=self.root_url,
            ) from None
