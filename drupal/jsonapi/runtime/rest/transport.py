"""Document transport: fetch one URL and parse it into a Document."""

from __future__ import annotations

from typing import Protocol

from pydantic import ValidationError

from ...core.config import JSONAPI_MEDIA_TYPE
from ...core.exceptions import TransportError
from ...models.document import Document
from .http_client import HTTPClient


class Transport(Protocol):
    """Anything that can turn a URL into a parsed document."""

    async def fetch(self, url: str) -> Document: ...


class DocumentTransport:
    """Fetches JSON:API documents over HTTP.

    The Authorization header is attached to every request when a credential
    was supplied at construction.
    """

    def __init__(
        self,
        http: HTTPClient | None = None,
        *,
        authorization: str | None = None,
        accept: str = JSONAPI_MEDIA_TYPE,
        timeout: float = 30.0,
    ) -> None:
        self._owns_http = http is None
        self._http = http or HTTPClient(timeout=timeout)
        self._headers = {"Accept": accept}
        if authorization:
            self._headers["Authorization"] = authorization

    @property
    def headers(self) -> dict[str, str]:
        return dict(self._headers)

    async def fetch(self, url: str) -> Document:
        """Fetch and parse the document at ``url``.

        Raises:
            TransportError: If the request fails or the body is not a JSON object
        """
        body = await self._http.get_json(url, headers=self._headers)
        if not isinstance(body, dict):
            raise TransportError(f"GET {url} did not return a JSON object", url=url)
        try:
            return Document.model_validate(body)
        except ValidationError as e:
            raise TransportError(f"GET {url} returned an unreadable document: {e}", url=url) from e

    async def close(self) -> None:
        if self._owns_http:
            await self._http.close()
