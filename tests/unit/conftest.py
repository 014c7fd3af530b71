"""Shared fakes for unit tests."""

from __future__ import annotations

import asyncio
from collections import defaultdict
from typing import Any

import pytest

from drupal.jsonapi.core import TransportError
from drupal.jsonapi.models import Document

BASE_URL = "https://example.com"
ROOT_URL = f"{BASE_URL}/jsonapi"
ARTICLES_URL = f"{ROOT_URL}/node/article"


class FakeTransport:
    """In-memory document transport that records fetch concurrency per URL."""

    def __init__(
        self,
        documents: dict[str, dict[str, Any]] | None = None,
        *,
        delay: float = 0.0,
        failures: dict[str, int] | None = None,
    ) -> None:
        self.documents = dict(documents or {})
        self.delay = delay
        self.failures = dict(failures or {})
        self.calls: list[str] = []
        self._active: dict[str, int] = defaultdict(int)
        self.max_active: dict[str, int] = defaultdict(int)

    def add(self, documents: dict[str, dict[str, Any]]) -> None:
        self.documents.update(documents)

    async def fetch(self, url: str) -> Document:
        self.calls.append(url)
        self._active[url] += 1
        self.max_active[url] = max(self.max_active[url], self._active[url])
        try:
            await asyncio.sleep(self.delay)
            if self.failures.get(url, 0) > 0:
                self.failures[url] -= 1
                raise TransportError(f"GET {url} failed: 500 Internal Server Error", url=url, status_code=500)
            if url not in self.documents:
                raise TransportError(f"GET {url} failed: 404 Not Found", url=url, status_code=404)
            return Document.model_validate(self.documents[url])
        finally:
            self._active[url] -= 1


def page_url(first_url: str, offset: int) -> str:
    if offset == 0:
        return first_url
    separator = "&" if "?" in first_url else "?"
    return f"{first_url}{separator}page[offset]={offset}"


def article(seq: int, relationships: dict[str, Any] | None = None) -> dict[str, Any]:
    resource: dict[str, Any] = {
        "type": "node--article",
        "id": f"article-{seq}",
        "attributes": {"seq": seq, "title": f"Article {seq}"},
    }
    if relationships is not None:
        resource["relationships"] = relationships
    return resource


def build_chain(
    first_url: str,
    total: int,
    page_size: int,
    resource_factory=article,
) -> dict[str, dict[str, Any]]:
    """Documents for a ``next``-linked chain of pages holding ``total`` resources."""
    documents: dict[str, dict[str, Any]] = {}
    offsets = list(range(0, total, page_size)) or [0]
    for index, offset in enumerate(offsets):
        url = page_url(first_url, offset)
        data = [resource_factory(seq) for seq in range(offset, min(offset + page_size, total))]
        links: dict[str, Any] = {"self": {"href": url}}
        if index + 1 < len(offsets):
            links["next"] = {"href": page_url(first_url, offsets[index + 1])}
        documents[url] = {"jsonapi": {"version": "1.0"}, "data": data, "links": links}
    return documents


def root_document(types: dict[str, str]) -> dict[str, Any]:
    links: dict[str, Any] = {"self": {"href": ROOT_URL}}
    links.update({name: {"href": href} for name, href in types.items()})
    return {"jsonapi": {"version": "1.0"}, "data": [], "links": links}


@pytest.fixture
def transport() -> FakeTransport:
    return FakeTransport()


@pytest.fixture
def chain_transport() -> FakeTransport:
    """Three pages of two articles each, starting at ARTICLES_URL."""
    return FakeTransport(build_chain(ARTICLES_URL, total=6, page_size=2))


@pytest.fixture
def make_transport():
    """Factory for FakeTransport instances."""
    return FakeTransport


@pytest.fixture
def make_chain():
    """Factory for ``next``-linked page documents (see build_chain)."""
    return build_chain


@pytest.fixture
def make_article():
    return article


@pytest.fixture
def make_root():
    return root_document


@pytest.fixture
def urls() -> dict[str, str]:
    return {"base": BASE_URL, "root": ROOT_URL, "articles": ARTICLES_URL}
