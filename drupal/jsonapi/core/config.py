"""Client configuration and shared defaults."""

from __future__ import annotations

from dataclasses import dataclass

DEFAULT_API_PREFIX = "/jsonapi"
DEFAULT_PAGE_LIMIT = 50
DEFAULT_TIMEOUT = 30.0
JSONAPI_MEDIA_TYPE = "application/vnd.api+json"

# Element cap meaning "no cap"
UNLIMITED = -1


@dataclass(frozen=True)
class ClientConfig:
    """Connection settings for a JSON:API client.

    Attributes:
        api_prefix: Path appended to the base URL to reach the root document
        timeout: Total request timeout in seconds
        page_limit: Page size requested for collections (``page[limit]``)
        authorization: Value of the Authorization header, if any
        accept: Value of the Accept header
    """

    api_prefix: str = DEFAULT_API_PREFIX
    timeout: float = DEFAULT_TIMEOUT
    page_limit: int = DEFAULT_PAGE_LIMIT
    authorization: str | None = None
    accept: str = JSONAPI_MEDIA_TYPE

    def __post_init__(self) -> None:
        if self.timeout <= 0:
            raise ValueError("timeout must be positive")
        if self.page_limit <= 0:
            raise ValueError("page_limit must be positive")

    def root_url(self, base_url: str) -> str:
        """URL of the root document listing every resource type."""
        return f"{base_url.rstrip('/')}{self.api_prefix}"
