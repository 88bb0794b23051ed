"""Base search adapter — Abstract interface for catalog search backends.

Every backend that should be published as a DCAT catalog implements this
interface. The adapter is responsible for:
  1. Executing a paged search against the backend
  2. Projecting each raw hit to a ``GenericItemProjection``
  3. Walking the whole index for the cache harvest
  4. Reporting health status
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import AsyncIterator
from typing import Any

from pydantic import BaseModel, Field

from opendcat.models.item import GenericItemProjection
from opendcat.models.search import SearchResultPage


class AdapterHealth(BaseModel):
    """Health status of a search adapter."""

    status: str = Field(description="Health status: healthy, degraded, unhealthy")
    latency_ms: int = Field(default=0, description="Latency of last health check in ms")
    last_check: str | None = Field(default=None, description="ISO timestamp of last health check")
    message: str | None = Field(default=None, description="Additional health message")


class SearchAdapter(ABC):
    """Abstract base class for catalog search adapters.

    All adapters must implement:
      - search(): Execute a paged query and return a ``SearchResultPage``
      - item_to_json(): Project one raw hit to the generic item shape
      - scan(): optional, defaults to paging through search()
      - health_check(): Report adapter health status

    Adapters should be stateless and safe to share between requests.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Unique adapter name (e.g., 'elasticsearch')."""

    @abstractmethod
    async def initialize(self) -> None:
        """Initialize the adapter (connections, pools, etc.).

        Called once during application startup.
        """

    @abstractmethod
    async def shutdown(self) -> None:
        """Gracefully shut down the adapter and release its connections."""

    @abstractmethod
    async def search(self, query: str | None, start: int, num: int) -> SearchResultPage:
        """Execute a paged search.

        Args:
            query: Free-text query, or ``None`` for all records.
            start: 1-based index of the first hit.
            num: Page size. ``0`` asks for counts only.

        Returns:
            The result page holding raw hits.
        """

    async def scan(self, page_size: int) -> AsyncIterator[SearchResultPage]:
        """Yield every record of the index, ``page_size`` hits at a time.

        The default walks ``search()`` pages until the next-record cursor
        runs out. Backends whose offset paging is capped (Elasticsearch's
        ``max_result_window``) override this with a cursor API.
        """
        start = 1
        while True:
            page = await self.search(None, start, page_size)
            yield page
            next_start = page.calc_next_record()
            if next_start < 0:
                break
            start = next_start

    @abstractmethod
    def item_to_json(self, hit: Any) -> GenericItemProjection | None:
        """Project one raw hit to the generic item shape.

        Returns ``None`` when the hit cannot be projected; the transformer
        then emits a placeholder dataset.
        """

    @abstractmethod
    async def health_check(self) -> AdapterHealth:
        """Check the health of the search backend."""
