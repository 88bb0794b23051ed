"""Search request and result-page models."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class CatalogRequest(BaseModel):
    """Parameters of one catalog page request."""

    q: str | None = Field(default=None, description="Free-text query (None = all records)")
    start: int = Field(default=1, ge=1, description="1-based index of the first record")
    num: int = Field(default=10, ge=0, le=100, description="Page size; 0 returns counts only")
    adapter: str | None = Field(default=None, description="Adapter name (None = default)")


class SearchResultPage(BaseModel):
    """One page of hits returned by a search adapter.

    ``items`` holds the adapter's raw hits; they are projected with the
    adapter's ``item_to_json`` before transformation.
    """

    items: list[Any] | None = Field(default_factory=list, description="Raw hits on this page")
    start_index: int = Field(default=1, description="1-based index of the first hit")
    total_hits: int = Field(default=0, description="Total number of matching records")
    items_per_page: int = Field(default=10, description="Requested page size")

    def calc_next_record(self) -> int:
        """Compute the start index of the next page.

        Returns:
            The 1-based start of the next page, or ``-1`` when this page is
            the last one (or returned nothing).
        """
        returned = len(self.items or [])
        if returned == 0 or self.total_hits <= 0:
            return -1
        next_start = self.start_index + returned
        return next_start if next_start <= self.total_hits else -1
