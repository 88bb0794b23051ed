"""OpenDCAT Engine — Orchestrates search adapters, catalog assembly and the cache.

Request lifecycle:
  1. Pick the adapter (named in the request, else the configured default)
  2. Run one paged search against the backend
  3. Project each hit and transform it into a DCAT dataset
  4. Wrap the page in a ``dcat:Catalog`` envelope

``build_cache`` runs the same pipeline over every page of the index and
stores the combined catalog with ``DcatCache``.
"""

from __future__ import annotations

import asyncio
import logging
import time
from pathlib import Path
from typing import TYPE_CHECKING, Any

from opendcat.adapters.base.registry import AdapterRegistry
from opendcat.cache.dcat_cache import DcatCache
from opendcat.core.assembler import CatalogAssembler
from opendcat.core.transformer import EntryTransformer
from opendcat.models.dcat import DcatCatalog
from opendcat.models.search import CatalogRequest

if TYPE_CHECKING:
    from opendcat.adapters.base.adapter import SearchAdapter
    from opendcat.config.settings import Settings

logger = logging.getLogger(__name__)


class DcatEngine:
    """Core orchestrator for DCAT catalog publishing.

    Attributes:
        settings: Application configuration.
        defaults: Frozen DCAT defaults table, built once from ``settings.dcat``.
        assembler: Catalog assembler sharing the defaults.
        adapter_registry: Registry of search adapters.
        cache: Harvested catalog cache.
    """

    def __init__(self, settings: Settings) -> None:
        self.settings = settings
        self.defaults = settings.dcat.to_defaults()
        self.assembler = CatalogAssembler(EntryTransformer(self.defaults))
        self.adapter_registry = AdapterRegistry(default=settings.search.default_adapter)
        self.cache = DcatCache(settings.cache.root)

    async def initialize(self) -> None:
        """Prepare engine resources."""
        self.cache.init()
        logger.info("OpenDCAT engine initialized (publisher=%s)", self.defaults.publisher.name)

    async def shutdown(self) -> None:
        """Gracefully shut down all components."""
        await self.adapter_registry.shutdown_all()
        logger.info("OpenDCAT engine shut down")

    def _adapter(self, name: str | None) -> SearchAdapter:
        return self.adapter_registry.get(name)

    async def catalog(self, request: CatalogRequest) -> DcatCatalog:
        """Build the catalog page for one request.

        Raises:
            AdapterNotFoundError: If the requested adapter is not available.
            AdapterError: If the backend search fails.
        """
        start_time = time.monotonic()
        adapter = self._adapter(request.adapter)
        page = await adapter.search(request.q, request.start, request.num)
        catalog = self.assembler.assemble(page, item_to_json=adapter.item_to_json)
        logger.info(
            "Catalog page via %s: start=%d num=%d total=%s in %dms",
            adapter.name,
            request.start,
            catalog.num,
            catalog.total,
            int((time.monotonic() - start_time) * 1000),
        )
        return catalog

    async def build_cache(self, adapter_name: str | None = None) -> Path:
        """Harvest every record into one catalog and store it in the cache.

        Records come from ``adapter.scan()``; the snapshot is written from a
        worker thread.

        Returns:
            Path of the written cache file.
        """
        adapter = self._adapter(adapter_name)
        page_size = self.settings.dcat.harvest_page_size
        harvested = DcatCatalog(start=1, next_start=-1, total=0)

        async for page in adapter.scan(page_size):
            part = self.assembler.assemble(page, item_to_json=adapter.item_to_json)
            harvested.dataset.extend(part.dataset)
            harvested.total = part.total

        harvested.num = len(harvested.dataset)
        logger.info("Harvested %d datasets via %s", harvested.num, adapter.name)
        return await asyncio.to_thread(self.cache.write, harvested.to_jsonld())

    def cached_catalog(self) -> dict[str, Any]:
        """Return the latest harvested catalog.

        Raises:
            CacheNotFoundError: If the cache has not been built yet.
        """
        return self.cache.read()
