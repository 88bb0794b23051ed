"""DCAT endpoints — Catalog pages and the harvested catalog snapshot.

``GET /v1/dcat`` runs a search and returns one DCAT-US catalog page;
``GET /v1/dcat/cached`` serves the full catalog last written by
``opendcat --build-cache``.
"""

from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, Depends, HTTPException, Query

from opendcat.adapters.base.exceptions import AdapterError
from opendcat.adapters.base.registry import AdapterNotFoundError
from opendcat.api.deps import get_engine
from opendcat.cache.dcat_cache import CacheNotFoundError
from opendcat.core.engine import DcatEngine
from opendcat.models.dcat import DcatCatalog
from opendcat.models.search import CatalogRequest

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get(
    "/dcat",
    response_model=DcatCatalog,
    response_model_by_alias=True,
    response_model_exclude_none=True,
    summary="DCAT-US Catalog Page",
    description=(
        "Search the catalog backend and return the hits as a DCAT-US "
        "(Project Open Data v1.1) catalog page.\n\n"
        "`num=0` returns counts only: `num` is reported as 0 and `dataset` is empty."
    ),
    responses={
        404: {"description": "Unknown or uninitialized adapter"},
        502: {"description": "Search backend failed"},
    },
)
async def dcat_catalog(
    q: str | None = Query(default=None, description="Free-text query"),
    start: int = Query(default=1, ge=1, description="1-based index of the first record"),
    num: int | None = Query(default=None, ge=0, le=100, description="Page size"),
    adapter: str | None = Query(default=None, description="Adapter name"),
    engine: DcatEngine = Depends(get_engine),
) -> DcatCatalog:
    """Return one DCAT catalog page."""
    request = CatalogRequest(
        q=q,
        start=start,
        num=engine.settings.search.default_page_size if num is None else num,
        adapter=adapter,
    )
    try:
        return await engine.catalog(request)
    except AdapterNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e)) from e
    except AdapterError as e:
        logger.error("Catalog search failed: %s", e, exc_info=True)
        raise HTTPException(status_code=502, detail=f"Search backend failed: {e!s}") from e


@router.get(
    "/dcat/cached",
    summary="Harvested DCAT-US Catalog",
    description="Return the full catalog from the latest cache snapshot.",
    responses={404: {"description": "No cache snapshot has been built yet"}},
)
def dcat_cached(engine: DcatEngine = Depends(get_engine)) -> dict[str, Any]:
    """Serve the latest cached catalog.

    Declared sync so the snapshot read and parse run in the threadpool.
    """
    try:
        return engine.cached_catalog()
    except CacheNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e)) from e
