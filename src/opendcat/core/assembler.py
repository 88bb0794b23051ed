"""Catalog Assembler — Builds the ``dcat:Catalog`` envelope for one result page."""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from typing import Any

from opendcat.core.transformer import EntryTransformer
from opendcat.models.dcat import DcatCatalog
from opendcat.models.item import GenericItemProjection
from opendcat.models.search import SearchResultPage

logger = logging.getLogger(__name__)

ItemProjector = Callable[[Any], GenericItemProjection | Mapping[str, Any] | None]


def _identity(item: Any) -> Any:
    return item


class CatalogAssembler:
    """Drives per-item conversion and wraps the results in a catalog envelope.

    A page requested with ``items_per_page == 0`` is a counts-only request:
    ``num`` is reported as 0 and no datasets are emitted even if the backend
    returned hits.

    Args:
        transformer: Entry transformer (carries the DCAT defaults).
        item_to_json: Projects a raw hit into a ``GenericItemProjection``.
            Defaults to identity, for pages whose items are already projected.
    """

    def __init__(
        self,
        transformer: EntryTransformer | None = None,
        item_to_json: ItemProjector | None = None,
    ) -> None:
        self.transformer = transformer or EntryTransformer()
        self.item_to_json = item_to_json or _identity

    def assemble(
        self,
        result: SearchResultPage,
        next_start: int | None = None,
        item_to_json: ItemProjector | None = None,
    ) -> DcatCatalog:
        """Assemble the catalog for one result page.

        Args:
            result: The search-result page.
            next_start: Next-page cursor from the caller's paging helper.
                When omitted, ``result.calc_next_record()`` is used.
            item_to_json: Per-call projector overriding the instance default
                (e.g. the adapter that produced this page).

        Returns:
            The catalog envelope with one dataset per item.
        """
        items = result.items or []
        num_returned = 0 if result.items_per_page == 0 else len(items)
        project = item_to_json or self.item_to_json

        catalog = DcatCatalog(
            start=result.start_index,
            num=num_returned,
            total=result.total_hits,
            next_start=next_start if next_start is not None else result.calc_next_record(),
        )

        if result.items_per_page > 0:
            catalog.dataset = [self.transformer.transform(project(item)) for item in items]

        logger.debug(
            "Assembled catalog page start=%s num=%d total=%s datasets=%d",
            catalog.start,
            catalog.num,
            catalog.total,
            len(catalog.dataset),
        )
        return catalog
