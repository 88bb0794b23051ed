"""Entry Transformer — Converts one item projection into a DCAT-US Dataset.

Mapping (source → DCAT):

  ============================  ==================================
  ``id``                        ``identifier`` (unchanged)
  ``title`` / ``description``   same name, ``<unknown>`` if empty
  ``updated`` → ``published``   ``modified`` (first valid, else now)
  ``_source.keywords_s``        ``keyword`` (defaults if empty)
  ``_source.fileid``, ``links`` ``distribution``
  ============================  ==================================

License, access level, bureau/program codes and publisher always come from
the injected ``DcatDefaults``; there is no per-item override.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from opendcat.core.dates import select_valid_date, utc_now_iso
from opendcat.core.distribution import extract_distributions
from opendcat.models.dcat import DEFAULT_DCAT, DcatDataset, DcatDefaults
from opendcat.models.item import GenericItemProjection

UNKNOWN = "<unknown>"


class EntryTransformer:
    """Maps generic item projections to ``DcatDataset`` records.

    Stateless apart from the frozen defaults table, so one instance can be
    shared across concurrent requests.

    Attributes:
        defaults: Catalog-level constants merged into every dataset.
    """

    def __init__(self, defaults: DcatDefaults = DEFAULT_DCAT) -> None:
        self.defaults = defaults

    def transform(self, item: GenericItemProjection | Mapping[str, Any] | None) -> DcatDataset:
        """Convert one item projection into a dataset record.

        Missing or malformed fields fall back to placeholders/defaults;
        this method does not raise for incomplete input.

        Args:
            item: The projected search hit. ``None`` is treated as an empty
                projection.

        Returns:
            The DCAT dataset record.
        """
        projection = self._coerce(item)
        source = projection.source

        return DcatDataset(
            identifier=projection.id,
            title=projection.title or UNKNOWN,
            description=projection.description or UNKNOWN,
            modified=select_valid_date([projection.updated, projection.published]) or utc_now_iso(),
            keyword=list(source.keywords_s or self.defaults.keyword),
            distribution=extract_distributions(projection),
            license=self.defaults.license,
            access_level=self.defaults.access_level,
            bureau_code=list(self.defaults.bureau_code),
            program_code=list(self.defaults.program_code),
            publisher=self.defaults.publisher,
        )

    @staticmethod
    def _coerce(item: GenericItemProjection | Mapping[str, Any] | None) -> GenericItemProjection:
        if isinstance(item, GenericItemProjection):
            return item
        if not item:
            return GenericItemProjection()
        return GenericItemProjection.lenient(item)
