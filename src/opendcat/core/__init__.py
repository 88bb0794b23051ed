"""DCAT transformation core — date selection, distributions, entries and catalog pages."""

from opendcat.core.assembler import CatalogAssembler
from opendcat.core.dates import select_valid_date
from opendcat.core.distribution import extract_distributions
from opendcat.core.transformer import EntryTransformer

__all__ = ["CatalogAssembler", "EntryTransformer", "extract_distributions", "select_valid_date"]
