"""Distribution list construction."""

from __future__ import annotations

from opendcat.models.dcat import DcatDistribution, FileDistribution, LinkDistribution
from opendcat.models.item import GenericItemProjection


def extract_distributions(item: GenericItemProjection) -> list[DcatDistribution]:
    """Build the ``distribution`` array for one item.

    The stored metadata file (``_source.fileid``) comes first when present,
    followed by one entry per link in the item's original link order. No
    de-duplication or URL validation is applied.
    """
    distributions: list[DcatDistribution] = []

    if item.source.fileid:
        distributions.append(FileDistribution(download_url=item.source.fileid))

    for link in item.links:
        distributions.append(LinkDistribution(media_type=link.type, access_url=link.href))

    return distributions
