"""Shared test fixtures and configuration."""

from __future__ import annotations

from typing import Any

import pytest

from opendcat.config.settings import Settings
from opendcat.core.transformer import EntryTransformer
from opendcat.models.dcat import DcatDefaults, Publisher
from opendcat.models.item import GenericItemProjection


@pytest.fixture
def settings(tmp_path) -> Settings:
    """Create a test Settings instance with defaults and a throwaway cache folder."""
    return Settings(
        _env_file=None,  # type: ignore[call-arg]
        debug=True,
        cache={"root": str(tmp_path / "dcat-cache")},
        observability={"log_level": "debug", "log_format": "console"},
    )


@pytest.fixture
def defaults() -> DcatDefaults:
    """A non-default defaults table, to tell injected values from built-ins."""
    return DcatDefaults(
        access_level="restricted public",
        license="https://creativecommons.org/publicdomain/zero/1.0/",
        bureau_code=("015:11",),
        program_code=("015:001",),
        publisher=Publisher(name="Department of Examples"),
        keyword=("geospatial",),
    )


@pytest.fixture
def transformer(defaults: DcatDefaults) -> EntryTransformer:
    return EntryTransformer(defaults)


@pytest.fixture
def parks_item() -> dict[str, Any]:
    """Projection of a typical record: keywords and a stored file, no links."""
    return {
        "id": "x1",
        "title": "Parks",
        "updated": "2021-06-01T00:00:00Z",
        "_source": {"keywords_s": ["parks", "gis"], "fileid": "abc123"},
        "links": [],
    }


@pytest.fixture
def trails_item() -> GenericItemProjection:
    """Projection with links and only a publication date."""
    return GenericItemProjection.model_validate(
        {
            "id": "t7",
            "title": "Hiking Trails",
            "description": "Trail centerlines maintained by the county.",
            "published": "2019-03-15",
            "_source": {},
            "links": [
                {"type": "WMS", "href": "https://maps.example.gov/wms?service=WMS"},
                {"type": "application/zip", "href": "https://data.example.gov/trails.zip"},
            ],
        }
    )


@pytest.fixture
def es_hit() -> dict[str, Any]:
    """Raw Elasticsearch hit from a geoportal metadata index."""
    return {
        "_index": "metadata",
        "_id": "0b5d2f9c",
        "_score": 1.0,
        "_source": {
            "title": "Flood Zones",
            "description": "FEMA flood hazard areas.",
            "sys_modified_dt": "2022-11-30T18:45:12.250Z",
            "apiso_PublicationDate_dt": "2020-01-01",
            "keywords_s": ["flood", "hazard"],
            "fileid": "https://geoportal.example.gov/rest/metadata/item/0b5d2f9c/xml",
            "resources_nst": [
                {"url_type_s": "ArcGIS MapServer", "url_s": "https://gis.example.gov/arcgis/rest/services/Flood/MapServer"},
                {"url_type_s": "KML"},
            ],
        },
    }
