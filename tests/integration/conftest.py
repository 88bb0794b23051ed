"""Integration test fixtures — a real Elasticsearch seeded with geoportal-style records.

Expects a backend on localhost:9200, e.g.:
    docker run -p 9200:9200 -e discovery.type=single-node -e xpack.security.enabled=false elasticsearch:8.13.4

The tests skip when no backend answers.
"""

from __future__ import annotations

import asyncio
import time
from typing import Any

import httpx
import pytest

TEST_INDEX = "opendcat-test"

MOCK_RECORDS: list[dict[str, Any]] = [
    {
        "id": "rec-001",
        "title": "County Parks",
        "description": "Boundaries of county-owned parks and open space.",
        "sys_modified_dt": "2021-06-01T00:00:00Z",
        "keywords_s": ["parks", "recreation"],
        "fileid": "https://geoportal.example.gov/rest/metadata/item/rec-001/xml",
        "resources_nst": [
            {"url_type_s": "ArcGIS MapServer", "url_s": "https://gis.example.gov/arcgis/rest/services/Parks/MapServer"},
        ],
    },
    {
        "id": "rec-002",
        "title": "Flood Hazard Zones",
        "description": "Special flood hazard areas from the effective FIRM.",
        "apiso_PublicationDate_dt": "2020-01-15T00:00:00Z",
        "keywords_s": ["flood", "hazard"],
        "resources_nst": [
            {"url_type_s": "WMS", "url_s": "https://maps.example.gov/wms?layers=flood"},
            {"url_type_s": "KML", "url_s": "https://maps.example.gov/flood.kml"},
        ],
    },
    {
        "id": "rec-003",
        "title": "Hiking Trails",
        "sys_modified_dt": "2023-02-10T08:30:00Z",
    },
    {
        "id": "rec-004",
        "title": "Bus Routes",
        "description": "Fixed-route transit lines.",
        "sys_modified_dt": "2022-09-01T00:00:00Z",
        "keywords_s": ["transit"],
    },
    {
        "id": "rec-005",
        "title": "School Districts",
        "description": "Unified school district boundaries.",
        "sys_modified_dt": "2019-07-04T12:00:00Z",
        "fileid": "https://geoportal.example.gov/rest/metadata/item/rec-005/xml",
    },
]


def _wait_for_service(url: str, timeout: float = 60.0) -> bool:
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        try:
            r = httpx.get(url, timeout=10)
            if r.status_code == 200:
                return True
        except httpx.HTTPError:
            pass
        time.sleep(2)
    return False


async def _seed_elasticsearch(host: str, index: str = TEST_INDEX) -> None:
    async with httpx.AsyncClient(base_url=host, timeout=30) as client:
        await client.delete(f"/{index}", params={"ignore_unavailable": "true"})

        mapping = {
            "mappings": {
                "properties": {
                    "title": {"type": "text"},
                    "description": {"type": "text"},
                    "sys_modified_dt": {"type": "date"},
                    "apiso_PublicationDate_dt": {"type": "date"},
                    "keywords_s": {"type": "keyword"},
                    "fileid": {"type": "keyword"},
                    "resources_nst": {
                        "type": "nested",
                        "properties": {
                            "url_type_s": {"type": "keyword"},
                            "url_s": {"type": "keyword"},
                        },
                    },
                }
            }
        }
        resp = await client.put(f"/{index}", json=mapping)
        resp.raise_for_status()

        for record in MOCK_RECORDS:
            body = {k: v for k, v in record.items() if k != "id"}
            resp = await client.put(f"/{index}/_doc/{record['id']}", json=body)
            resp.raise_for_status()

        await client.post(f"/{index}/_refresh")


@pytest.fixture(scope="session")
def elasticsearch_ready() -> str:
    host = "http://localhost:9200"
    if not _wait_for_service(host):
        pytest.skip("Elasticsearch not available at localhost:9200")
    asyncio.run(_seed_elasticsearch(host))
    return host


@pytest.fixture
def test_index() -> str:
    return TEST_INDEX


@pytest.fixture
def mock_records() -> list[dict[str, Any]]:
    return MOCK_RECORDS
