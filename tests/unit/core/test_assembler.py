"""Tests for catalog envelope assembly."""

from __future__ import annotations

from typing import Any

from opendcat.core.assembler import CatalogAssembler
from opendcat.core.transformer import EntryTransformer
from opendcat.models.dcat import DcatCatalog
from opendcat.models.search import SearchResultPage


def _page(items: list[Any] | None, per_page: int = 10, start: int = 1, total: int = 25) -> SearchResultPage:
    return SearchResultPage(items=items, start_index=start, total_hits=total, items_per_page=per_page)


class TestEnvelope:
    def test_constants_and_counters(self, parks_item: dict[str, Any]) -> None:
        catalog = CatalogAssembler().assemble(_page([parks_item, {"id": "x2"}], start=11))
        doc = catalog.to_jsonld()
        assert doc["conformsTo"] == "https://project-open-data.cio.gov/v1.1/schema"
        assert doc["describedBy"] == "https://project-open-data.cio.gov/v1.1/schema/catalog.json"
        assert doc["@context"] == "https://project-open-data.cio.gov/v1.1/schema/catalog.jsonld"
        assert doc["@type"] == "dcat:Catalog"
        assert doc["start"] == 11
        assert doc["num"] == 2
        assert doc["total"] == 25
        assert doc["nextStart"] == 13
        assert [d["identifier"] for d in doc["dataset"]] == ["x1", "x2"]

    def test_key_order(self) -> None:
        doc = CatalogAssembler().assemble(_page([])).to_jsonld()
        assert list(doc) == [
            "conformsTo",
            "describedBy",
            "@context",
            "@type",
            "start",
            "num",
            "total",
            "nextStart",
            "dataset",
        ]

    def test_constants_identical_across_calls(self) -> None:
        assembler = CatalogAssembler()
        a = assembler.assemble(_page([{"id": "1"}])).to_jsonld()
        b = assembler.assemble(_page([], total=0)).to_jsonld()
        for key in ("conformsTo", "describedBy", "@context", "@type"):
            assert a[key] == b[key]

    def test_explicit_next_start_wins(self) -> None:
        catalog = CatalogAssembler().assemble(_page([{"id": "1"}]), next_start=77)
        assert catalog.next_start == 77

    def test_last_page_has_no_next(self) -> None:
        catalog = CatalogAssembler().assemble(_page([{"id": "24"}, {"id": "25"}], start=24, total=25))
        assert catalog.next_start == -1


class TestZeroPagePolicy:
    def test_zero_items_per_page_reports_nothing(self, parks_item: dict[str, Any]) -> None:
        catalog = CatalogAssembler().assemble(_page([parks_item, {"id": "x2"}], per_page=0))
        assert catalog.num == 0
        assert catalog.dataset == []
        assert catalog.total == 25

    def test_zero_page_still_valid_envelope(self) -> None:
        doc = CatalogAssembler().assemble(_page([{"id": "x"}], per_page=0)).to_jsonld()
        assert doc["@type"] == "dcat:Catalog"
        assert doc["dataset"] == []


class TestItems:
    def test_missing_items_is_empty_page(self) -> None:
        catalog = CatalogAssembler().assemble(_page(None))
        assert catalog.num == 0
        assert catalog.dataset == []
        assert catalog.next_start == -1

    def test_none_projection_becomes_placeholder_dataset(self) -> None:
        catalog = CatalogAssembler().assemble(_page([None]))
        assert catalog.num == 1
        assert catalog.dataset[0].title == "<unknown>"

    def test_projector_is_applied(self) -> None:
        def project(hit: dict[str, Any]) -> dict[str, Any]:
            return {"id": hit["_id"], "title": hit["name"].upper()}

        catalog = CatalogAssembler(item_to_json=project).assemble(_page([{"_id": "h1", "name": "roads"}]))
        assert catalog.dataset[0].identifier == "h1"
        assert catalog.dataset[0].title == "ROADS"

    def test_per_call_projector_overrides_default(self) -> None:
        assembler = CatalogAssembler(item_to_json=lambda hit: {"title": "default"})
        catalog = assembler.assemble(_page([{}]), item_to_json=lambda hit: {"title": "override"})
        assert catalog.dataset[0].title == "override"

    def test_uses_injected_transformer(self, transformer: EntryTransformer) -> None:
        catalog = CatalogAssembler(transformer).assemble(_page([{"id": "1"}]))
        assert catalog.dataset[0].publisher.name == "Department of Examples"

    def test_result_is_catalog_model(self) -> None:
        assert isinstance(CatalogAssembler().assemble(_page([])), DcatCatalog)
