"""Tests for the adapter registry."""

from __future__ import annotations

from typing import Any

import pytest

from opendcat.adapters.base.adapter import AdapterHealth, SearchAdapter
from opendcat.adapters.base.registry import AdapterNotFoundError, AdapterRegistry
from opendcat.adapters.elasticsearch.adapter import ElasticsearchAdapter
from opendcat.config.settings import AdapterConfig
from opendcat.models.item import GenericItemProjection
from opendcat.models.search import SearchResultPage


class _StaticAdapter(SearchAdapter):
    """In-memory adapter used by registry and engine tests."""

    def __init__(self, label: str = "static", fail_health: bool = False, **kwargs: Any) -> None:
        self.label = label
        self.fail_health = fail_health
        self.initialized = False
        self.closed = False

    @property
    def name(self) -> str:
        return self.label

    async def initialize(self) -> None:
        self.initialized = True

    async def shutdown(self) -> None:
        self.closed = True

    async def search(self, query: str | None, start: int, num: int) -> SearchResultPage:
        return SearchResultPage(items=[], start_index=start, total_hits=0, items_per_page=num)

    def item_to_json(self, hit: Any) -> GenericItemProjection | None:
        return GenericItemProjection.model_validate(hit)

    async def health_check(self) -> AdapterHealth:
        if self.fail_health:
            raise RuntimeError("backend down")
        return AdapterHealth(status="healthy")


class _BrokenAdapter(_StaticAdapter):
    async def initialize(self) -> None:
        raise RuntimeError("cannot reach backend")


class TestAdapterRegistry:
    async def test_register_and_initialize(self) -> None:
        registry = AdapterRegistry()
        registry.register("static", _StaticAdapter)
        adapter = await registry.initialize_adapter("static", label="one")
        assert adapter.initialized  # type: ignore[attr-defined]
        assert registry.get("static") is adapter
        assert registry.active_adapters == ["static"]

    async def test_initialize_unknown_raises(self) -> None:
        with pytest.raises(AdapterNotFoundError, match="No adapter registered"):
            await AdapterRegistry().initialize_adapter("nope")

    def test_builtin_adapters_resolve_lazily(self) -> None:
        registry = AdapterRegistry()
        assert registry._resolve("opensearch") is ElasticsearchAdapter
        assert registry._resolve("elasticsearch") is ElasticsearchAdapter

    def test_get_uninitialized_raises(self) -> None:
        with pytest.raises(AdapterNotFoundError):
            AdapterRegistry().get("static")

    def test_get_without_name_uses_default(self) -> None:
        registry = AdapterRegistry(default="b")
        first, second = _StaticAdapter("a"), _StaticAdapter("b")
        registry.add_instance("a", first)
        registry.add_instance("b", second)
        assert registry.get() is second
        assert registry.get("a") is first

    def test_inactive_default_falls_back_to_first(self) -> None:
        registry = AdapterRegistry(default="missing")
        first = _StaticAdapter("a")
        registry.add_instance("a", first)
        registry.add_instance("b", _StaticAdapter("b"))
        assert registry.get() is first
        assert registry.get("") is first

    def test_get_with_nothing_active_raises(self) -> None:
        with pytest.raises(AdapterNotFoundError):
            AdapterRegistry(default="elasticsearch").get()

    async def test_configure_skips_disabled_unknown_and_failing(self) -> None:
        registry = AdapterRegistry()
        registry.register("static", _StaticAdapter)
        registry.register("broken", _BrokenAdapter)
        active = await registry.configure(
            {
                "static": AdapterConfig(extra={"label": "configured"}),
                "off": AdapterConfig(enabled=False),
                "mystery": AdapterConfig(),
                "broken": AdapterConfig(),
            }
        )
        assert active == ["static"]
        assert registry.get("static").name == "configured"

    async def test_health_check_all_reports_failures(self) -> None:
        registry = AdapterRegistry()
        registry.add_instance("ok", _StaticAdapter("ok"))
        registry.add_instance("bad", _StaticAdapter("bad", fail_health=True))
        statuses = await registry.health_check_all()
        assert statuses["ok"].status == "healthy"
        assert statuses["bad"].status == "unhealthy"
        assert statuses["bad"].message == "backend down"

    async def test_shutdown_all(self) -> None:
        registry = AdapterRegistry()
        adapter = _StaticAdapter()
        registry.add_instance("static", adapter)
        await registry.shutdown_all()
        assert adapter.closed
        assert registry.active_adapters == []
