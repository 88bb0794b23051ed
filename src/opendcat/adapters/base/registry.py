"""Adapter Registry — Named search adapters, built from the ``search.adapters`` config."""

from __future__ import annotations

import asyncio
import importlib
import logging
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from opendcat.adapters.base.adapter import AdapterHealth, SearchAdapter

if TYPE_CHECKING:
    from opendcat.config.settings import AdapterConfig

logger = logging.getLogger(__name__)

# Adapters shipped with OpenDCAT, imported on first use ("module:Class")
BUILTIN_ADAPTERS: dict[str, str] = {
    "elasticsearch": "opendcat.adapters.elasticsearch.adapter:ElasticsearchAdapter",
    "opensearch": "opendcat.adapters.elasticsearch.adapter:ElasticsearchAdapter",
}


class AdapterNotFoundError(Exception):
    """Raised when a requested adapter is not registered or not initialized."""


class AdapterRegistry:
    """Adapter classes by name and the live instances serving catalog requests.

    Args:
        default: Adapter used when a request names none. If it is not
            active, the first active adapter is used instead.

    Example:
        >>> registry = AdapterRegistry(default="elasticsearch")
        >>> await registry.configure(settings.search.adapters)
        >>> adapter = registry.get()
    """

    def __init__(self, default: str | None = None) -> None:
        self.default = default
        self._classes: dict[str, type[SearchAdapter]] = {}
        self._instances: dict[str, SearchAdapter] = {}

    def register(self, name: str, adapter_class: type[SearchAdapter]) -> None:
        """Register an adapter class under ``name`` (overrides a built-in)."""
        if name in self._classes:
            logger.warning("Overwriting existing adapter registration: %s", name)
        self._classes[name] = adapter_class

    def add_instance(self, name: str, adapter: SearchAdapter) -> None:
        """Install an already initialized adapter instance."""
        self._instances[name] = adapter

    def _resolve(self, name: str) -> type[SearchAdapter]:
        if name in self._classes:
            return self._classes[name]
        target = BUILTIN_ADAPTERS.get(name)
        if target is None:
            raise AdapterNotFoundError(
                f"No adapter registered with name '{name}'. "
                f"Available adapters: {sorted(set(self._classes) | set(BUILTIN_ADAPTERS))}"
            )
        module_path, class_name = target.split(":")
        adapter_class = getattr(importlib.import_module(module_path), class_name)
        self._classes[name] = adapter_class
        return adapter_class

    async def initialize_adapter(self, name: str, **kwargs: Any) -> SearchAdapter:
        """Create and initialize the adapter registered as ``name``.

        Raises:
            AdapterNotFoundError: If ``name`` is neither registered nor built in.
        """
        adapter = self._resolve(name)(**kwargs)
        await adapter.initialize()
        self._instances[name] = adapter
        logger.info("Initialized adapter: %s", name)
        return adapter

    async def configure(self, adapters: Mapping[str, AdapterConfig]) -> list[str]:
        """Initialize every enabled adapter from its config entry.

        An adapter that cannot be resolved or fails to initialise is logged
        and skipped, so the service still starts (``/v1/dcat/cached`` keeps
        working).

        Returns:
            Names of the adapters that are now active.
        """
        for name, cfg in adapters.items():
            if not cfg.enabled:
                logger.info("Adapter '%s' is disabled, skipping", name)
                continue
            try:
                await self.initialize_adapter(name, **cfg.adapter_kwargs())
            except AdapterNotFoundError:
                logger.warning("Unknown adapter '%s'; register it via adapter_registry.register()", name)
            except Exception:
                logger.warning("Failed to initialise adapter '%s'", name, exc_info=True)
        return self.active_adapters

    def get(self, name: str | None = None) -> SearchAdapter:
        """Return the active adapter ``name``, or the default one when ``name`` is empty.

        Raises:
            AdapterNotFoundError: If the named adapter is not active, or none is.
        """
        if name:
            if name not in self._instances:
                raise AdapterNotFoundError(f"Adapter '{name}' is not initialized.")
            return self._instances[name]
        if self.default in self._instances:
            return self._instances[self.default]
        if not self._instances:
            raise AdapterNotFoundError("No adapters are initialized.")
        return next(iter(self._instances.values()))

    async def health_check_all(self) -> dict[str, AdapterHealth]:
        """Check every active adapter concurrently; a raising check reports unhealthy."""
        names = list(self._instances)
        outcomes = await asyncio.gather(
            *(self._instances[n].health_check() for n in names),
            return_exceptions=True,
        )
        return {
            name: out if isinstance(out, AdapterHealth) else AdapterHealth(status="unhealthy", message=str(out))
            for name, out in zip(names, outcomes, strict=True)
        }

    async def shutdown_all(self) -> None:
        """Shut down and drop every active adapter."""
        for name, adapter in self._instances.items():
            try:
                await adapter.shutdown()
            except Exception:
                logger.warning("Error shutting down adapter: %s", name, exc_info=True)
        self._instances.clear()

    @property
    def active_adapters(self) -> list[str]:
        """Names of the initialized adapters, in initialization order."""
        return list(self._instances)
