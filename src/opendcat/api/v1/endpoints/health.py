"""Health check endpoints — System and adapter health monitoring."""

from __future__ import annotations

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from opendcat import __version__
from opendcat.adapters.base.adapter import AdapterHealth
from opendcat.api.deps import get_engine
from opendcat.core.engine import DcatEngine

router = APIRouter()


class HealthResponse(BaseModel):
    """System health check response."""

    status: str = Field(description="Health status (e.g. 'healthy')")
    version: str = Field(description="OpenDCAT server version")
    service: str = Field(description="Service name ('opendcat')")
    default_adapter: str = Field(description="Name of the default search adapter")
    active_adapters: list[str] = Field(description="Currently active adapter names")
    publisher: str = Field(description="Publisher name stamped on every dataset")


class AdapterHealthResponse(BaseModel):
    """Per-adapter health check response."""

    adapters: dict[str, AdapterHealth] = Field(description="Map of adapter name to its health status")


@router.get("/health", response_model=HealthResponse, summary="System Health Check")
async def health_check(engine: DcatEngine = Depends(get_engine)) -> HealthResponse:
    """Basic health check endpoint with adapter info."""
    return HealthResponse(
        status="healthy",
        version=__version__,
        service="opendcat",
        default_adapter=engine.settings.search.default_adapter,
        active_adapters=engine.adapter_registry.active_adapters,
        publisher=engine.defaults.publisher.name,
    )


@router.get("/health/adapters", response_model=AdapterHealthResponse, summary="Adapter Health Check")
async def adapter_health(engine: DcatEngine = Depends(get_engine)) -> AdapterHealthResponse:
    """Check health of all search adapters."""
    return AdapterHealthResponse(adapters=await engine.adapter_registry.health_check_all())
