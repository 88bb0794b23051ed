"""API v1 Router — Catalog and health endpoints."""

from __future__ import annotations

from fastapi import APIRouter

from opendcat.api.v1.endpoints.dcat import router as dcat_router
from opendcat.api.v1.endpoints.health import router as health_router

router = APIRouter(tags=["v1"])
router.include_router(dcat_router)
router.include_router(health_router)
