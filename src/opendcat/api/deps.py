"""API dependencies — Dependency injection for FastAPI endpoints."""

from __future__ import annotations

from opendcat.core.engine import DcatEngine

# Global engine instance (set during application lifespan)
_engine: DcatEngine | None = None


def set_engine(engine: DcatEngine | None) -> None:
    """Set the global engine instance (called during app lifespan)."""
    global _engine
    _engine = engine


def get_engine() -> DcatEngine:
    """Get the global engine instance.

    Raises:
        RuntimeError: If the engine is not initialized.
    """
    if _engine is None:
        raise RuntimeError("OpenDCAT engine not initialized. Is the server running?")
    return _engine
