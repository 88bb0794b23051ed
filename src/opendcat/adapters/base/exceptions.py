"""Adapter-specific exceptions."""


class AdapterError(Exception):
    """Base exception for adapter errors."""


class ConnectionError(AdapterError):
    """Raised when the adapter cannot reach the search backend."""


class QueryError(AdapterError):
    """Raised when a catalog search against the backend fails."""


class ConfigurationError(AdapterError):
    """Raised when adapter configuration is invalid."""
