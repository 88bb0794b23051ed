"""Application settings — Pydantic-based configuration with YAML and env var support.

Configuration is loaded from (in order of precedence):
  1. YAML config file (if specified)
  2. Environment variables (OPENDCAT_ prefix)
  3. Default values
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings

from opendcat.models.dcat import DcatDefaults, Publisher


class ServerSettings(BaseModel):
    """HTTP server configuration."""

    host: str = Field(default="0.0.0.0", description="Server bind address")
    port: int = Field(default=8080, description="Server port")
    workers: int = Field(default=4, description="Number of worker processes")
    cors_origins: list[str] = Field(default=["*"], description="Allowed CORS origins")


class AdapterConfig(BaseModel):
    """Configuration for a single search adapter."""

    enabled: bool = Field(default=True, description="Whether this adapter is active")
    hosts: list[str] = Field(default_factory=list, description="Backend host URLs")
    index: str = Field(default="metadata", description="Index holding the catalog records")
    username: str | None = Field(default=None, description="Authentication username")
    password: str | None = Field(default=None, description="Authentication password")
    api_key: str | None = Field(default=None, description="API key authentication")
    extra: dict[str, Any] = Field(default_factory=dict, description="Adapter-specific options")

    @field_validator("hosts", mode="before")
    @classmethod
    def _parse_hosts(cls, v: Any) -> list[str]:
        """Parse hosts from JSON string (env var) or list."""
        if isinstance(v, str):
            import json

            try:
                parsed = json.loads(v)
                if isinstance(parsed, list):
                    return [str(h) for h in parsed]
            except (json.JSONDecodeError, TypeError):
                pass
            return [v] if v else []
        return list(v)

    def adapter_kwargs(self) -> dict[str, Any]:
        """Constructor keyword arguments for the adapter this entry configures."""
        kwargs: dict[str, Any] = {"index": self.index}
        if self.hosts:
            kwargs["hosts"] = self.hosts
        if self.api_key:
            kwargs["api_key"] = self.api_key
        if self.username:
            kwargs["username"] = self.username
        if self.password:
            kwargs["password"] = self.password
        kwargs.update(self.extra)
        return kwargs


class SearchSettings(BaseModel):
    """Search backend configuration."""

    default_adapter: str = Field(default="elasticsearch", description="Default search adapter name")
    adapters: dict[str, AdapterConfig] = Field(default_factory=dict, description="Adapter configurations")
    default_page_size: int = Field(default=10, ge=0, le=100, description="Page size when 'num' is omitted")


class DcatSettings(BaseModel):
    """Catalog-level DCAT-US defaults applied to every dataset.

    These are read once at startup and frozen into a ``DcatDefaults``
    value; changing them requires a restart.
    """

    access_level: str = Field(default="public", description="Dataset accessLevel")
    license: str = Field(
        default="http://www.usa.gov/publicdomain/label/1.0/",
        description="Dataset license URI",
    )
    bureau_code: list[str] = Field(default=["010:04"], description="OMB bureau codes")
    program_code: list[str] = Field(default=["010:000"], description="Federal program inventory codes")
    publisher_name: str = Field(default="Your Publisher", description="Publishing organization name")
    keyword: list[str] = Field(default=["metadata"], description="Fallback keywords for untagged records")
    harvest_page_size: int = Field(default=100, ge=1, le=1000, description="Page size used when building the cache")

    def to_defaults(self) -> DcatDefaults:
        """Freeze these settings into the defaults table used by the transformer."""
        return DcatDefaults(
            access_level=self.access_level,
            license=self.license,
            bureau_code=tuple(self.bureau_code),
            program_code=tuple(self.program_code),
            publisher=Publisher(name=self.publisher_name),
            keyword=tuple(self.keyword),
        )


class CacheSettings(BaseModel):
    """DCAT cache configuration."""

    root: str | None = Field(default=None, description="Cache folder (defaults to ~/dcat/cache)")


class ObservabilitySettings(BaseModel):
    """Observability configuration."""

    log_level: str = Field(default="info", description="Log level: debug, info, warning, error")
    log_format: str = Field(default="json", description="Log format: json, console")


class Settings(BaseSettings):
    """Root application settings.

    Configuration is loaded from environment variables with the OPENDCAT_ prefix.
    Nested settings use double underscores: OPENDCAT_SERVER__PORT=9090

    Example:
        OPENDCAT_SERVER__PORT=9090
        OPENDCAT_DCAT__PUBLISHER_NAME="Department of Examples"
        OPENDCAT_SEARCH__ADAPTERS='{"elasticsearch": {"hosts": ["http://es:9200"]}}'
    """

    model_config = {
        "env_prefix": "OPENDCAT_",
        "env_nested_delimiter": "__",
        "case_sensitive": False,
        "env_file": ".env",
        "env_file_encoding": "utf-8",
    }

    app_name: str = Field(default="OpenDCAT", description="Application name")
    debug: bool = Field(default=False, description="Debug mode")

    server: ServerSettings = Field(default_factory=ServerSettings)
    search: SearchSettings = Field(default_factory=SearchSettings)
    dcat: DcatSettings = Field(default_factory=DcatSettings)
    cache: CacheSettings = Field(default_factory=CacheSettings)
    observability: ObservabilitySettings = Field(default_factory=ObservabilitySettings)

    @classmethod
    def from_yaml(cls, path: str | Path) -> Settings:
        """Load settings from a YAML configuration file.

        Keys present in the YAML file are passed as init arguments, so they
        win over environment variables for the same field.

        Args:
            path: Path to the YAML config file.

        Returns:
            Populated Settings instance.
        """
        import yaml  # type: ignore[import-untyped]

        config_path = Path(path)
        if not config_path.exists():
            raise FileNotFoundError(f"Config file not found: {config_path}")

        with open(config_path) as f:
            data = yaml.safe_load(f) or {}

        return cls(**data)
