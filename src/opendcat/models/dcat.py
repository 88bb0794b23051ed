"""DCAT-US output models — Catalog, Dataset, Distribution, and the defaults table.

All models serialize **by alias** so the JSON-LD keys (``@type``,
``@context``, ``downloadURL``, ``accessLevel`` …) match the Project Open
Data v1.1 schema verbatim. Use ``DcatCatalog.to_jsonld()`` rather than a
bare ``model_dump()`` when writing a response.
"""

from __future__ import annotations

from typing import Annotated, Any, Literal

from pydantic import BaseModel, Discriminator, Field, Tag

POD_SCHEMA = "https://project-open-data.cio.gov/v1.1/schema"
POD_CATALOG_SCHEMA = f"{POD_SCHEMA}/catalog.json"
POD_CATALOG_CONTEXT = f"{POD_SCHEMA}/catalog.jsonld"


class Publisher(BaseModel):
    """Publishing organization attached to every dataset."""

    model_config = {"frozen": True, "populate_by_name": True}

    type_: str = Field(default="org:Organization", alias="@type")
    name: str = Field(description="Organization name")


class DcatDefaults(BaseModel):
    """Catalog-level constants merged into every dataset.

    Frozen: the same instance is shared by every request for the lifetime
    of the process, so sequences are stored as tuples.
    """

    model_config = {"frozen": True}

    access_level: str = Field(default="public", description="Dataset accessLevel")
    license: str = Field(default="http://www.usa.gov/publicdomain/label/1.0/", description="License URI")
    bureau_code: tuple[str, ...] = Field(default=("010:04",), description="OMB bureau codes")
    program_code: tuple[str, ...] = Field(default=("010:000",), description="Program inventory codes")
    publisher: Publisher = Field(default_factory=lambda: Publisher(name="Your Publisher"))
    keyword: tuple[str, ...] = Field(default=("metadata",), description="Fallback keyword list")


DEFAULT_DCAT = DcatDefaults()


# ── Distributions ────────────────────────────────────────────────────────


class FileDistribution(BaseModel):
    """Distribution pointing at the stored metadata file (``_source.fileid``)."""

    model_config = {"frozen": True, "populate_by_name": True}

    kind: Literal["file"] = Field(default="file", exclude=True)
    type_: Literal["dcat:Distribution"] = Field(default="dcat:Distribution", alias="@type")
    download_url: str = Field(alias="downloadURL")


class LinkDistribution(BaseModel):
    """Distribution derived from one of the item's links."""

    model_config = {"frozen": True, "populate_by_name": True}

    kind: Literal["link"] = Field(default="link", exclude=True)
    type_: Literal["dcat:Distribution"] = Field(default="dcat:Distribution", alias="@type")
    media_type: str | None = Field(default=None, alias="mediaType")
    access_url: str | None = Field(default=None, alias="accessURL")


def _distribution_kind(value: Any) -> str:
    if isinstance(value, dict):
        if "kind" in value:
            return value["kind"]
        return "file" if ("downloadURL" in value or "download_url" in value) else "link"
    return getattr(value, "kind", "link")


DcatDistribution = Annotated[
    Annotated[FileDistribution, Tag("file")] | Annotated[LinkDistribution, Tag("link")],
    Discriminator(_distribution_kind),
]


# ── Dataset & Catalog ────────────────────────────────────────────────────


class DcatDataset(BaseModel):
    """One catalog entry (``dcat:Dataset``)."""

    model_config = {"populate_by_name": True}

    identifier: str | int | None = Field(default=None, description="Engine-assigned record id")
    title: str
    description: str
    modified: str = Field(description="ISO-8601 UTC timestamp with milliseconds")
    keyword: list[str]
    distribution: list[DcatDistribution] = Field(default_factory=list)

    type_: str = Field(default="dcat:Dataset", alias="@type")
    license: str
    access_level: str = Field(alias="accessLevel")
    bureau_code: list[str] = Field(alias="bureauCode")
    program_code: list[str] = Field(alias="programCode")
    publisher: Publisher


class DcatCatalog(BaseModel):
    """Catalog envelope (``dcat:Catalog``) for one search-result page."""

    model_config = {"populate_by_name": True}

    conforms_to: str = Field(default=POD_SCHEMA, alias="conformsTo")
    described_by: str = Field(default=POD_CATALOG_SCHEMA, alias="describedBy")
    context: str = Field(default=POD_CATALOG_CONTEXT, alias="@context")
    type_: str = Field(default="dcat:Catalog", alias="@type")

    start: int | None = Field(default=None, description="1-based index of the first record")
    num: int = Field(default=0, description="Number of datasets returned")
    total: int | None = Field(default=None, description="Total hits available upstream")
    next_start: int | None = Field(default=None, alias="nextStart", description="Next page start, -1 when none")

    dataset: list[DcatDataset] = Field(default_factory=list)

    def to_jsonld(self) -> dict[str, Any]:
        """Serialize to the wire form (aliased keys, absent values omitted)."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)
