"""Generic item projection — the engine-neutral JSON view of a search hit.

Adapters project their raw hits into this shape (see
``SearchAdapter.item_to_json``); the DCAT transformer only ever reads the
named fields below. Everything is optional and unknown keys are kept.
Validation is per field: a value of the wrong shape degrades to that
field's default and never costs the item its other fields.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, Field, ValidationError, field_validator

logger = logging.getLogger(__name__)


def _text(v: Any) -> str | None:
    return None if v is None else str(v)


class ItemLink(BaseModel):
    """A link attached to the item (service endpoint, download, web page …)."""

    model_config = {"extra": "allow"}

    type: str | None = Field(default=None, description="Link/media type")
    href: str | None = Field(default=None, description="Link target URL")

    @field_validator("type", "href", mode="before")
    @classmethod
    def _coerce_text(cls, v: Any) -> str | None:
        return _text(v)


class SourceFields(BaseModel):
    """Engine-specific fields of the stored document (``_source``)."""

    model_config = {"extra": "allow"}

    keywords_s: list[str] | None = Field(default=None, description="Keywords indexed with the record")
    fileid: str | None = Field(default=None, description="Identifier/URL of the stored metadata file")

    @field_validator("keywords_s", mode="before")
    @classmethod
    def _coerce_keywords(cls, v: Any) -> list[str] | None:
        """Scalars become one-element lists; ``None`` and blank entries are dropped."""
        if v is None:
            return None
        if not isinstance(v, (list, tuple)):
            v = [v]
        keywords = [str(k) for k in v if k is not None and str(k).strip()]
        return keywords or None

    @field_validator("fileid", mode="before")
    @classmethod
    def _coerce_fileid(cls, v: Any) -> str | None:
        return _text(v)


class GenericItemProjection(BaseModel):
    """Generic projection of one search hit."""

    model_config = {"extra": "allow", "populate_by_name": True}

    id: str | int | None = Field(default=None, description="Engine-assigned identifier")
    title: str | None = None
    description: str | None = None
    updated: Any = Field(default=None, description="Last-modified date candidate")
    published: Any = Field(default=None, description="Publication date candidate")
    source: SourceFields = Field(default_factory=SourceFields, alias="_source")
    links: list[ItemLink] = Field(default_factory=list)

    @field_validator("id", mode="before")
    @classmethod
    def _coerce_id(cls, v: Any) -> Any:
        if v is None or isinstance(v, (str, int)):
            return v
        return str(v)

    @field_validator("title", "description", mode="before")
    @classmethod
    def _as_text(cls, v: Any) -> str | None:
        """Multi-valued text fields keep their first value."""
        if isinstance(v, (list, tuple)):
            v = v[0] if v else None
        return _text(v)

    @field_validator("source", mode="before")
    @classmethod
    def _coerce_source(cls, v: Any) -> Any:
        return v if isinstance(v, (Mapping, SourceFields)) else {}

    @field_validator("links", mode="before")
    @classmethod
    def _coerce_links(cls, v: Any) -> list[Any]:
        """A single link object is wrapped; entries that are not objects are skipped."""
        if isinstance(v, (Mapping, ItemLink)):
            v = [v]
        if not isinstance(v, (list, tuple)):
            return []
        return [link for link in v if isinstance(link, (Mapping, ItemLink))]

    @classmethod
    def lenient(cls, data: Mapping[str, Any]) -> GenericItemProjection:
        """Validate ``data``, resetting any field that still fails to its default.

        Args:
            data: Projection keys as produced by an adapter (``_source`` by alias).

        Returns:
            The projection; never raises ``ValidationError``.
        """
        try:
            return cls.model_validate(dict(data))
        except ValidationError as e:
            rejected = {err["loc"][0] for err in e.errors() if err["loc"]}
            rejected |= {name for name, f in cls.model_fields.items() if f.alias in rejected}
            logger.warning(
                "Item projection (id=%s) has unusable fields %s; using their defaults",
                data.get("id"),
                sorted(str(name) for name in rejected),
            )
            return cls.model_validate({k: v for k, v in data.items() if k not in rejected})
