"""Models for the Obsidian enrichment pipeline."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from datetime import date, datetime
from enum import Enum
from typing import Any

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    ValidationInfo,
    ValidatorFunctionWrapHandler,
    field_validator,
)
from pydantic.alias_generators import to_camel

logger = logging.getLogger(__name__)

MetadataValue = str | list[str]


class Heading(BaseModel):
    model_config = ConfigDict(frozen=True)

    level: int = Field(ge=1, le=6)
    text: str
    position: int  # document order
    line: int  # line index in the region-protected text


class CandidateSource(str, Enum):
    HEADING = "heading"
    BOLD = "bold"


class LinkCandidate(BaseModel):
    model_config = ConfigDict(frozen=True)

    term: str
    source: CandidateSource


def _scalar(value: Any) -> str | None:
    if isinstance(value, str):
        return value
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return str(value)
    return None


def clean_metadata(raw: Any, *, source: str = "metadata") -> dict[str, MetadataValue]:
    """Coerce a mapping into frontmatter-safe values, dropping what can't be kept."""
    if raw is None:
        return {}
    if not isinstance(raw, Mapping):
        logger.warning("%s must be a mapping, got %s; ignoring it", source, type(raw).__name__)
        return {}

    cleaned: dict[str, MetadataValue] = {}
    for key, value in raw.items():
        if isinstance(value, (list, tuple)):
            items = [_scalar(v) for v in value]
            cleaned[str(key)] = [i for i in items if i is not None]
            continue
        scalar = _scalar(value)
        if scalar is None:
            logger.warning("%s key %r has unsupported value %r; dropped", source, key, value)
            continue
        cleaned[str(key)] = scalar
    return cleaned


class EnrichOptions(BaseModel):
    """Obsidian enrichment switches.

    Accepts both the camelCase keys used by callers (``convertHeadingsToLinks``)
    and snake_case field names. Malformed values fall back to the default
    with a warning instead of failing.
    """

    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
        alias_generator=to_camel,
        extra="ignore",
    )

    convert_headings_to_links: bool = True
    auto_generate_tags: bool = True
    auto_link_keywords: bool = False
    metadata: dict[str, MetadataValue] = Field(default_factory=dict)

    @field_validator(
        "convert_headings_to_links",
        "auto_generate_tags",
        "auto_link_keywords",
        mode="wrap",
    )
    @classmethod
    def _fallback_to_default(
        cls, value: Any, handler: ValidatorFunctionWrapHandler, info: ValidationInfo
    ) -> bool:
        try:
            return handler(value)
        except ValidationError:
            default = cls.model_fields[info.field_name].default
            logger.warning(
                "Invalid value %r for option %s; using default %r",
                value, info.field_name, default,
            )
            return default

    @field_validator("metadata", mode="before")
    @classmethod
    def _clean_metadata(cls, value: Any) -> dict[str, MetadataValue]:
        return clean_metadata(value)

    @classmethod
    def coerce(cls, raw: EnrichOptions | Mapping[str, Any] | None) -> EnrichOptions:
        """Build options from whatever the caller passed; never raises."""
        if isinstance(raw, EnrichOptions):
            return raw
        if raw is None:
            return cls()
        if not isinstance(raw, Mapping):
            logger.warning("Options must be a mapping, got %s; using defaults", type(raw).__name__)
            return cls()

        known = set(cls.model_fields) | {f.alias for f in cls.model_fields.values() if f.alias}
        for key in raw:
            if key not in known:
                logger.warning("Unrecognized option %r ignored", key)
        return cls.model_validate(dict(raw))


class EnrichContext(BaseModel):
    """Everything derived from the source document before transforms run."""

    options: EnrichOptions
    headings: list[Heading] = Field(default_factory=list)
    tags: list[str] = Field(default_factory=list)
    candidates: list[LinkCandidate] = Field(default_factory=list)
    frontmatter: dict[str, MetadataValue] = Field(default_factory=dict)
