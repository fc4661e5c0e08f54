"""Builds and injects YAML frontmatter (created, title, tags, caller metadata)."""

from __future__ import annotations

import logging
import re
from datetime import datetime, timezone

import yaml

from mdbridge.obsidian.models import EnrichContext, Heading, MetadataValue, clean_metadata

from .pipeline import Transform

logger = logging.getLogger(__name__)

_FRONTMATTER_RE = re.compile(r"\A---\n(.*?)\n---(?:\n|\Z)", re.DOTALL)


class _IndentedDumper(yaml.SafeDumper):
    """Renders list items indented under their key (``  - item``)."""

    def increase_indent(self, flow=False, indentless=False):
        return super().increase_indent(flow, False)


def timestamp(now: datetime | None = None) -> str:
    """ISO-8601 UTC with millisecond precision, ``Z`` suffixed."""
    now = now or datetime.now(timezone.utc)
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    now = now.astimezone(timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def split_frontmatter(content: str) -> tuple[dict[str, MetadataValue], str]:
    """Separate an existing frontmatter block from the body.

    Only a leading block that parses to a YAML mapping counts; anything
    else (a horizontal rule, broken YAML) stays part of the body.
    """
    m = _FRONTMATTER_RE.match(content)
    if m is None:
        return {}, content
    try:
        loaded = yaml.safe_load(m.group(1))
    except yaml.YAMLError:
        return {}, content
    if not isinstance(loaded, dict):
        return {}, content
    return clean_metadata(loaded, source="frontmatter"), content[m.end():].lstrip("\n")


def build_frontmatter(
    headings: list[Heading],
    tags: list[str],
    metadata: dict[str, MetadataValue] | None = None,
    now: datetime | None = None,
) -> dict[str, MetadataValue]:
    """Caller metadata always wins; title and tags are only inferred when absent."""
    fm: dict[str, MetadataValue] = {"created": timestamp(now)}
    fm.update(metadata or {})
    if "tags" not in fm and tags:
        fm["tags"] = list(tags)
    if "title" not in fm and headings:
        fm["title"] = headings[0].text
    return fm


def render_frontmatter(fm: dict[str, MetadataValue]) -> str:
    dumped = yaml.dump(
        fm,
        Dumper=_IndentedDumper,
        default_flow_style=False,
        sort_keys=False,
        allow_unicode=True,
        width=4096,
    ).rstrip()
    return f"---\n{dumped}\n---"


class FrontmatterInjector(Transform):
    def apply(self, content: str, context: EnrichContext) -> str:
        block = render_frontmatter(context.frontmatter)
        logger.debug("frontmatter keys: %s", ", ".join(context.frontmatter))
        return f"{block}\n\n{content}"
