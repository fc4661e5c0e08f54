"""Obsidian enrichment: frontmatter, tags and cross-reference links."""

from __future__ import annotations

import logging
import re
from collections.abc import Mapping
from datetime import datetime
from typing import Any

from mdbridge.obsidian.models import EnrichContext, EnrichOptions
from mdbridge.obsidian.transform import (
    FrontmatterInjector,
    HeadingLinker,
    KeywordLinker,
    TagAppender,
    Transform,
    TransformPipeline,
    build_frontmatter,
    collect_link_candidates,
    derive_tags,
    extract_headings,
    split_frontmatter,
)

logger = logging.getLogger(__name__)


def build_context(
    body: str,
    options: EnrichOptions,
    existing: dict | None = None,
    now: datetime | None = None,
) -> EnrichContext:
    headings = extract_headings(body)
    tags = derive_tags(body, headings)
    candidates = collect_link_candidates(body, headings) if options.auto_link_keywords else []
    metadata = {**(existing or {}), **options.metadata}
    return EnrichContext(
        options=options,
        headings=headings,
        tags=tags,
        candidates=candidates,
        frontmatter=build_frontmatter(headings, tags, metadata, now),
    )


def build_pipeline(options: EnrichOptions) -> TransformPipeline:
    transforms: list[Transform] = []
    if options.convert_headings_to_links:
        transforms.append(HeadingLinker())
    if options.auto_generate_tags:
        transforms.append(TagAppender())
    if options.auto_link_keywords:
        transforms.append(KeywordLinker())
    transforms.append(FrontmatterInjector())
    return TransformPipeline(transforms)


def enrich(
    document: str,
    options: EnrichOptions | Mapping[str, Any] | None = None,
    *,
    now: datetime | None = None,
) -> str:
    """Turn normalized markdown into an Obsidian note.

    Output is the frontmatter block, a blank line, then the transformed
    body. ``now`` pins the ``created`` timestamp; everything else is a pure
    function of ``document`` and ``options``.
    """
    opts = EnrichOptions.coerce(options)
    existing, body = split_frontmatter(document)
    context = build_context(body, opts, existing, now)
    logger.debug(
        "enrich: %d heading(s), %d tag(s), %d keyword candidate(s)",
        len(context.headings), len(context.tags), len(context.candidates),
    )
    return build_pipeline(opts).apply(body, context)


def generate_obsidian_filename(original_name: str) -> str:
    """Vault-safe note name: no reserved characters, underscores for spaces."""
    name = re.sub(r'[<>:"/\\|?*]', "", original_name)
    name = re.sub(r"\s+", "_", name)
    name = re.sub(r"_+", "_", name)
    name = name.strip("_")
    return name[:100]
