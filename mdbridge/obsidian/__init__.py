"""Obsidian export: enriched notes with frontmatter, tags and wikilinks."""

from .enricher import enrich, generate_obsidian_filename
from .models import EnrichOptions, Heading, LinkCandidate

__all__ = [
    "EnrichOptions",
    "Heading",
    "LinkCandidate",
    "enrich",
    "generate_obsidian_filename",
]
