"""Transform pipeline for turning normalized markdown into an Obsidian note."""

from .pipeline import Transform, TransformPipeline
from .headings import HeadingLinker, extract_headings, link_headings
from .tags import TagAppender, append_tags, derive_tags
from .keywords import KeywordLinker, collect_link_candidates, link_keywords
from .frontmatter import (
    FrontmatterInjector,
    build_frontmatter,
    render_frontmatter,
    split_frontmatter,
)

__all__ = [
    "Transform",
    "TransformPipeline",
    "HeadingLinker",
    "TagAppender",
    "KeywordLinker",
    "FrontmatterInjector",
    "append_tags",
    "build_frontmatter",
    "collect_link_candidates",
    "derive_tags",
    "extract_headings",
    "link_headings",
    "link_keywords",
    "render_frontmatter",
    "split_frontmatter",
]
