"""Tag derivation from #tag markers and heading keywords."""

from __future__ import annotations

import re

from mdbridge.markdown.protect import protect_regions
from mdbridge.obsidian.models import EnrichContext, Heading

from .headings import extract_headings
from .pipeline import Transform

MAX_TAGS = 10
MIN_KEYWORD_LEN = 2
MAX_KEYWORD_LEN = 10

# Letter-led; not part of a word, heading run, URL path or anchor link.
TAG_MARKER_RE = re.compile(r"(?<![\w#/&(\[])#([^\W\d_][\w-]*)")
_WORD_SPLIT_RE = re.compile(r"[\W_]+")


def explicit_tags(document: str) -> list[str]:
    protected = protect_regions(document)
    return [m.group(1) for m in TAG_MARKER_RE.finditer(protected.text)]


def has_tag_marker(document: str) -> bool:
    return bool(explicit_tags(document))


def heading_keywords(heading: Heading) -> list[str]:
    words = _WORD_SPLIT_RE.split(heading.text)
    return [
        w for w in words
        if MIN_KEYWORD_LEN <= len(w) <= MAX_KEYWORD_LEN and not w.isdigit()
    ]


def derive_tags(document: str, headings: list[Heading] | None = None) -> list[str]:
    """Explicit markers first, then level 1-3 heading keywords; distinct, capped."""
    if headings is None:
        headings = extract_headings(document)

    tags: list[str] = []
    candidates = explicit_tags(document)
    for heading in headings:
        if heading.level <= 3:
            candidates.extend(heading_keywords(heading))

    for tag in candidates:
        if tag not in tags:
            tags.append(tag)
            if len(tags) == MAX_TAGS:
                break
    return tags


def append_tags(document: str, tags: list[str]) -> str:
    """Append a ``---`` separated tag line unless the body already carries tags."""
    if not tags or has_tag_marker(document):
        return document
    markers = " ".join(f"#{tag}" for tag in tags)
    return f"{document}\n\n---\n\n{markers}\n"


class TagAppender(Transform):
    def apply(self, content: str, context: EnrichContext) -> str:
        return append_tags(content, context.tags)
