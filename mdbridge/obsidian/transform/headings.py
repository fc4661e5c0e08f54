"""Heading extraction and heading-to-wikilink conversion."""

from __future__ import annotations

import re

from mdbridge.markdown.protect import protect_regions
from mdbridge.obsidian.models import EnrichContext, Heading

from .pipeline import Transform

HEADING_LINE_RE = re.compile(r"^(#{1,6})[ \t]+(.+?)[ \t]*$")
# An unclosed "[[" before the match means we're inside a wikilink.
OPEN_WIKILINK_RE = re.compile(r"\[\[[^\]]*$")


def extract_headings(document: str) -> list[Heading]:
    """ATX headings in document order; lines inside fenced code are ignored."""
    protected = protect_regions(document)
    headings: list[Heading] = []
    for idx, line in enumerate(protected.text.split("\n")):
        m = HEADING_LINE_RE.match(line)
        if m is None:
            continue
        # str.strip also drops non-breaking spaces left by HTML conversion
        text = protected.restore(m.group(2)).strip()
        if not text:
            continue
        headings.append(
            Heading(
                level=len(m.group(1)),
                text=text,
                position=len(headings),
                line=idx,
            )
        )
    return headings


def _heading_pattern(text: str) -> re.Pattern:
    return re.compile(rf"(?<!\[\[)({re.escape(text)})(?!\]\])", re.IGNORECASE)


def link_headings(document: str, headings: list[Heading] | None = None) -> str:
    """Wrap body mentions of each heading's text in ``[[...]]``.

    Headings are applied one after another in document order, so when one
    heading's text contains another's the result depends on that order.
    Matching is a case-insensitive substring match; occurrences in code, on
    the heading's own line, or already inside a wikilink are left alone.
    """
    protected = protect_regions(document)
    lines = protected.text.split("\n")
    if headings is None:
        headings = extract_headings(document)

    def _wrap(m: re.Match) -> str:
        if OPEN_WIKILINK_RE.search(m.string[: m.start()]):
            return m.group(0)
        return f"[[{m.group(1)}]]"

    for heading in headings:
        if not heading.text:
            continue
        pattern = _heading_pattern(heading.text)
        for idx, line in enumerate(lines):
            if idx == heading.line:
                continue
            lines[idx] = pattern.sub(_wrap, line)

    return protected.restore("\n".join(lines))


class HeadingLinker(Transform):
    def apply(self, content: str, context: EnrichContext) -> str:
        return link_headings(content, context.headings)
