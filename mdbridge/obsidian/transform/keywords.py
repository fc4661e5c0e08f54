"""Keyword auto-linking: headings and bold terms become [[wikilinks]]."""

from __future__ import annotations

import logging
import re

from mdbridge.markdown.protect import protect_regions
from mdbridge.obsidian.models import CandidateSource, EnrichContext, Heading, LinkCandidate

from .headings import HEADING_LINE_RE, OPEN_WIKILINK_RE, extract_headings
from .pipeline import Transform
from .tags import TAG_MARKER_RE

logger = logging.getLogger(__name__)

MAX_CANDIDATES = 20
MIN_TERM_LEN = 2
MAX_TERM_LEN = 30

_BOLD_TERM_RE = re.compile(r"\*\*([^*\n]+?)\*\*")

# Spans on a line where a keyword must not be wrapped.
_EXCLUSION_RES = (
    re.compile(r"\[\[[^\]\n]*?\]\]"),
    re.compile(r"!?\[[^\]\n]*\]\([^)\n]*\)"),
    re.compile(r"<https?://[^>\s]+>"),
    re.compile(r"https?://\S+"),
    _BOLD_TERM_RE,
    TAG_MARKER_RE,
)


def collect_link_candidates(
    document: str, headings: list[Heading] | None = None
) -> list[LinkCandidate]:
    """Heading texts then bold terms, first-seen order, distinct and capped."""
    if headings is None:
        headings = extract_headings(document)
    protected = protect_regions(document)

    raw: list[LinkCandidate] = [
        LinkCandidate(term=h.text, source=CandidateSource.HEADING) for h in headings
    ]
    for m in _BOLD_TERM_RE.finditer(protected.text):
        term = protected.restore(m.group(1)).strip()
        raw.append(LinkCandidate(term=term, source=CandidateSource.BOLD))

    seen: set[str] = set()
    candidates: list[LinkCandidate] = []
    for candidate in raw:
        if candidate.term in seen or not MIN_TERM_LEN <= len(candidate.term) <= MAX_TERM_LEN:
            continue
        seen.add(candidate.term)
        candidates.append(candidate)
        if len(candidates) == MAX_CANDIDATES:
            break
    return candidates


def _excluded_spans(line: str) -> list[tuple[int, int]]:
    return [m.span() for pattern in _EXCLUSION_RES for m in pattern.finditer(line)]


def _link_line(line: str, pattern: re.Pattern) -> str:
    spans = _excluded_spans(line)

    def _wrap(m: re.Match) -> str:
        start, end = m.span()
        if any(start < s_end and s_start < end for s_start, s_end in spans):
            return m.group(0)
        if OPEN_WIKILINK_RE.search(line[:start]):
            return m.group(0)
        return f"[[{m.group(1)}]]"

    return pattern.sub(_wrap, line)


def link_keywords(document: str, candidates: list[LinkCandidate]) -> str:
    """Wrap whole-word, case-insensitive candidate mentions in ``[[...]]``.

    Skips fenced and inline code, heading lines, existing links and
    wikilinks, URLs, tag markers and bold spans.
    """
    protected = protect_regions(document)
    lines = protected.text.split("\n")

    for candidate in candidates:
        pattern = re.compile(
            rf"(?<![\w#/])({re.escape(candidate.term)})(?![\w#/])", re.IGNORECASE
        )
        for idx, line in enumerate(lines):
            if HEADING_LINE_RE.match(line):
                continue
            lines[idx] = _link_line(line, pattern)

    logger.debug("link_keywords: %d candidate(s)", len(candidates))
    return protected.restore("\n".join(lines))


class KeywordLinker(Transform):
    def apply(self, content: str, context: EnrichContext) -> str:
        return link_keywords(content, context.candidates)
