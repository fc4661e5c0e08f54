"""Markdown normalizer: ordered rewrite passes over region-protected text.

Order matters: the emphasis passes expect redundant marker runs to be
collapsed before pairs are trimmed, and the blank-line passes expect
trailing whitespace to be gone already.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Callable

from mdbridge.markdown.protect import FENCED_PLACEHOLDER, protect_regions

logger = logging.getLogger(__name__)

Pass = Callable[[str], str]

_EMPHASIS_RUN_RE = re.compile(r"\*{3,}([^*\n]+?)\*{3,}")
_BOLD_RE = re.compile(r"\*\*[ \t]*([^*\n]+?)[ \t]*\*\*")
_BOLD_PAIR_RE = re.compile(r"\*\*[^*\s](?:[^*\n]*?[^*\s])?\*\*")
_MIXED_OPEN_RE = re.compile(r"(?<!\*)\*[ \t]+([^*\n]+?)[ \t]+\*\*")
_MIXED_CLOSE_RE = re.compile(r"\*\*[ \t]+([^*\n]+?)[ \t]+\*(?!\*)")
_ITALIC_STAR_RE = re.compile(r"(?<!\*)\*(?!\*)([^*\n]+?)(?<!\*)\*(?!\*)")
_ITALIC_UNDERSCORE_RE = re.compile(r"(?<![\w_])_(?!_)([^_\n]+?)_(?![\w_])")
_LIST_PREFIX_RE = re.compile(r"^[ \t]*(?:[-*+]|\d+\.)[ \t]+")
_HEADING_RE = re.compile(r"^[ \t]*(#{1,6})[ \t]+(.+?)[ \t]*$", re.MULTILINE)
_LIST_MARKER_RE = re.compile(r"^([ \t]*(?:[-*+]|\d+\.))[ \t]+", re.MULTILINE)
_LINK_RE = re.compile(r"(!?)\[[ \t]*([^\]\n]*?)[ \t]*\]\([ \t]*([^)\n]+?)[ \t]*\)")
_BLOCKQUOTE_RE = re.compile(r"^[ \t]*>[ \t]+", re.MULTILINE)
_RULE_RE = re.compile(r"^[ \t]*([-*_])(?:[ \t]*\1){2,}[ \t]*$", re.MULTILINE)
_STRIKE_RE = re.compile(r"~~[ \t]*([^~\n]+?)[ \t]*~~")
_TRAILING_WS_RE = re.compile(r"[ \t]+$", re.MULTILINE)
_BLANK_RUN_RE = re.compile(r"\n{3,}")
_FENCE_EDGE = f"(?:```|{FENCED_PLACEHOLDER})"
_GAP_BEFORE_FENCE_RE = re.compile(rf"\n{{3,}}(?=[ \t]*{_FENCE_EDGE})")
_GAP_AFTER_FENCE_RE = re.compile(rf"({_FENCE_EDGE}[^\n]*)\n{{3,}}")
_BULLET_GAP_RE = re.compile(r"^([ \t]*)([-*+])([ \t]+[^\n]*)\n{2,}(?=\1\2[ \t])", re.MULTILINE)
_ORDERED_GAP_RE = re.compile(r"^([ \t]*\d+\.[ \t]+[^\n]*)\n{2,}(?=[ \t]*\d+\.[ \t])", re.MULTILINE)


# -- emphasis -----------------------------------------------------------------


def collapse_emphasis_runs(text: str) -> str:
    """``***x***`` and longer runs become ``**x**``."""
    return _EMPHASIS_RUN_RE.sub(r"**\1**", text)


def trim_bold(text: str) -> str:
    return _BOLD_RE.sub(lambda m: f"**{m.group(1).strip()}**", text)


def _trim_pair(marker: str) -> Callable[[re.Match], str]:
    def _replace(m: re.Match) -> str:
        inner = m.group(1).strip()
        if not inner:
            return m.group(0)
        return f"{marker}{inner}{marker}"

    return _replace


def _single_markers(segment: str) -> str:
    segment = _MIXED_OPEN_RE.sub(r"**\1**", segment)
    segment = _MIXED_CLOSE_RE.sub(r"**\1**", segment)
    segment = _ITALIC_STAR_RE.sub(_trim_pair("*"), segment)
    return _ITALIC_UNDERSCORE_RE.sub(_trim_pair("_"), segment)


def _italic_line(line: str) -> str:
    # A leading "* " is a bullet, never an emphasis opener.
    prefix = ""
    if m := _LIST_PREFIX_RE.match(line):
        prefix, line = line[: m.end()], line[m.end():]

    # Complete bold pairs are settled by now; only touch the text between them.
    parts: list[str] = []
    last = 0
    for bold in _BOLD_PAIR_RE.finditer(line):
        parts.append(_single_markers(line[last:bold.start()]))
        parts.append(bold.group(0))
        last = bold.end()
    parts.append(_single_markers(line[last:]))
    return prefix + "".join(parts)


def trim_italic(text: str) -> str:
    """Resolve ``* x **`` / ``** x *`` mixes to bold, then trim italic pairs."""
    return "\n".join(_italic_line(line) for line in text.split("\n"))


# -- block syntax ---------------------------------------------------------------


def normalize_headings(text: str) -> str:
    return _HEADING_RE.sub(r"\1 \2", text)


def normalize_list_markers(text: str) -> str:
    return _LIST_MARKER_RE.sub(r"\1 ", text)


def normalize_links(text: str) -> str:
    """Trim whitespace inside link/image labels and destinations."""
    return _LINK_RE.sub(r"\1[\2](\3)", text)


def normalize_blockquotes(text: str) -> str:
    return _BLOCKQUOTE_RE.sub("> ", text)


def normalize_rules(text: str) -> str:
    return _RULE_RE.sub("---", text)


def trim_strikethrough(text: str) -> str:
    return _STRIKE_RE.sub(r"~~\1~~", text)


# -- whitespace -----------------------------------------------------------------


def strip_trailing_whitespace(text: str) -> str:
    return _TRAILING_WS_RE.sub("", text)


def collapse_blank_lines(text: str) -> str:
    return _BLANK_RUN_RE.sub("\n\n", text)


def collapse_fence_gaps(text: str) -> str:
    text = _GAP_BEFORE_FENCE_RE.sub("\n\n", text)
    return _GAP_AFTER_FENCE_RE.sub(r"\1\n\n", text)


def tighten_lists(text: str) -> str:
    """Drop blank lines between consecutive items of the same list style."""
    text = _BULLET_GAP_RE.sub(r"\1\2\3\n", text)
    return _ORDERED_GAP_RE.sub(r"\1\n", text)


PASSES: tuple[Pass, ...] = (
    collapse_emphasis_runs,
    trim_bold,
    trim_italic,
    normalize_headings,
    normalize_list_markers,
    normalize_links,
    normalize_blockquotes,
    normalize_rules,
    trim_strikethrough,
    strip_trailing_whitespace,
    collapse_blank_lines,
    collapse_fence_gaps,
    tighten_lists,
)


def apply_passes(text: str, passes: tuple[Pass, ...] = PASSES) -> str:
    for rewrite in passes:
        text = rewrite(text)
    return text


def normalize(document: str) -> str:
    """Canonicalize markdown. Pure and total: unmatched patterns are no-ops."""
    protected = protect_regions(document)
    logger.debug("normalize: %d protected region(s)", len(protected))
    cleaned = apply_passes(protected.text)
    return protected.restore(cleaned).strip()
