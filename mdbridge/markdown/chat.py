"""Chat transcript parser for ChatGPT/Gemini style conversations."""

from __future__ import annotations

import logging
import re

from mdbridge.markdown.models import ChatRole, RoleLine
from mdbridge.markdown.normalizer import normalize
from mdbridge.markdown.protect import FENCED_PLACEHOLDER, protect_regions

logger = logging.getLogger(__name__)

# Fixed vocabulary; matched as substrings of the lowercased label.
_ROLE_KEYWORDS: tuple[tuple[ChatRole, tuple[str, ...]], ...] = (
    (ChatRole.USER, ("user", "사용자")),
    (ChatRole.ASSISTANT, ("assistant", "어시스턴트", "gpt", "gemini")),
    (ChatRole.SYSTEM, ("system", "시스템")),
)

# Label starts with a letter (Hangul included via \w); "http://" is never a label.
_ROLE_LINE_RE = re.compile(r"^([^\W\d_][\w \t]*?)[ \t]*:(?!//)[ \t]*(\S.*?)[ \t]*$", re.MULTILINE)
_INDENTED_CODE_RE = re.compile(r"^(?:  |\t).{4,}$")
_NESTED_LIST_RE = re.compile(r"^[ \t]+(?:[-*+]|\d+\.)[ \t]")
_FENCED_RE = re.compile(FENCED_PLACEHOLDER)
_URL_RE = re.compile(r"(?<![\[(<])https?://[^\s<>\[\]()]+")
_URL_TRAILING = ".,;:!?'\""


def classify_role(label: str) -> ChatRole:
    normalized = label.strip().lower()
    for role, keywords in _ROLE_KEYWORDS:
        if any(k in normalized for k in keywords):
            return role
    return ChatRole.OTHER


def parse_role_line(line: str) -> RoleLine | None:
    """Parse ``label: content``; returns None for lines without a speaker label."""
    m = _ROLE_LINE_RE.match(line)
    if m is None:
        return None
    label = m.group(1).strip()
    return RoleLine(raw_label=label, role=classify_role(label), content=m.group(2))


def render_role_line(role_line: RoleLine) -> str:
    content = role_line.content
    if role_line.role is ChatRole.USER:
        return f"**User**: {content}"
    if role_line.role is ChatRole.ASSISTANT:
        return f"**Assistant**: {content}"
    if role_line.role is ChatRole.SYSTEM:
        return f"*[System]: {content}*"
    return f"**{role_line.raw_label}**: {content}"


def _label_roles(text: str) -> str:
    def _replace(m: re.Match) -> str:
        role_line = parse_role_line(m.group(0))
        return render_role_line(role_line) if role_line else m.group(0)

    return _ROLE_LINE_RE.sub(_replace, text)


def _is_indented_code(line: str) -> bool:
    return (
        bool(_INDENTED_CODE_RE.match(line))
        and not _NESTED_LIST_RE.match(line)
        and not _FENCED_RE.search(line)
    )


def _fence_indented_runs(text: str) -> str:
    out: list[str] = []
    run: list[str] = []

    def _flush() -> None:
        if run:
            out.extend(["```", *(line.rstrip() for line in run), "```"])
            run.clear()

    for line in text.split("\n"):
        if _is_indented_code(line):
            run.append(line)
            continue
        _flush()
        out.append(line)
    _flush()
    return "\n".join(out)


def _autolink(text: str) -> str:
    def _replace(m: re.Match) -> str:
        url = m.group(0)
        stripped = url.rstrip(_URL_TRAILING)
        tail = url[len(stripped):]
        if not stripped or stripped.endswith("://"):
            return url
        return f"[{stripped}]({stripped}){tail}"

    return _URL_RE.sub(_replace, text)


def parse_chat(raw_text: str) -> str:
    """Convert a pasted chat transcript into normalized markdown."""
    protected = protect_regions(raw_text)
    text = _label_roles(protected.text)
    text = _fence_indented_runs(text)
    text = _autolink(text)
    text = protected.restore(text)
    logger.debug("parse_chat: %d protected region(s)", len(protected))
    return normalize(text)
