"""Region protection: swaps code out of the text while rewrite passes run.

Fenced blocks go first, then inline code spans on what is left. Each region
is replaced by a placeholder built from Private Use Area sentinels, which no
rewrite pass matches or produces. Sentinel characters already present in
the input are protected as LITERAL regions so they cannot be mistaken for
placeholders on the way back.
"""

from __future__ import annotations

import re
from collections.abc import Callable

from mdbridge.markdown.models import ProtectedRegion, RegionKind

OPEN = "\ue000"
CLOSE = "\ue001"

# An unterminated fence runs to the end of the document.
_FENCED_RE = re.compile(r"```.*?(?:```|\Z)", re.DOTALL)
_INLINE_RE = re.compile(r"`[^`]+`")
_SENTINEL_RE = re.compile(f"[{OPEN}{CLOSE}]")

PLACEHOLDER_RE = re.compile(f"{OPEN}([FIL])(\\d+){CLOSE}")
FENCED_PLACEHOLDER = f"{OPEN}F\\d+{CLOSE}"


def make_placeholder(kind: RegionKind, order: int) -> str:
    return f"{OPEN}{kind.value}{order}{CLOSE}"


def _substitute(text: str, regions: list[ProtectedRegion]) -> str:
    if not regions:
        return text
    by_key = {(r.kind.value, r.order): r.content for r in regions}

    def _swap(m: re.Match) -> str:
        return by_key.get((m.group(1), int(m.group(2))), m.group(0))

    return PLACEHOLDER_RE.sub(_swap, text)


class ProtectedText:
    """Protected document plus the regions needed to restore it."""

    def __init__(self, text: str, regions: list[ProtectedRegion]) -> None:
        self.text = text
        self.regions = regions

    def restore(self, text: str | None = None) -> str:
        """Swap every placeholder in *text* (default: own text) back to its content."""
        return _substitute(self.text if text is None else text, self.regions)

    def __len__(self) -> int:
        return len(self.regions)


def protect_regions(document: str) -> ProtectedText:
    regions: list[ProtectedRegion] = []

    def _extract(kind: RegionKind) -> Callable[[re.Match], str]:
        def _replace(m: re.Match) -> str:
            placeholder = make_placeholder(kind, len(regions))
            # Region content is stored fully resolved so restore is a single pass.
            content = _substitute(m.group(0), regions)
            regions.append(
                ProtectedRegion(
                    placeholder=placeholder,
                    kind=kind,
                    content=content,
                    order=len(regions),
                )
            )
            return placeholder

        return _replace

    # Sentinels first: every later placeholder must be the only source of them.
    text = _SENTINEL_RE.sub(_extract(RegionKind.LITERAL), document)
    text = _FENCED_RE.sub(_extract(RegionKind.FENCED), text)
    text = _INLINE_RE.sub(_extract(RegionKind.INLINE), text)
    return ProtectedText(text, regions)


def protect(document: str) -> tuple[str, Callable[[str], str]]:
    """Return ``(protected_document, restorer)``."""
    protected = protect_regions(document)
    return protected.text, protected.restore
