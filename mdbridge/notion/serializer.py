"""Line-oriented markdown to block-record serializer.

Inline markup (bold, italic, links) is kept as literal text inside a single
run; only block structure is recognized.
"""

from __future__ import annotations

import logging
import re

from mdbridge.notion.models import (
    BlockRecord,
    BulletItemBlock,
    CodeBlock,
    HeadingBlock,
    ParagraphBlock,
)

logger = logging.getLogger(__name__)

FENCE = "```"
DEFAULT_LANGUAGE = "plain text"

_HEADING_RE = re.compile(r"^(#{1,3})[ \t]+(.*)$")
_BULLET_PREFIXES = ("- ", "* ")


class _BlockBuilder:
    def __init__(self) -> None:
        self.blocks: list[BlockRecord] = []
        self.paragraph: list[str] = []
        self.code: list[str] | None = None
        self.language = DEFAULT_LANGUAGE

    def flush_paragraph(self) -> None:
        if self.paragraph:
            self.blocks.append(ParagraphBlock(text="\n".join(self.paragraph)))
            self.paragraph = []

    def toggle_fence(self, line: str) -> None:
        if self.code is None:
            self.language = line[len(FENCE):].strip() or DEFAULT_LANGUAGE
            self.code = []
            return
        self.close_code()

    def close_code(self) -> None:
        if self.code is None:
            return
        self.blocks.append(CodeBlock(language=self.language, text="\n".join(self.code)))
        self.code = None
        self.language = DEFAULT_LANGUAGE

    def feed(self, line: str) -> None:
        if line.startswith(FENCE):
            self.toggle_fence(line)
            return
        if self.code is not None:
            self.code.append(line)
            return

        if m := _HEADING_RE.match(line):
            self.flush_paragraph()
            self.blocks.append(HeadingBlock(level=len(m.group(1)), text=m.group(2).strip()))
        elif line.startswith(_BULLET_PREFIXES):
            self.flush_paragraph()
            self.blocks.append(BulletItemBlock(text=line[2:].strip()))
        elif not line.strip():
            self.flush_paragraph()
        else:
            self.paragraph.append(line)

    def finish(self) -> list[BlockRecord]:
        self.flush_paragraph()
        # An unterminated fence still carries content worth keeping.
        self.close_code()
        return self.blocks


def serialize(document: str) -> list[BlockRecord]:
    """Single left-to-right scan of *document* into block records."""
    builder = _BlockBuilder()
    for line in document.split("\n"):
        builder.feed(line)
    blocks = builder.finish()
    logger.debug("serialize: %d block(s)", len(blocks))
    return blocks
