"""One-call entry points from raw text to each export format."""

from __future__ import annotations

from collections.abc import Mapping
from datetime import datetime
from typing import Any

from mdbridge.markdown import normalize, parse_chat
from mdbridge.notion.models import BlockRecord
from mdbridge.notion.serializer import serialize
from mdbridge.obsidian import EnrichOptions, enrich


def to_markdown(text: str, *, chat: bool = False) -> str:
    """Clean markdown. With ``chat`` the text is read as a role-labelled transcript."""
    return parse_chat(text) if chat else normalize(text)


def to_obsidian(
    text: str,
    options: EnrichOptions | Mapping[str, Any] | None = None,
    *,
    chat: bool = False,
    now: datetime | None = None,
) -> str:
    return enrich(to_markdown(text, chat=chat), options, now=now)


def to_notion_blocks(text: str, *, chat: bool = False) -> list[BlockRecord]:
    return serialize(to_markdown(text, chat=chat))
