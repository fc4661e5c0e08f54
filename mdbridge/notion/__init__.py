"""Notion export: block serialization, API payloads and the HTTP client."""

from mdbridge.notion.client import NotionClient
from mdbridge.notion.models import (
    BlockRecord,
    BulletItemBlock,
    CodeBlock,
    HeadingBlock,
    ParagraphBlock,
    block_list_adapter,
)
from mdbridge.notion.payload import to_notion_block, to_notion_blocks
from mdbridge.notion.serializer import serialize

__all__ = [
    "BlockRecord",
    "BulletItemBlock",
    "CodeBlock",
    "HeadingBlock",
    "NotionClient",
    "ParagraphBlock",
    "block_list_adapter",
    "serialize",
    "to_notion_block",
    "to_notion_blocks",
]
