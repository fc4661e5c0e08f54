"""Block records to Notion API block JSON."""

from __future__ import annotations

from typing import Any, assert_never

from mdbridge.notion.models import (
    BlockRecord,
    BulletItemBlock,
    CodeBlock,
    HeadingBlock,
    ParagraphBlock,
)

# Notion rejects text objects longer than this.
MAX_TEXT_LENGTH = 2000

NOTION_LANGUAGES: frozenset[str] = frozenset({
    "bash", "c", "c#", "c++", "css", "dart", "diff", "docker", "go", "graphql",
    "haskell", "html", "java", "javascript", "json", "kotlin", "latex", "lua",
    "makefile", "markdown", "mermaid", "objective-c", "perl", "php", "plain text",
    "powershell", "python", "r", "ruby", "rust", "scala", "shell", "sql", "swift",
    "toml", "typescript", "xml", "yaml",
})

_LANGUAGE_ALIASES: dict[str, str] = {
    "py": "python",
    "js": "javascript",
    "jsx": "javascript",
    "ts": "typescript",
    "tsx": "typescript",
    "sh": "shell",
    "zsh": "shell",
    "yml": "yaml",
    "md": "markdown",
    "cs": "c#",
    "cpp": "c++",
    "rb": "ruby",
    "rs": "rust",
    "kt": "kotlin",
    "dockerfile": "docker",
    "text": "plain text",
    "txt": "plain text",
}


def notion_language(language: str) -> str:
    lang = language.strip().lower()
    lang = _LANGUAGE_ALIASES.get(lang, lang)
    return lang if lang in NOTION_LANGUAGES else "plain text"


def rich_text(text: str) -> list[dict[str, Any]]:
    """One plain text run, split only where Notion's length limit forces it."""
    chunks = [text[i:i + MAX_TEXT_LENGTH] for i in range(0, len(text), MAX_TEXT_LENGTH)]
    return [{"type": "text", "text": {"content": chunk}} for chunk in chunks or [""]]


def to_notion_block(block: BlockRecord) -> dict[str, Any]:
    match block:
        case HeadingBlock(level=level, text=text):
            key = f"heading_{level}"
            return {"object": "block", "type": key, key: {"rich_text": rich_text(text)}}
        case BulletItemBlock(text=text):
            return {
                "object": "block",
                "type": "bulleted_list_item",
                "bulleted_list_item": {"rich_text": rich_text(text)},
            }
        case ParagraphBlock(text=text):
            return {
                "object": "block",
                "type": "paragraph",
                "paragraph": {"rich_text": rich_text(text)},
            }
        case CodeBlock(language=language, text=text):
            return {
                "object": "block",
                "type": "code",
                "code": {"language": notion_language(language), "rich_text": rich_text(text)},
            }
        case _:
            assert_never(block)


def to_notion_blocks(blocks: list[BlockRecord]) -> list[dict[str, Any]]:
    return [to_notion_block(b) for b in blocks]
