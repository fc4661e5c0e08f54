"""mdbridge: clean up AI-generated markdown and export it to Obsidian or Notion."""

from mdbridge.export import to_markdown, to_notion_blocks, to_obsidian

__version__ = "0.1.0"

__all__ = ["to_markdown", "to_notion_blocks", "to_obsidian"]
