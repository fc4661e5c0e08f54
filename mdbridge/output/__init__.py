"""Output subsystem: writes exported notes to disk."""

from mdbridge.output.writer import MarkdownWriter, safe_note_name

__all__ = ["MarkdownWriter", "safe_note_name"]
