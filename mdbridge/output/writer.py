"""MarkdownWriter: writes exported notes to .md files on disk."""

from __future__ import annotations

import logging
from pathlib import Path

from mdbridge.errors import WriteError
from mdbridge.obsidian.enricher import generate_obsidian_filename

logger = logging.getLogger(__name__)


def safe_note_name(file_name: str) -> str:
    """Vault-safe file name with a single ``.md`` suffix.

    Path separators are stripped by ``generate_obsidian_filename``, so the
    result can never climb out of the target directory.
    """
    stem = file_name[:-3] if file_name.lower().endswith(".md") else file_name
    stem = generate_obsidian_filename(stem.replace("..", ""))
    if not stem or stem.strip(".") == "":
        stem = "_unnamed"
    return f"{stem}.md"


class MarkdownWriter:
    """Writes text blobs into ``base_dir`` under sanitized names."""

    def __init__(self, base_dir: str | Path) -> None:
        self.base_dir = Path(base_dir)

    def write(self, content: str, file_name: str, *, dry_run: bool = False) -> Path:
        """Write ``content`` to disk. Returns the Path of the written (or would-be) file."""
        dest = self.base_dir / safe_note_name(file_name)
        if dest.resolve().parent != self.base_dir.resolve():
            raise WriteError("write", f"refusing to write outside {self.base_dir}: {file_name}")

        if dry_run:
            logger.debug("dry-run: would write %s", dest)
            return dest

        try:
            dest.parent.mkdir(parents=True, exist_ok=True)
            dest.write_text(content, encoding="utf-8")
        except OSError as e:
            raise WriteError("write", e) from e

        logger.info("wrote %s (%d bytes)", dest, len(content.encode("utf-8")))
        return dest
