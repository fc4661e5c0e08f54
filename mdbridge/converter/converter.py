"""Document-to-markdown converter wrapping MarkItDown."""

from __future__ import annotations

import logging
from functools import cached_property
from pathlib import Path
from typing import IO

from markitdown import MarkItDown

from mdbridge.config.models import DocumentConversionConfig
from mdbridge.converter.models import ConversionResult
from mdbridge.errors import ConversionError
from mdbridge.markdown.normalizer import normalize

logger = logging.getLogger(__name__)

DOCUMENT_EXTENSIONS: dict[str, str] = {
    ".docx": "docx",
    ".html": "html",
    ".htm": "html",
    ".pdf": "pdf",
    ".pptx": "pptx",
}


def should_convert(file_path: str | Path, config: DocumentConversionConfig) -> bool:
    """Check whether a file should be converted based on config."""
    if not config.enabled:
        return False
    flag = DOCUMENT_EXTENSIONS.get(Path(file_path).suffix.lower())
    return bool(flag) and getattr(config.formats, flag, False)


class DocumentConverter:
    """Wraps MarkItDown; the extracted markdown is normalized before it is returned."""

    def __init__(self, config: DocumentConversionConfig) -> None:
        self._config = config

    @cached_property
    def _md(self) -> MarkItDown:
        return MarkItDown(enable_plugins=False)

    def convert(self, file_path: str | Path) -> ConversionResult:
        """Convert a document file to normalized markdown.

        Raises ConversionError when the file is missing, too large, of a
        disabled format, or when extraction itself fails.
        """
        path = Path(file_path).resolve()
        ext = path.suffix.lower()

        if not path.is_file():
            raise ConversionError("convert", f"file not found: {path}")
        if not should_convert(path, self._config):
            raise ConversionError("convert", f"unsupported or disabled format: {ext or path.name}")

        size_mb = path.stat().st_size / (1024 * 1024)
        if size_mb > self._config.max_file_size_mb:
            raise ConversionError(
                "convert",
                f"file too large ({size_mb:.1f} MB > {self._config.max_file_size_mb} MB): {path}",
            )

        try:
            result = self._md.convert(str(path))
        except Exception as e:
            raise ConversionError("convert", e) from e

        logger.debug("converted %s (%d chars)", path, len(result.markdown))
        return ConversionResult(
            source_path=str(path),
            markdown=normalize(result.markdown),
            format=DOCUMENT_EXTENSIONS[ext],
        )

    def convert_stream(self, stream: IO[bytes], filename: str) -> ConversionResult:
        """Convert a binary stream to normalized markdown; ``filename`` supplies the format."""
        ext = Path(filename).suffix.lower()
        if not should_convert(filename, self._config):
            raise ConversionError("convert_stream", f"unsupported or disabled format: {ext or filename}")

        try:
            result = self._md.convert_stream(stream, file_extension=ext)
        except Exception as e:
            raise ConversionError("convert_stream", e) from e

        return ConversionResult(
            source_path=filename,
            markdown=normalize(result.markdown),
            format=DOCUMENT_EXTENSIONS[ext],
        )
