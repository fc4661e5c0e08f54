from mdbridge.converter.converter import DOCUMENT_EXTENSIONS, DocumentConverter, should_convert
from mdbridge.converter.models import ConversionResult

__all__ = ["ConversionResult", "DOCUMENT_EXTENSIONS", "DocumentConverter", "should_convert"]
