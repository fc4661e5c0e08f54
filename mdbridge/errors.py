"""Exceptions raised at the collaborator boundary (extraction, network, files)."""

from __future__ import annotations


class MdBridgeError(Exception):
    """Wraps a collaborator failure with context; the cause stays attached."""

    collaborator = "mdbridge"

    def __init__(self, operation: str, cause: Exception | str) -> None:
        self.operation = operation
        self.detail = str(cause)
        super().__init__(f"{self.collaborator} {operation} failed: {cause}")
        if isinstance(cause, BaseException):
            self.__cause__ = cause


class ConversionError(MdBridgeError):
    collaborator = "converter"


class NotionError(MdBridgeError):
    collaborator = "notion"

    def __init__(
        self, operation: str, cause: Exception | str, status_code: int | None = None
    ) -> None:
        self.status_code = status_code
        super().__init__(operation, cause)


class WriteError(MdBridgeError):
    collaborator = "writer"
