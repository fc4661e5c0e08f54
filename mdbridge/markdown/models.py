"""Pydantic models for the markdown subsystem."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict


class RegionKind(str, Enum):
    FENCED = "F"
    INLINE = "I"
    LITERAL = "L"


class ProtectedRegion(BaseModel):
    """A span of the source text swapped out for a placeholder token."""

    model_config = ConfigDict(frozen=True)

    placeholder: str
    kind: RegionKind
    content: str
    order: int


class ChatRole(str, Enum):
    USER = "user"
    ASSISTANT = "assistant"
    SYSTEM = "system"
    OTHER = "other"


class RoleLine(BaseModel):
    """One speaker-labeled line of a chat transcript."""

    model_config = ConfigDict(frozen=True)

    raw_label: str
    role: ChatRole
    content: str
