"""Block records produced for Notion page creation."""

from __future__ import annotations

from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter


class _Block(BaseModel):
    model_config = ConfigDict(frozen=True)


class HeadingBlock(_Block):
    kind: Literal["heading"] = "heading"
    level: int = Field(ge=1, le=3)
    text: str


class BulletItemBlock(_Block):
    kind: Literal["bullet"] = "bullet"
    text: str


class ParagraphBlock(_Block):
    kind: Literal["paragraph"] = "paragraph"
    text: str


class CodeBlock(_Block):
    kind: Literal["code"] = "code"
    language: str = "plain text"
    text: str


BlockRecord = Annotated[
    Union[HeadingBlock, BulletItemBlock, ParagraphBlock, CodeBlock],
    Field(discriminator="kind"),
]

block_list_adapter: TypeAdapter[list[BlockRecord]] = TypeAdapter(list[BlockRecord])
