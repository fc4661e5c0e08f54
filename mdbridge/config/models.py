from pydantic import BaseModel, Field
from typing import Literal


class ObsidianConfig(BaseModel):
    vault_path: str = ""
    convert_headings_to_links: bool = True
    auto_generate_tags: bool = True
    auto_link_keywords: bool = False
    metadata: dict[str, str | list[str]] = Field(default_factory=dict)


class NotionConfig(BaseModel):
    api_key_env: str = "NOTION_API_KEY"
    database_id: str | None = None
    api_version: str = "2022-06-28"
    base_url: str = "https://api.notion.com/v1"
    timeout: float = Field(default=30.0, gt=0)
    batch_size: int = Field(default=100, gt=0, le=100)


class FormatConfig(BaseModel):
    docx: bool = True
    html: bool = True
    pdf: bool = True
    pptx: bool = False


class DocumentConversionConfig(BaseModel):
    enabled: bool = True
    formats: FormatConfig = Field(default_factory=FormatConfig)
    max_file_size_mb: int = Field(default=50, gt=0)


class OutputConfig(BaseModel):
    base_dir: str = "."


class MdBridgeConfig(BaseModel):
    obsidian: ObsidianConfig = Field(default_factory=ObsidianConfig)
    notion: NotionConfig = Field(default_factory=NotionConfig)
    document_conversion: DocumentConversionConfig = Field(default_factory=DocumentConversionConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)
    log_level: Literal["debug", "info", "warn", "error"] = "info"
