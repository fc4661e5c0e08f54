from .loader import load_config
from .models import (
    DocumentConversionConfig,
    FormatConfig,
    MdBridgeConfig,
    NotionConfig,
    ObsidianConfig,
    OutputConfig,
)

__all__ = [
    "DocumentConversionConfig",
    "FormatConfig",
    "MdBridgeConfig",
    "NotionConfig",
    "ObsidianConfig",
    "OutputConfig",
    "load_config",
]
