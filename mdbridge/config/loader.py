"""YAML config loading with env var expansion."""

import logging
import os
import re
from pathlib import Path

import yaml
from pydantic import ValidationError

from .models import MdBridgeConfig

logger = logging.getLogger(__name__)

_ENV_VAR_RE = re.compile(r"\$\{(\w+)\}")


def config_search_paths(cli_path: str | None = None) -> list[Path]:
    """Candidate config files, highest priority first."""
    paths = [Path("./mdbridge.yaml"), Path.home() / ".mdbridge" / "config.yaml"]
    if cli_path:
        paths.insert(0, Path(cli_path))
    return paths


def load_config(cli_path: str | None = None) -> MdBridgeConfig:
    """Load config with resolution order: CLI > project-local > user-global > defaults.

    An explicit ``cli_path`` must exist. Empty files are skipped so the next
    candidate gets a chance.
    """
    if cli_path and not Path(cli_path).is_file():
        raise ValueError(f"Config file not found: {cli_path}")

    for path in config_search_paths(cli_path):
        if not path.is_file():
            continue
        try:
            with open(path, encoding="utf-8") as f:
                raw = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML in {path}: {e}") from e
        if raw is None:
            logger.debug("config %s is empty, skipping", path)
            continue
        try:
            config = MdBridgeConfig(**_expand_env_vars(raw))
        except (TypeError, ValidationError) as e:
            raise ValueError(f"Invalid config in {path}: {e}") from e
        logger.debug("loaded config from %s", path)
        return config

    logger.debug("no config file found, using defaults")
    return MdBridgeConfig()


def _expand_env_vars(obj: object) -> object:
    """Replace ``${VAR}`` in every string; unset variables become empty."""
    if isinstance(obj, str):
        return _ENV_VAR_RE.sub(lambda m: os.environ.get(m.group(1), ""), obj)
    if isinstance(obj, dict):
        return {k: _expand_env_vars(v) for k, v in obj.items()}
    if isinstance(obj, list):
        return [_expand_env_vars(v) for v in obj]
    return obj


# Default YAML template for `mdbridge config init`
DEFAULT_CONFIG_TEMPLATE = """\
# mdbridge.yaml

# Obsidian export
obsidian:
  vault_path: ""                  # where `mdbridge obsidian export` writes notes
  convert_headings_to_links: true
  auto_generate_tags: true
  auto_link_keywords: false
  # metadata:
  #   source: chatgpt
  #   aliases: [chat-log]

# Notion export
notion:
  api_key_env: "NOTION_API_KEY"   # integration token is read from this env var
  database_id: ""                 # parent database for new pages
  api_version: "2022-06-28"
  timeout: 30
  batch_size: 100                 # children per request (Notion max is 100)

# Document Conversion (Word / HTML / PDF -> markdown)
document_conversion:
  enabled: true
  formats:
    docx: true
    html: true
    pdf: true
    pptx: false
  max_file_size_mb: 50

# Output
output:
  base_dir: "."

# Logging
log_level: "info"                 # debug | info | warn | error
"""
