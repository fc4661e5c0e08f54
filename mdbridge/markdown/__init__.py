"""Markdown cleanup: region protection, normalization and chat parsing."""

from mdbridge.markdown.chat import classify_role, parse_chat, parse_role_line
from mdbridge.markdown.models import ChatRole, ProtectedRegion, RegionKind, RoleLine
from mdbridge.markdown.normalizer import PASSES, apply_passes, normalize
from mdbridge.markdown.protect import ProtectedText, protect, protect_regions

__all__ = [
    "ChatRole",
    "PASSES",
    "ProtectedRegion",
    "ProtectedText",
    "RegionKind",
    "RoleLine",
    "apply_passes",
    "classify_role",
    "normalize",
    "parse_chat",
    "parse_role_line",
    "protect",
    "protect_regions",
]
