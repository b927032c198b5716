"""Configuration module with strict validation and YAML loading.

This module provides:
- StrictBaseModel: Base class for all configs with extra='forbid'
- load_config(): YAML loading with dotted overrides and Pydantic validation
- format_config_summary(): Readable multi-line rendering for CLI output
"""

from __future__ import annotations

from mctsearch.config.base import StrictBaseModel
from mctsearch.config.display import format_config_summary
from mctsearch.config.loader import apply_overrides, load_config, load_raw_config

__all__ = [
    "StrictBaseModel",
    "apply_overrides",
    "format_config_summary",
    "load_config",
    "load_raw_config",
]
