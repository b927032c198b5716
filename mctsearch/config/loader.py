"""OmegaConf-based config loading with Pydantic validation.

Flow: YAML file → DictConfig → dotted overrides applied → plain dict → Pydantic validates

Usage:
    config = load_config(SearchConfig, "configs/search.yaml")

    # With CLI-style overrides
    config = load_config(
        NimPlayConfig,
        "configs/nim.yaml",
        overrides=["search.workers=2", "search.limit={type: duration, seconds: 0.5}"],
    )
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, TypeVar

from omegaconf import DictConfig, OmegaConf
from pydantic import BaseModel

T = TypeVar("T", bound=BaseModel)


def load_raw_config(
    config_path: str | Path,
    overrides: list[str] | None = None,
) -> dict[str, Any]:
    """Load a config as a raw dict (no Pydantic validation).

    Useful when you need to inspect or modify the config before validation.

    Args:
        config_path: Path to a YAML file.
        overrides: List of dotted overrides (e.g., ["search.workers=4"]).

    Returns:
        Config as a plain dict. An empty file yields an empty dict.

    Raises:
        ValueError: If the file does not contain a YAML mapping.
    """
    path = Path(config_path)
    cfg = OmegaConf.load(path)
    if not isinstance(cfg, DictConfig):
        raise ValueError(f"Config {path} must contain a mapping, got a list")

    _merge_overrides(cfg, overrides or [])
    return OmegaConf.to_container(cfg, resolve=True)  # type: ignore[return-value]


def load_config(
    model_class: type[T],
    config_path: str | Path,
    overrides: list[str] | None = None,
) -> T:
    """Load and validate a config from YAML.

    Args:
        model_class: Pydantic model class to validate against.
        config_path: Path to a YAML file.
        overrides: List of dotted overrides (e.g., ["search.exploration_factor=1.0"]).

    Returns:
        Validated config instance.
    """
    return model_class.model_validate(load_raw_config(config_path, overrides))


def apply_overrides(data: dict[str, Any], overrides: list[str]) -> dict[str, Any]:
    """Return a copy of data with `dotted.key=value` overrides applied.

    Values use OmegaConf's dotlist grammar, so `workers=4` gives an int,
    `seed=null` gives None and `limit={type: duration, seconds: 1}` gives a
    mapping. Intermediate mappings are created as needed.
    """
    cfg = OmegaConf.create(data)
    _merge_overrides(cfg, overrides)
    return OmegaConf.to_container(cfg, resolve=True)  # type: ignore[return-value]


def _merge_overrides(cfg: DictConfig, overrides: list[str]) -> None:
    for override in overrides:
        key, sep, raw_value = override.partition("=")
        key = key.strip()
        if not sep or not key:
            raise ValueError(f"Override must look like 'key=value', got {override!r}")

        value = OmegaConf.select(OmegaConf.from_dotlist([f"{key}={raw_value}"]), key)
        # A mapping value replaces the old subtree instead of merging into it,
        # so switching limit type does not keep the previous type's fields.
        OmegaConf.update(cfg, key, value, merge=False)
