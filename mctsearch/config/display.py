"""Config display utilities for readable CLI summaries."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from pydantic import BaseModel


def format_config_summary(*sections: tuple[str, BaseModel | None]) -> str:
    """Format config sections into a readable multi-line summary.

    Each section is a (label, config) pair. The label is displayed as a header,
    and scalar fields are listed on one indented content line.

    A nested model with a 'type' discriminator (like the search limit) is shown
    on its own line as `key: type(field=value)`.

    Example output:
        Game:
          target: 21, max_take: 3
        Search:
          workers: 8, exploration_factor: 1.414, seed: 7
          limit: iterations(total=10000)
    """
    lines: list[str] = []

    for label, config in sections:
        if config is None:
            continue

        data = config.model_dump()
        scalar_parts: list[str] = []
        nested_parts: list[str] = []

        for key, value in data.items():
            if value is None:
                continue
            if isinstance(value, dict):
                nested_parts.append(f"  {key}: {_format_nested(value)}")
            else:
                scalar_parts.append(f"{key}: {_format_value(value)}")

        lines.append(f"{label}:")
        if scalar_parts:
            lines.append(f"  {', '.join(scalar_parts)}")
        lines.extend(nested_parts)

    return "\n".join(lines)


def _format_nested(data: dict[str, Any]) -> str:
    """Format a nested dict as a compact one-liner.

    Dicts with a 'type' field show as type(field=value, ...).
    """
    if not data:
        return "{}"

    extra = {k: v for k, v in data.items() if k != "type" and v is not None}
    params = ", ".join(f"{k}={_format_value(v)}" for k, v in extra.items())

    if "type" in data:
        return f"{data['type']}({params})" if params else str(data["type"])
    return params


def _format_value(value: Any) -> str:
    """Format a single value for display."""
    if isinstance(value, bool):
        return str(value).lower()
    if isinstance(value, float):
        if value == int(value) and abs(value) < 1e10:
            return f"{value:.1f}"
        return f"{value:.4g}"
    return str(value)
