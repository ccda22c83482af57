# src/farkle_sim/utils/yaml_helpers.py
"""
YAML parsing helpers.

``expand_dotted_keys`` turns flat overlays such as ``{"game.seed": 7}`` into
nested mappings, and ``load_yaml_mapping`` reads one overlay file and checks
that it holds a mapping.
"""
from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml  # type: ignore[import-untyped]


def _merge_into(target: dict[str, Any], key: Any, value: Any) -> None:
    """Store *value* under *key*, merging with an existing nested mapping."""
    existing = target.get(key)
    if isinstance(existing, dict) and isinstance(value, dict):
        existing.update(value)
    else:
        target[key] = value


def expand_dotted_keys(mapping: Mapping[str, Any]) -> dict[str, Any]:
    """Return a nested dict from *mapping* that may contain dotted keys."""

    result: dict[str, Any] = {}
    for raw_key, raw_value in mapping.items():
        value = expand_dotted_keys(raw_value) if isinstance(raw_value, Mapping) else raw_value
        if not (isinstance(raw_key, str) and "." in raw_key):
            _merge_into(result, raw_key, value)
            continue

        parts = [part for part in raw_key.split(".") if part]
        if not parts:
            continue
        target = result
        for part in parts[:-1]:
            node = target.setdefault(part, {})
            if not isinstance(node, dict):
                raise TypeError(
                    f"Cannot expand dotted key {raw_key!r}; {part!r} is already set to a non-mapping value",
                )
            target = node
        _merge_into(target, parts[-1], value)
    return result


def load_yaml_mapping(path: Path) -> dict[str, Any]:
    """Read *path* with :func:`yaml.safe_load` and expand its dotted keys.

    An empty file yields an empty mapping.

    Raises
    ------
    TypeError
        If the document is not a mapping.
    """
    with path.open("r", encoding="utf-8") as fh:
        data = yaml.safe_load(fh) or {}
    if not isinstance(data, Mapping):
        raise TypeError(f"Config file {path} must contain a mapping")
    return expand_dotted_keys(data)


__all__ = ["expand_dotted_keys", "load_yaml_mapping"]
