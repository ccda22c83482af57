from __future__ import annotations

import pytest

from farkle_sim.utils.yaml_helpers import expand_dotted_keys, load_yaml_mapping


def test_expand_dotted_keys_creates_nested_dicts() -> None:
    data = {"a.b": 1, "a.c": 2, "root": 3}
    expanded = expand_dotted_keys(data)
    assert expanded == {"a": {"b": 1, "c": 2}, "root": 3}


def test_expand_dotted_keys_merges_existing_dicts() -> None:
    data = {"a": {"b": 1}, "a.c": {"deep": True}, "a.d.e": 5}
    expanded = expand_dotted_keys(data)
    assert expanded == {"a": {"b": 1, "c": {"deep": True}, "d": {"e": 5}}}


def test_expand_dotted_keys_conflicting_leaf_raises() -> None:
    with pytest.raises(TypeError):
        expand_dotted_keys({"a": 1, "a.b": 2})


def test_expand_dotted_keys_handles_nested_mappings() -> None:
    data = {"outer.inner": {"leaf": 1}, "outer": {"extra": True}, "outer.inner.deep": 2}
    expanded = expand_dotted_keys(data)
    assert expanded["outer"]["extra"] is True
    assert expanded["outer"]["inner"] == {"leaf": 1, "deep": 2}


def test_expand_dotted_keys_leaves_lists_alone() -> None:
    data = {"players": [{"name": "a.b"}], "game.seed": 1}
    assert expand_dotted_keys(data) == {"players": [{"name": "a.b"}], "game": {"seed": 1}}


def test_load_yaml_mapping_expands_keys(tmp_path) -> None:
    path = tmp_path / "cfg.yaml"
    path.write_text("game.seed: 7\nlogging:\n  level: DEBUG\n", encoding="utf-8")
    assert load_yaml_mapping(path) == {"game": {"seed": 7}, "logging": {"level": "DEBUG"}}


def test_load_yaml_mapping_empty_and_invalid(tmp_path) -> None:
    empty = tmp_path / "empty.yaml"
    empty.write_text("", encoding="utf-8")
    assert load_yaml_mapping(empty) == {}

    scalar = tmp_path / "scalar.yaml"
    scalar.write_text("just a string\n", encoding="utf-8")
    with pytest.raises(TypeError):
        load_yaml_mapping(scalar)
