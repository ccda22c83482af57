# src/farkle_sim/config.py
"""Configuration schemas and helpers for the Farkle simulator.

Defines dataclasses describing game rules, logging and the seated players,
and includes utilities for loading YAML overlays and applying
``section.option=value`` overrides from the command line.
"""
from __future__ import annotations

import dataclasses
from dataclasses import dataclass, field, is_dataclass
from pathlib import Path
from typing import Any, Mapping, get_args, get_origin, get_type_hints

from farkle_sim.game.engine import FarklePlayer
from farkle_sim.simulation.strategies import ThresholdStrategy, parse_strategy
from farkle_sim.utils.yaml_helpers import load_yaml_mapping

# ─────────────────────────────────────────────────────────────────────────────
# Dataclasses (schema)
# ─────────────────────────────────────────────────────────────────────────────


@dataclass
class GameConfig:
    """Table rules for a single game."""

    minimum_win_score: int = 10_000
    on_the_board: int = 500
    seed: int | None = None
    max_rounds: int | None = None


@dataclass
class LoggingConfig:
    """Root logging setup used by the CLI."""

    level: str = "INFO"
    log_file: Path | None = None


@dataclass
class PlayerConfig:
    """One seat at the table.

    ``name`` may be left empty, in which case a short random id is used.
    """

    name: str | None = None
    point_threshold: int = 300
    dice_threshold: int = 3
    greedy: bool = False
    plays_final_turn_differently: bool = True

    @classmethod
    def from_strategy(cls, strategy: ThresholdStrategy, name: str | None = None) -> PlayerConfig:
        return cls(
            name=name,
            point_threshold=strategy.point_threshold,
            dice_threshold=strategy.dice_threshold,
            greedy=strategy.greedy,
            plays_final_turn_differently=strategy.plays_final_turn_differently,
        )

    def strategy(self) -> ThresholdStrategy:
        return ThresholdStrategy(
            point_threshold=self.point_threshold,
            dice_threshold=self.dice_threshold,
            greedy=self.greedy,
            plays_final_turn_differently=self.plays_final_turn_differently,
        )

    def build(self) -> FarklePlayer:
        if self.name:
            return FarklePlayer(self.name, self.strategy())
        return FarklePlayer(strategy=self.strategy())


def _default_players() -> list[PlayerConfig]:
    return [
        PlayerConfig(name="greedy", point_threshold=300, dice_threshold=3, greedy=True),
        PlayerConfig(name="careful", point_threshold=300, dice_threshold=3, greedy=False),
    ]


@dataclass
class AppConfig:
    """Top-level application configuration."""

    game: GameConfig = field(default_factory=GameConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    players: list[PlayerConfig] = field(default_factory=_default_players)

    def build_players(self) -> list[FarklePlayer]:
        """Instantiate one :class:`FarklePlayer` per configured seat."""
        if not self.players:
            raise ValueError("Configuration must seat at least one player")
        return [p.build() for p in self.players]


# ─────────────────────────────────────────────────────────────────────────────
# Loader (one or more YAML overlays; dotted keys allowed)
# ─────────────────────────────────────────────────────────────────────────────


def _deep_merge(base: Mapping[str, Any], overlay: Mapping[str, Any]) -> dict[str, Any]:
    """Recursively merge ``overlay`` onto ``base`` and return a new mapping."""
    result: dict[str, Any] = dict(base)
    for key, val in overlay.items():
        if key in result and isinstance(result[key], Mapping) and isinstance(val, Mapping):
            result[key] = _deep_merge(result[key], val)
        else:
            result[key] = val
    return result


def _annotation_contains(annotation: Any, target: type) -> bool:
    """Recursively inspect type annotations for the presence of ``target``."""
    if annotation is None:
        return False
    if annotation is target:
        return True
    origin = get_origin(annotation)
    if origin is None:
        return False
    return any(_annotation_contains(arg, target) for arg in get_args(annotation))


def _build(cls, section: Mapping[str, Any]) -> Any:
    """Instantiate a dataclass ``cls`` from a mapping of attributes."""
    if not isinstance(section, Mapping):
        raise TypeError(f"Section for {cls.__name__} must be a mapping, got {type(section).__name__}")
    obj = cls()
    type_hints = get_type_hints(cls)
    known = {f.name for f in dataclasses.fields(cls)}
    unknown = set(section) - known
    if unknown:
        raise AttributeError(f"Unknown option(s) {sorted(unknown)} for {cls.__name__}")
    for f in dataclasses.fields(cls):
        if f.name not in section:
            continue
        val = section[f.name]
        current = getattr(obj, f.name)
        annotation = type_hints.get(f.name)

        if annotation is not None and is_dataclass(annotation) and isinstance(val, Mapping):
            val = _build(annotation, val)

        # Path coercion (works for nested too because we use type hints)
        if (isinstance(current, Path) or _annotation_contains(annotation, Path)) and isinstance(
            val, (str, Path)
        ):
            val = Path(val)

        setattr(obj, f.name, val)
    return obj


def _build_player(entry: Any) -> PlayerConfig:
    """Accept either a mapping of fields or a ``Strat(...)`` literal."""
    if isinstance(entry, str):
        return PlayerConfig.from_strategy(parse_strategy(entry))
    if isinstance(entry, Mapping) and "strategy" in entry:
        extra = set(entry) - {"name", "strategy"}
        if extra:
            raise AttributeError(f"Unknown option(s) {sorted(extra)} alongside 'strategy'")
        return PlayerConfig.from_strategy(parse_strategy(entry["strategy"]), entry.get("name"))
    return _build(PlayerConfig, entry)


def load_app_config(*overlays: Path) -> AppConfig:
    """Deterministically merge one or more YAML overlays into an :class:`AppConfig`.

    Files are read in the order provided, dotted keys are expanded, and later
    overlays always win.  A ``players`` list in a later overlay replaces the
    earlier one rather than merging seat by seat.
    """
    data: dict[str, Any] = {}
    for path in overlays:
        data = _deep_merge(data, load_yaml_mapping(path))

    unknown = set(data) - {"game", "logging", "players"}
    if unknown:
        raise AttributeError(f"Unknown config section(s) {sorted(unknown)}")

    cfg = AppConfig(
        game=_build(GameConfig, data.get("game", {})),
        logging=_build(LoggingConfig, data.get("logging", {})),
    )
    if "players" in data:
        raw_players = data["players"]
        if not isinstance(raw_players, list):
            raise TypeError("'players' must be a list")
        cfg.players = [_build_player(entry) for entry in raw_players]
    return cfg


def _coerce(value: str, current: Any, annotation: Any | None = None) -> Any:
    """Coerce ``value`` to the type of ``current``."""
    if isinstance(current, bool) or _annotation_contains(annotation, bool):
        val_lower = value.lower()
        if val_lower in {"1", "true", "yes", "on"}:
            return True
        if val_lower in {"0", "false", "no", "off"}:
            return False
        raise ValueError(f"Cannot parse boolean value from {value!r}")
    if value.lower() in {"none", "null"} and _annotation_contains(annotation, type(None)):
        return None
    if isinstance(current, int) and not isinstance(current, bool):
        return int(value)
    if (
        annotation is not None
        and _annotation_contains(annotation, int)
        and not _annotation_contains(annotation, bool)
    ):
        return int(value)
    if isinstance(current, Path) or (
        annotation is not None and _annotation_contains(annotation, Path)
    ):
        return Path(value)
    return value


def apply_dot_overrides(cfg: AppConfig, pairs: list[str]) -> AppConfig:
    """Apply ``section.option=value`` overrides to *cfg*.

    Player seats are addressed by index, e.g. ``players.0.greedy=true``.
    """
    for pair in pairs:
        if "=" not in pair:
            raise ValueError(f"Invalid override {pair!r}")
        key, raw = pair.split("=", 1)
        if "." not in key:
            raise ValueError(f"Invalid override {pair!r}")
        section_name, option = key.split(".", 1)
        if section_name == "players":
            idx_str, _, option = option.partition(".")
            if not idx_str.isdigit() or not option:
                raise ValueError(f"Invalid player override {pair!r}")
            idx = int(idx_str)
            if idx >= len(cfg.players):
                raise ValueError(f"No player seat {idx} in override {pair!r}")
            section = cfg.players[idx]
        else:
            section = getattr(cfg, section_name)
        if not hasattr(section, option):
            raise AttributeError(f"Unknown option {option!r} in section {section_name!r}")
        current = getattr(section, option)
        annotation = get_type_hints(type(section)).get(option)
        setattr(section, option, _coerce(raw, current, annotation))
    return cfg


__all__ = [
    "GameConfig",
    "LoggingConfig",
    "PlayerConfig",
    "AppConfig",
    "load_app_config",
    "apply_dot_overrides",
]
