# src/farkle_sim/__init__.py
"""Farkle simulator - scoring engine, threshold strategies and game driver.

The friendly surface below is loaded lazily so that light helpers (the
config loader, the strategy parser) can be imported without pulling in the
whole engine.
"""

from __future__ import annotations

import tomllib
from importlib import import_module
from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _v
from pathlib import Path

# Path to the project's pyproject.toml for local version fallback
PYPROJECT_TOML = Path(__file__).resolve().parent.parent.parent / "pyproject.toml"

__all__ = [  # loads lazily, that's why reportUnsupportedDunderAll is triggered
    "Face",  # pyright: ignore[reportUnsupportedDunderAll]
    "Hand",  # pyright: ignore[reportUnsupportedDunderAll]
    "ScoreCategory",  # pyright: ignore[reportUnsupportedDunderAll]
    "calculate_optimal",  # pyright: ignore[reportUnsupportedDunderAll]
    "calculate_total",  # pyright: ignore[reportUnsupportedDunderAll]
    "ScoreLedger",  # pyright: ignore[reportUnsupportedDunderAll]
    "FarklePlayer",  # pyright: ignore[reportUnsupportedDunderAll]
    "FarkleGame",  # pyright: ignore[reportUnsupportedDunderAll]
    "GameMetrics",  # pyright: ignore[reportUnsupportedDunderAll]
    "take_turn",  # pyright: ignore[reportUnsupportedDunderAll]
    "ThresholdStrategy",  # pyright: ignore[reportUnsupportedDunderAll]
    "parse_strategy",  # pyright: ignore[reportUnsupportedDunderAll]
]

_LAZY_IMPORTS = {
    "Face": "farkle_sim.game.dice",
    "Hand": "farkle_sim.game.dice",
    "ScoreCategory": "farkle_sim.game.scoring",
    "calculate_optimal": "farkle_sim.game.scoring",
    "calculate_total": "farkle_sim.game.scoring",
    "ScoreLedger": "farkle_sim.game.ledger",
    "FarklePlayer": "farkle_sim.game.engine",
    "FarkleGame": "farkle_sim.game.engine",
    "GameMetrics": "farkle_sim.game.engine",
    "take_turn": "farkle_sim.game.engine",
    "ThresholdStrategy": "farkle_sim.simulation.strategies",
    "parse_strategy": "farkle_sim.simulation.strategies",
}


def __getattr__(name: str):  # pragma: no cover - simple dynamic loader
    module_name = _LAZY_IMPORTS.get(name)
    if module_name is None:
        raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
    module = import_module(module_name)
    attr = getattr(module, name)
    globals()[name] = attr
    return attr


def _read_version_from_toml() -> str:
    """Return the package version declared in ``pyproject.toml``.

    The file is expected to reside at the repository root three directories
    above this module.
    """
    with PYPROJECT_TOML.open("rb") as fh:
        data = tomllib.load(fh)
    return data["project"]["version"]


try:
    __version__ = _v("farkle-sim")  # importlib.metadata
except PackageNotFoundError:
    __version__ = _read_version_from_toml()
