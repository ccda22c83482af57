"""Utility subpackage for the Farkle simulator.

Small helpers shared by the game engine, the CLI and the config loader.
Functions are organised into focused modules such as :mod:`logging`,
:mod:`random` and :mod:`sinks` so that the core game logic stays free of
side effects like console output.

The most commonly used helpers are re-exported here for convenience.
"""

from __future__ import annotations

from .logging import configure_logging
from .random import MAX_UINT32, make_rng, spawn_seeds
from .sinks import NULL_SINK, ListSink, LoggingSink, NarrationSink, NullSink

__all__ = [
    "configure_logging",
    "MAX_UINT32",
    "make_rng",
    "spawn_seeds",
    "NarrationSink",
    "NullSink",
    "ListSink",
    "LoggingSink",
    "NULL_SINK",
]
