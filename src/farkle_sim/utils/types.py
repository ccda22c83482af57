# src/farkle_sim/utils/types.py
"""Shared type aliases for the Farkle simulator.

``SixFaceCounts`` is the face histogram every scoring helper works from.
"""

from __future__ import annotations

from typing import Tuple, TypeAlias

SixFaceCounts: TypeAlias = Tuple[int, int, int, int, int, int]  # counts for faces 1-6

__all__ = ["SixFaceCounts"]
