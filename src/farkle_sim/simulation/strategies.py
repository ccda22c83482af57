# src/farkle_sim/simulation/strategies.py
"""Player strategy configuration for the Farkle engine.

A :class:`ThresholdStrategy` is the immutable half of a player: when to stop
rolling (point threshold), how few dice they are willing to throw (dice
threshold), whether they gamble on the minimal take (greedy) and whether they
chase the leader on their final turn.  Scores live in the
:class:`~farkle_sim.game.ledger.ScoreLedger`, never here.

Strategies round-trip through a compact literal, e.g. ``Strat(300,3)[G][F]``.
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any

__all__: list[str] = [
    "ThresholdStrategy",
    "parse_strategy",
]


_STRAT_RE = re.compile(
    r"""
    \A
    Strat\(\s*(?P<points>\d+)\s*,\s*(?P<dice>\d+)\s*\)  # thresholds
    \[(?P<greedy>[G\-])\]                                # greedy flag
    \[(?P<final>[F\-])\]                                 # final-turn chase flag
    \Z
    """,
    re.VERBOSE,
)


@dataclass(frozen=True)
class ThresholdStrategy:
    """Threshold-based decision rule.

    Parameters
    ----------
    point_threshold
        Running turn total at which the player considers ending the turn.
        With 1000 and a running total of 900 they keep rolling whatever the
        dice threshold says; with 0 they stop as soon as the dice threshold
        is breached.
    dice_threshold
        Fewest dice the player is willing to roll once the point threshold is
        met.  With 4 they roll four dice but not three.  Values below 1 are
        coerced to 1.
    greedy
        On a roll such as ``[1, 1, 2, 3, 4]`` with the point threshold met and
        a dice threshold of 4, a greedy player takes a single 1 and rolls four
        dice again; a non-greedy player takes both 1s and banks.
    plays_final_turn_differently
        On the final turn, aim to overtake the leader instead of using the
        ordinary point threshold.
    """

    point_threshold: int = 300
    dice_threshold: int = 3
    greedy: bool = False
    plays_final_turn_differently: bool = True

    def __post_init__(self):
        if self.point_threshold < 0:
            raise ValueError(
                f"ThresholdStrategy: point_threshold must be >= 0, got {self.point_threshold}"
            )
        # 0 dice makes no sense
        if self.dice_threshold < 1:
            object.__setattr__(self, "dice_threshold", 1)

    # ------------------------------------------------------------------
    # Representation helpers
    # ------------------------------------------------------------------

    def __str__(self) -> str:  # noqa: D401 - magic method
        g = "G" if self.greedy else "-"
        f = "F" if self.plays_final_turn_differently else "-"
        return f"Strat({self.point_threshold},{self.dice_threshold})[{g}][{f}]"

    def describe(self) -> str:
        """Return a sentence describing how this strategy plays."""
        greedy = "" if self.greedy else "NOT "
        final = "" if self.plays_final_turn_differently else "NOT "
        return (
            f"pointThreshold {self.point_threshold}, diceThreshold {self.dice_threshold}, "
            f"{greedy}greedy and {final}playing final turns until victory or farkle"
        )


def _parse_strategy_flags(s: str) -> dict[str, Any]:
    """Return a mapping of strategy fields parsed from ``s``."""

    m = _STRAT_RE.match(s.strip())
    if not m:
        raise ValueError(f"Cannot parse strategy string: {s!r}")

    return {
        "point_threshold": int(m.group("points")),
        "dice_threshold": int(m.group("dice")),
        "greedy": m.group("greedy") == "G",
        "plays_final_turn_differently": m.group("final") == "F",
    }


def parse_strategy(s: str) -> ThresholdStrategy:
    """Parse a serialized strategy string into a ThresholdStrategy instance.

    Parameters
    ----------
    s : str
        Strategy literal produced by ``ThresholdStrategy.__str__``, e.g.
        ``'Strat(300,3)[G][-]'``.

    Returns
    -------
    ThresholdStrategy
        Strategy configured with the thresholds and flags encoded in ``s``.
    """
    return ThresholdStrategy(**_parse_strategy_flags(s))
