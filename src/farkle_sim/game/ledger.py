# src/farkle_sim/game/ledger.py
"""Authoritative committed scores for one game.

Players never carry their own score.  The game owns a :class:`ScoreLedger`,
the decision engine reads from it, and only the game's commit step writes to
it.  Entries start at zero and only ever grow.
"""

from __future__ import annotations

from typing import Iterable

__all__ = ["ScoreLedger"]


class ScoreLedger:
    """Map player names to committed, non-negative running totals.

    Parameters
    ----------
    names
        Player identities, in seat order.  Duplicates are rejected.
    on_the_board
        Minimum points a player must bank in one turn before their first
        points count.  Applied uniformly to every player.
    """

    def __init__(self, names: Iterable[str], *, on_the_board: int = 500) -> None:
        if on_the_board < 0:
            raise ValueError(f"on_the_board must be >= 0, got {on_the_board}")
        self.on_the_board = on_the_board
        self._scores: dict[str, int] = {}
        for name in names:
            if name in self._scores:
                raise ValueError(f"Duplicate player name {name!r}")
            self._scores[name] = 0

    def __contains__(self, name: object) -> bool:
        return name in self._scores

    def __len__(self) -> int:
        return len(self._scores)

    def __repr__(self) -> str:
        return f"ScoreLedger({self._scores!r}, on_the_board={self.on_the_board})"

    def score(self, name: str) -> int:
        """Committed score for *name* (``KeyError`` if unknown)."""
        return self._scores[name]

    def commit(self, name: str, points: int) -> int:
        """Add a banked turn's *points* and return the new total."""
        if points < 0:
            raise ValueError(f"Cannot commit negative points ({points}) for {name!r}")
        if name not in self._scores:
            raise KeyError(name)
        self._scores[name] += points
        return self._scores[name]

    def is_on_board(self, name: str) -> bool:
        return self.score(name) > 0 or self.on_the_board == 0

    def required_to_board(self, name: str) -> int:
        """Points still needed this turn to get on the board (0 once on it)."""
        return max(0, self.on_the_board - self.score(name))

    def top_score(self) -> int:
        return max(self._scores.values(), default=0)

    def standings(self) -> list[tuple[str, int]]:
        """Return ``(name, score)`` pairs, best first; ties keep seat order."""
        return sorted(self._scores.items(), key=lambda item: item[1], reverse=True)

    def as_dict(self) -> dict[str, int]:
        return dict(self._scores)
