# src/farkle_sim/game/dice.py
"""Dice and the hand of dice a player throws during a turn.

A :class:`Hand` is created fresh for every turn and owns its :class:`Die`
objects.  It knows how to roll, how to drop the dice consumed by a scoring
category and how to refill itself ("hot dice"), but it has no opinion about
what any roll is worth; that lives in :mod:`farkle_sim.game.scoring`.
"""

from __future__ import annotations

from enum import IntEnum
from typing import TYPE_CHECKING, Iterable

import numpy as np

from farkle_sim.utils.random import make_rng

if TYPE_CHECKING:  # pragma: no cover - import cycle guard
    from farkle_sim.game.scoring import ScoreCategory

__all__ = ["Face", "Die", "Hand", "HAND_CAPACITY"]

# Dice in a full hand
HAND_CAPACITY: int = 6


class Face(IntEnum):
    """The six faces of a die, valued 1-6."""

    ONE = 1
    TWO = 2
    THREE = 3
    FOUR = 4
    FIVE = 5
    SIX = 6


class Die:
    """A single six-sided die showing one :class:`Face`."""

    __slots__ = ("face",)

    def __init__(self, face: Face | int = Face.ONE) -> None:
        self.face = Face(face)

    def roll(self, rng: np.random.Generator) -> Face:
        """Give the die a uniformly random face and return it.

        For throwing a lone die; :meth:`Hand.roll_all` draws a whole hand in
        one call and sets the faces itself.
        """
        self.face = Face(int(rng.integers(1, 7)))
        return self.face

    def __repr__(self) -> str:
        return f"Die({int(self.face)})"


class Hand:
    """An ordered pool of at most ``capacity`` dice.

    Parameters
    ----------
    capacity
        Number of dice in a full hand.
    rng
        Generator used by :meth:`roll_all`.  A fresh unseeded one is made when
        omitted.
    """

    def __init__(
        self,
        capacity: int = HAND_CAPACITY,
        *,
        rng: np.random.Generator | None = None,
    ) -> None:
        if capacity < 1:
            raise ValueError(f"Hand capacity must be at least 1, got {capacity}")
        self.capacity = capacity
        self.rng = rng if rng is not None else make_rng()
        self.dice: list[Die] = []
        self._fill()

    @classmethod
    def from_faces(
        cls,
        faces: Iterable[Face | int],
        *,
        capacity: int = HAND_CAPACITY,
        rng: np.random.Generator | None = None,
    ) -> Hand:
        """Build a hand showing exactly *faces* (useful for fixtures)."""
        dice = [Die(_as_face(f)) for f in faces]
        if len(dice) > capacity:
            raise ValueError(f"{len(dice)} dice do not fit in a hand of {capacity}")
        hand = cls(capacity, rng=rng)
        hand.dice = dice
        return hand

    # ----------------------------- state ------------------------------
    @property
    def faces(self) -> tuple[Face, ...]:
        return tuple(d.face for d in self.dice)

    def __len__(self) -> int:
        return len(self.dice)

    def __repr__(self) -> str:
        return f"Hand([{self.describe()}], capacity={self.capacity})"

    def describe(self) -> str:
        """Return the faces as ``"1, 4, 6"``."""
        return ", ".join(str(int(f)) for f in self.faces)

    def copy(self) -> Hand:
        """Return a hand with independent dice showing the same faces."""
        return Hand.from_faces(self.faces, capacity=self.capacity, rng=self.rng)

    # ---------------------------- actions -----------------------------
    def roll_all(self) -> tuple[Face, ...]:
        """Roll every die in the hand, refilling an empty hand first.

        All faces are drawn with a single ``rng.integers(1, 7, size=n)`` call.
        """
        if not self.dice:
            self._fill()
        rolled = self.rng.integers(1, 7, size=len(self.dice))
        for die, value in zip(self.dice, rolled, strict=True):
            die.face = Face(int(value))
        return self.faces

    def remove_dice_for(self, category: ScoreCategory) -> None:
        """Drop the dice consumed by *category*.

        Single-die categories remove the first matching die, face groups remove
        every die of that face, whole-hand categories empty the hand and a
        farkle removes nothing.
        """
        from farkle_sim.game.scoring import Category

        match category.category:
            case Category.ONE_ONE:
                self._remove_first(Face.ONE)
            case Category.ONE_FIVE:
                self._remove_first(Face.FIVE)
            case Category.THREE_OF_A_KIND | Category.FOUR_OF_A_KIND | Category.FIVE_OF_A_KIND:
                self.dice = [d for d in self.dice if d.face != category.face]
            case (
                Category.SIX_OF_A_KIND
                | Category.STRAIGHT
                | Category.TWO_TRIPLETS
                | Category.THREE_PAIRS
                | Category.FOUR_OF_A_KIND_PLUS_PAIR
            ):
                self.dice = []
            case Category.FARKLE:
                pass

    def reset(self) -> None:
        """Discard all dice and refill to capacity."""
        self.dice.clear()
        self._fill()

    # ---------------------------- helpers -----------------------------
    def _fill(self) -> None:
        while len(self.dice) < self.capacity:
            self.dice.append(Die())

    def _remove_first(self, face: Face) -> None:
        for idx, die in enumerate(self.dice):
            if die.face == face:
                del self.dice[idx]
                return


def _as_face(value: Face | int) -> Face:
    try:
        return Face(int(value))
    except ValueError as exc:
        raise ValueError(f"dice faces must be between 1 and 6, got {value!r}") from exc
