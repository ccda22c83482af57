# src/farkle_sim/game/scoring.py
"""Classify Farkle rolls into scoring categories.

Two entry points:

* :func:`calculate_optimal` picks the *single* category a player takes from
  a roll, using a fixed priority order (first match wins).  It is a rule
  order, not a value search: a lone 1 or 5 is preferred over breaking up a
  low-face triplet because it spends fewer dice.
* :func:`calculate_total` keeps extracting optimal categories from a copy of
  the hand until nothing scores, returning the summed points and how many
  dice were left over.  A remainder of zero means "hot dice".

Both work purely from the face histogram, so roll order never matters.
"""

from __future__ import annotations

import functools
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, NamedTuple

from farkle_sim.game.dice import Face, Hand
from farkle_sim.utils.types import SixFaceCounts

__all__ = [
    "Category",
    "ScoreCategory",
    "TotalScore",
    "FARKLE",
    "face_counts",
    "optimal_for_counts",
    "calculate_optimal",
    "calculate_total",
]

_LOW_FACES = (Face.ONE, Face.TWO, Face.THREE)
_HIGH_FACES = (Face.FOUR, Face.FIVE, Face.SIX)


class Category(Enum):
    """The eleven mutually exclusive scoring shapes."""

    ONE_ONE = "one_one"
    ONE_FIVE = "one_five"
    THREE_OF_A_KIND = "three_of_a_kind"
    FOUR_OF_A_KIND = "four_of_a_kind"
    FOUR_OF_A_KIND_PLUS_PAIR = "four_of_a_kind_plus_pair"
    FIVE_OF_A_KIND = "five_of_a_kind"
    SIX_OF_A_KIND = "six_of_a_kind"
    STRAIGHT = "straight"
    THREE_PAIRS = "three_pairs"
    TWO_TRIPLETS = "two_triplets"
    FARKLE = "farkle"

    def __str__(self) -> str:  # pragma: no cover - trivial
        return self.value


@dataclass(frozen=True, slots=True)
class ScoreCategory:
    """One scoring interpretation of a roll.

    ``face`` is set for the same-face groups (three/four/five/six of a kind)
    and ``None`` otherwise.
    """

    category: Category
    face: Face | None = None

    @property
    def value(self) -> int:
        match self.category:
            case Category.ONE_ONE:
                return 100
            case Category.ONE_FIVE:
                return 50
            case Category.THREE_OF_A_KIND:
                assert self.face is not None
                return 300 if self.face is Face.ONE else int(self.face) * 100
            case Category.FOUR_OF_A_KIND:
                return 1000
            case Category.FOUR_OF_A_KIND_PLUS_PAIR | Category.STRAIGHT | Category.THREE_PAIRS:
                return 1500
            case Category.FIVE_OF_A_KIND:
                return 2000
            case Category.TWO_TRIPLETS:
                return 2500
            case Category.SIX_OF_A_KIND:
                return 3000
            case Category.FARKLE:
                return 0

    @property
    def dice_cost(self) -> int:
        match self.category:
            case Category.ONE_ONE | Category.ONE_FIVE:
                return 1
            case Category.THREE_OF_A_KIND:
                return 3
            case Category.FOUR_OF_A_KIND:
                return 4
            case Category.FIVE_OF_A_KIND:
                return 5
            case (
                Category.SIX_OF_A_KIND
                | Category.STRAIGHT
                | Category.TWO_TRIPLETS
                | Category.THREE_PAIRS
                | Category.FOUR_OF_A_KIND_PLUS_PAIR
            ):
                return 6
            case Category.FARKLE:
                return 0

    @property
    def is_farkle(self) -> bool:
        return self.category is Category.FARKLE

    def __str__(self) -> str:
        name = self.category.value
        if self.face is not None:
            name = f"{name}({int(self.face)})"
        return f"{name}={self.value}"


FARKLE = ScoreCategory(Category.FARKLE)


class TotalScore(NamedTuple):
    """Result of extracting every scoring die from a roll."""

    points: int
    dice_remaining: int


# --------------------------------------------------------------------------- #
# Histogram helpers
# --------------------------------------------------------------------------- #
def face_counts(faces: Iterable[Face | int]) -> SixFaceCounts:
    """Return the six-element histogram ``(ones, twos, ..., sixes)``.

    Raises
    ------
    ValueError:
        If any face value is outside the ``1``-``6`` range.
    """
    out = [0] * 6
    for f in faces:
        v = int(f)
        if not 1 <= v <= 6:
            raise ValueError("dice faces must be between 1 and 6")
        out[v - 1] += 1
    return (out[0], out[1], out[2], out[3], out[4], out[5])


def _matching(counts: SixFaceCounts, count: int, *, among: Iterable[Face] = Face) -> list[Face]:
    """Faces (ascending) among *among* that appear exactly *count* times."""
    return [face for face in among if counts[face - 1] == count]


def _is_straight(counts: SixFaceCounts) -> bool:
    return counts == (1, 1, 1, 1, 1, 1)


# --------------------------------------------------------------------------- #
# Single best category (cached by histogram)
# --------------------------------------------------------------------------- #
@functools.lru_cache(maxsize=1024)
def optimal_for_counts(counts: SixFaceCounts) -> ScoreCategory:
    """Apply the priority order to a face histogram.

    Inputs
    ------
    counts (SixFaceCounts):
        Counts for faces one through six.

    Returns
    -------
    ScoreCategory:
        The first category in priority order that the histogram satisfies,
        or :data:`FARKLE`.
    """
    sixes = _matching(counts, 6)
    if sixes:
        return ScoreCategory(Category.SIX_OF_A_KIND, sixes[0])

    if len(_matching(counts, 3)) >= 2:
        return ScoreCategory(Category.TWO_TRIPLETS)

    fives = _matching(counts, 5)
    if fives:
        return ScoreCategory(Category.FIVE_OF_A_KIND, fives[0])

    if _is_straight(counts):
        return ScoreCategory(Category.STRAIGHT)

    pairs = _matching(counts, 2)
    if len(pairs) >= 3:
        return ScoreCategory(Category.THREE_PAIRS)

    fours = _matching(counts, 4)
    if fours and pairs:
        return ScoreCategory(Category.FOUR_OF_A_KIND_PLUS_PAIR)
    if fours:
        return ScoreCategory(Category.FOUR_OF_A_KIND, fours[0])

    high_triplets = _matching(counts, 3, among=_HIGH_FACES)
    if high_triplets:
        return ScoreCategory(Category.THREE_OF_A_KIND, high_triplets[0])

    if counts[Face.ONE - 1] >= 1:
        return ScoreCategory(Category.ONE_ONE)
    if counts[Face.FIVE - 1] >= 1:
        return ScoreCategory(Category.ONE_FIVE)

    low_triplets = _matching(counts, 3, among=_LOW_FACES)
    if low_triplets:
        return ScoreCategory(Category.THREE_OF_A_KIND, low_triplets[0])

    return FARKLE


def calculate_optimal(hand: Hand) -> ScoreCategory:
    """Return the single richest category for the dice currently in *hand*."""
    return optimal_for_counts(face_counts(hand.faces))


def calculate_total(hand: Hand) -> TotalScore:
    """Extract every scoring category from a copy of *hand*.

    Example: ``[1, 1, 4, 4, 4, 6]`` yields ``400 + 100 + 100 = 600`` with one
    die (the 6) left over, whereas :func:`calculate_optimal` alone takes only
    the 400.

    The caller's hand is left untouched.
    """
    working = hand.copy()
    points = 0
    category = calculate_optimal(working)
    while not category.is_farkle:
        points += category.value
        working.remove_dice_for(category)
        category = calculate_optimal(working)
    return TotalScore(points=points, dice_remaining=len(working))
