from __future__ import annotations

from collections import Counter

import pytest

from farkle_sim.game.dice import HAND_CAPACITY, Die, Face, Hand
from farkle_sim.game.scoring import FARKLE, Category, ScoreCategory
from farkle_sim.utils.random import make_rng
from helpers.rng import ScriptedRNG


def _faces(hand: Hand) -> list[int]:
    return [int(f) for f in hand.faces]


@pytest.mark.unit
def test_new_hand_is_full():
    hand = Hand()
    assert len(hand) == HAND_CAPACITY == 6


@pytest.mark.unit
def test_die_roll_uses_generator():
    die = Die()
    assert die.roll(ScriptedRNG([[4]])) is Face.FOUR
    assert die.face is Face.FOUR


@pytest.mark.unit
def test_roll_all_draws_one_vector_per_roll():
    rng = ScriptedRNG([[6, 5, 4, 3, 2, 1]])
    hand = Hand(rng=rng)
    assert hand.roll_all() == (Face.SIX, Face.FIVE, Face.FOUR, Face.THREE, Face.TWO, Face.ONE)
    assert rng.exhausted


@pytest.mark.unit
def test_roll_all_refills_empty_hand():
    rng = ScriptedRNG([[2, 2, 3, 3, 4, 6]])
    hand = Hand.from_faces([], rng=rng)
    assert len(hand) == 0
    hand.roll_all()
    assert _faces(hand) == [2, 2, 3, 3, 4, 6]


@pytest.mark.unit
def test_roll_all_only_rolls_dice_present():
    rng = ScriptedRNG([[3, 6]])
    hand = Hand.from_faces([1, 1], rng=rng)
    hand.roll_all()
    assert _faces(hand) == [3, 6]


@pytest.mark.unit
def test_seeded_rolls_cover_every_face():
    hand = Hand(rng=make_rng(123))
    seen: Counter[int] = Counter()
    for _ in range(200):
        seen.update(int(f) for f in hand.roll_all())
    assert set(seen) == {1, 2, 3, 4, 5, 6}
    assert sum(seen.values()) == 1200


@pytest.mark.unit
def test_remove_single_die_categories_take_first_match():
    hand = Hand.from_faces([2, 1, 5, 1, 5, 3])
    hand.remove_dice_for(ScoreCategory(Category.ONE_ONE))
    assert _faces(hand) == [2, 5, 1, 5, 3]
    hand.remove_dice_for(ScoreCategory(Category.ONE_FIVE))
    assert _faces(hand) == [2, 1, 5, 3]


@pytest.mark.unit
def test_remove_face_group_filters_every_die_of_that_face():
    # a triplet category on four fours still drops all four
    hand = Hand.from_faces([4, 4, 2, 4, 4, 6])
    hand.remove_dice_for(ScoreCategory(Category.THREE_OF_A_KIND, Face.FOUR))
    assert _faces(hand) == [2, 6]


@pytest.mark.unit
@pytest.mark.parametrize(
    "category",
    [
        ScoreCategory(Category.SIX_OF_A_KIND, Face.THREE),
        ScoreCategory(Category.STRAIGHT),
        ScoreCategory(Category.TWO_TRIPLETS),
        ScoreCategory(Category.THREE_PAIRS),
        ScoreCategory(Category.FOUR_OF_A_KIND_PLUS_PAIR),
    ],
)
def test_whole_hand_categories_empty_the_hand(category):
    hand = Hand.from_faces([1, 2, 3, 4, 5, 6])
    hand.remove_dice_for(category)
    assert len(hand) == 0


@pytest.mark.unit
def test_farkle_removes_nothing():
    hand = Hand.from_faces([2, 3, 4, 6])
    hand.remove_dice_for(FARKLE)
    assert _faces(hand) == [2, 3, 4, 6]


@pytest.mark.unit
def test_reset_refills_to_capacity():
    hand = Hand.from_faces([5])
    hand.reset()
    assert len(hand) == 6


@pytest.mark.unit
def test_copy_is_independent():
    hand = Hand.from_faces([1, 5, 5])
    clone = hand.copy()
    clone.remove_dice_for(ScoreCategory(Category.ONE_ONE))
    assert _faces(hand) == [1, 5, 5]
    assert _faces(clone) == [5, 5]


@pytest.mark.unit
def test_describe_lists_faces():
    assert Hand.from_faces([1, 4, 6]).describe() == "1, 4, 6"


@pytest.mark.unit
@pytest.mark.parametrize("faces", [[0, 1], [7], [1, 2, 3, 4, 5, 6, 1]])
def test_from_faces_rejects_bad_input(faces):
    with pytest.raises(ValueError):
        Hand.from_faces(faces)


@pytest.mark.unit
def test_capacity_must_be_positive():
    with pytest.raises(ValueError):
        Hand(0)
