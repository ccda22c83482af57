from __future__ import annotations

import pytest

from farkle_sim.game.ledger import ScoreLedger


@pytest.mark.unit
def test_new_ledger_starts_everyone_at_zero():
    ledger = ScoreLedger(["a", "b"])
    assert ledger.as_dict() == {"a": 0, "b": 0}
    assert len(ledger) == 2
    assert "a" in ledger


@pytest.mark.unit
def test_commit_accumulates():
    ledger = ScoreLedger(["a"])
    assert ledger.commit("a", 600) == 600
    assert ledger.commit("a", 0) == 600
    assert ledger.commit("a", 250) == 850


@pytest.mark.unit
def test_commit_rejects_negative_and_unknown():
    ledger = ScoreLedger(["a"])
    with pytest.raises(ValueError):
        ledger.commit("a", -50)
    with pytest.raises(KeyError):
        ledger.commit("zed", 50)


@pytest.mark.unit
def test_on_the_board_requirement():
    ledger = ScoreLedger(["a"], on_the_board=500)
    assert not ledger.is_on_board("a")
    assert ledger.required_to_board("a") == 500
    ledger.commit("a", 650)
    assert ledger.is_on_board("a")
    assert ledger.required_to_board("a") == 0


@pytest.mark.unit
def test_zero_requirement_means_everyone_is_on_board():
    assert ScoreLedger(["a"], on_the_board=0).is_on_board("a")


@pytest.mark.unit
def test_standings_are_stable_for_ties():
    ledger = ScoreLedger(["a", "b", "c"])
    ledger.commit("b", 500)
    ledger.commit("c", 500)
    assert ledger.standings() == [("b", 500), ("c", 500), ("a", 0)]
    assert ledger.top_score() == 500


@pytest.mark.unit
def test_invalid_construction():
    with pytest.raises(ValueError):
        ScoreLedger(["a", "a"])
    with pytest.raises(ValueError):
        ScoreLedger(["a"], on_the_board=-1)
