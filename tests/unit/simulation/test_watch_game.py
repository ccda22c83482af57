from __future__ import annotations

import logging

from farkle_sim.config import AppConfig, GameConfig, PlayerConfig
from farkle_sim.simulation.watch_game import play_game, watch_game
from farkle_sim.utils.sinks import ListSink


def _small_config() -> AppConfig:
    return AppConfig(
        game=GameConfig(minimum_win_score=1500, on_the_board=0, max_rounds=200),
        players=[
            PlayerConfig(name="A", point_threshold=300, dice_threshold=3),
            PlayerConfig(name="B", point_threshold=500, dice_threshold=2, greedy=True),
        ],
    )


def test_watch_game_logs_narration_and_winner(caplog):
    caplog.set_level(logging.INFO, logger="farkle_sim")
    metrics = watch_game(seed=5, cfg=_small_config())

    messages = [r.getMessage() for r in caplog.records]
    assert any(m.startswith("Seated A Strat(300,3)") for m in messages)
    assert any("-- ROLL" in m for m in messages)
    assert any(m.startswith(f"Winner: {metrics.winner}") for m in messages)
    assert "RANKING:" in caplog.text
    assert {r.stage for r in caplog.records if hasattr(r, "stage")} >= {"watch", "game"}


def test_seed_argument_overrides_config():
    cfg = _small_config()
    cfg.game.seed = 1
    a = play_game(cfg, seed=9)
    b = play_game(cfg, seed=9)
    assert a.game.seed == 9
    assert a.players_dict == b.players_dict


def test_play_game_uses_supplied_sink():
    sink = ListSink()
    metrics = play_game(_small_config(), seed=3, sink=sink)
    assert len(sink) > 0
    assert sink.lines[0] == "================ ROUND 1 ================"
    assert set(metrics.players) == {"A", "B"}


def test_play_game_default_config_runs():
    metrics = play_game(seed=11)
    assert set(metrics.players) == {"greedy", "careful"}
    assert metrics.winning_score >= 10_000 or metrics.game.hit_max_rounds
