# src/farkle_sim/simulation/watch_game.py
"""
watch_game.py - run a *single* Farkle game with very chatty logging.

It
 • logs every player's strategy,
 • narrates every dice throw and every take / bank / farkle decision, and
 • finishes with the winner and the final ranking.

No game-logic is duplicated - the engine is simply handed a
:class:`~farkle_sim.utils.sinks.LoggingSink`.
"""

from __future__ import annotations

import logging

from farkle_sim.config import AppConfig
from farkle_sim.game.engine import FarkleGame, GameMetrics
from farkle_sim.utils.sinks import LoggingSink, NarrationSink

LOGGER = logging.getLogger(__name__)


def play_game(
    cfg: AppConfig | None = None,
    *,
    seed: int | None = None,
    sink: NarrationSink | None = None,
) -> GameMetrics:
    """Build a game from *cfg* and play it to completion.

    Parameters
    ----------
    cfg:
        Application config; defaults to :class:`AppConfig` (two 300/3
        players, one greedy).
    seed:
        Overrides ``cfg.game.seed`` when given.
    sink:
        Narration target forwarded to the engine.
    """
    cfg = cfg if cfg is not None else AppConfig()
    game_seed = seed if seed is not None else cfg.game.seed
    game = FarkleGame(
        cfg.build_players(),
        minimum_win_score=cfg.game.minimum_win_score,
        on_the_board=cfg.game.on_the_board,
        seed=game_seed,
        sink=sink,
    )
    for player in game.players:
        LOGGER.info(
            "Seated %s %s",
            player.name,
            player.strategy,
            extra={"stage": "game", "seed": game_seed},
        )
    return game.play(max_rounds=cfg.game.max_rounds)


def watch_game(seed: int | None = None, cfg: AppConfig | None = None) -> GameMetrics:
    """Run a single game with very verbose output.

    Parameters
    ----------
    seed:
        Optional seed for deterministic play.
    cfg:
        Players and table rules; defaults to :class:`AppConfig`.
    """
    metrics = play_game(cfg, seed=seed, sink=LoggingSink(LOGGER))

    LOGGER.info("===== final result =====", extra={"stage": "watch"})
    LOGGER.info(
        "Winner: %s  score=%d  rounds=%d",
        metrics.winner,
        metrics.winning_score,
        metrics.n_rounds,
        extra={"stage": "watch"},
    )
    LOGGER.info("%s", metrics.ranking_description(), extra={"stage": "watch"})
    return metrics


__all__ = ["play_game", "watch_game"]
