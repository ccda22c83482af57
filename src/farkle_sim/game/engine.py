from __future__ import annotations

import logging
import uuid
from collections import deque
from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Dict, List, Sequence

import numpy as np

from farkle_sim.game.dice import HAND_CAPACITY, Hand
from farkle_sim.game.ledger import ScoreLedger
from farkle_sim.game.scoring import calculate_optimal, calculate_total
from farkle_sim.simulation.strategies import ThresholdStrategy
from farkle_sim.utils.random import make_rng
from farkle_sim.utils.sinks import NULL_SINK, NarrationSink

"""engine.py
============
Turn decisions and round orchestration for Farkle games.

High-level flow
---------------
* FarkleGame.play runs rounds until some player's committed score reaches
  minimum_win_score.  That player becomes the *possible winner* and every
  other player gets exactly one final turn to overtake them.
* take_turn runs one player's turn as a small state machine
  (ROLLING -> BANKED | FARKLED, or SKIPPED when it cannot start) driven by
  the scoring engine and the player's ThresholdStrategy.  It reads the
  ledger but never writes it; FarkleGame commits banked points.

All randomness comes from the game's numpy Generator, so a seeded game is
fully reproducible.
"""


__all__ = [
    "ROLL_LIMIT",
    "FINAL_TURN_MARGIN",
    "FarklePlayer",
    "TurnState",
    "TurnResult",
    "required_points",
    "take_turn",
    "PlayerStats",
    "GameStats",
    "GameMetrics",
    "FarkleGame",
]

LOGGER = logging.getLogger(__name__)

# Maximum number of rolls permitted in a single turn before aborting
ROLL_LIMIT: int = 1000

# Points above the leader needed on a final turn; a tie does not overtake
FINAL_TURN_MARGIN: int = 1


def _short_id() -> str:
    return uuid.uuid4().hex[-5:]


# ---------------------------------------------------------------------------
# Player
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class FarklePlayer:
    """A player's identity and strategy; the score lives in the ledger."""

    name: str = field(default_factory=_short_id)
    strategy: ThresholdStrategy = field(default_factory=ThresholdStrategy)

    def describe(self, score: int) -> str:
        return f"{self.name} has a score of {score} using {self.strategy.describe()}"


# ---------------------------------------------------------------------------
# Turn state machine
# ---------------------------------------------------------------------------


class TurnState(Enum):
    ROLLING = "rolling"
    BANKED = "banked"
    FARKLED = "farkled"
    # dice threshold larger than a full hand; nothing is rolled or committed
    SKIPPED = "skipped"


@dataclass(slots=True)
class TurnResult:
    """Outcome of one turn.

    Attributes
    ----------
    player
        Name of the player who took the turn.
    state
        ``BANKED``, ``FARKLED`` or ``SKIPPED``.
    points
        Points to commit; always 0 for a farkle.
    rolls
        Dice throws made during the turn.
    hot_dice
        Times every die in hand scored and a full hand was re-rolled.
    required
        Running total the player was aiming for.
    final_turn
        Whether this was a final-round turn.
    """

    player: str
    state: TurnState
    points: int
    rolls: int
    hot_dice: int
    required: int
    final_turn: bool = False

    @property
    def banked(self) -> bool:
        return self.state is TurnState.BANKED


def required_points(
    strategy: ThresholdStrategy,
    score: int,
    *,
    on_the_board: int,
    final_turn: bool = False,
    top_score: int | None = None,
) -> int:
    """Running turn total a player needs before they will stop.

    Ordinarily this is the point threshold, raised to whatever is still
    missing to get on the board.  On a final turn a player who chases the
    leader needs ``top_score - score + FINAL_TURN_MARGIN`` instead.
    """
    if final_turn and strategy.plays_final_turn_differently:
        if top_score is None:
            raise ValueError("top_score is required for a final turn")
        return (top_score - score) + FINAL_TURN_MARGIN
    return max(strategy.point_threshold, on_the_board - score)


def take_turn(
    player: FarklePlayer,
    ledger: ScoreLedger,
    *,
    rng: np.random.Generator,
    final_turn: bool = False,
    top_score: int | None = None,
    sink: NarrationSink | None = None,
    capacity: int = HAND_CAPACITY,
) -> TurnResult:
    """Play one turn for *player* and report the outcome.

    Inputs
    ------
    player
        Who is rolling.
    ledger
        Read for the player's committed score and the on-the-board rule.
    rng
        Source for every dice throw.
    final_turn
        Use the final-round point requirement.
    top_score
        Leading score to overtake on a final turn.
    sink
        Receives one line of narration per event.

    Returns
    -------
    TurnResult
        ``points`` is what the caller should commit when the turn banked.

    Raises
    ------
    RuntimeError
        If the number of rolls in this turn exceeds ``ROLL_LIMIT``.
    """
    sink = sink if sink is not None else NULL_SINK
    strategy = player.strategy
    dice_threshold = strategy.dice_threshold
    required = required_points(
        strategy,
        ledger.score(player.name),
        on_the_board=ledger.on_the_board,
        final_turn=final_turn,
        top_score=top_score,
    )
    hand = Hand(capacity, rng=rng)

    # A dice threshold larger than a full hand could never be satisfied
    if len(hand) < dice_threshold:
        LOGGER.warning(
            "Player %s skips turn: dice threshold %d exceeds hand of %d",
            player.name,
            dice_threshold,
            len(hand),
            extra={"stage": "engine"},
        )
        sink.emit(f"below dice threshold, {len(hand)} versus dt of {dice_threshold}")
        return TurnResult(player.name, TurnState.SKIPPED, 0, 0, 0, required, final_turn)

    state = TurnState.ROLLING
    turn_points = 0
    rolls = 0
    hot_dice = 0

    while state is TurnState.ROLLING:
        if rolls >= ROLL_LIMIT:
            raise RuntimeError(f"Turn exceeded {ROLL_LIMIT} rolls - aborting.")
        hand.roll_all()
        rolls += 1
        sink.emit(f"-- ROLL {len(hand)} -- {hand.describe()}")

        optimal = calculate_optimal(hand)
        total = calculate_total(hand)

        if optimal.is_farkle:
            sink.emit("farkle")
            turn_points = 0
            state = TurnState.FARKLED
        elif total.dice_remaining == 0:
            sink.emit(f"hot dice, re-rolling a full hand: {turn_points} + {total.points}")
            turn_points += total.points
            hot_dice += 1
            hand.reset()
        elif (
            not strategy.greedy
            and turn_points + total.points >= required
            and total.dice_remaining < dice_threshold
        ):
            sink.emit(
                f"non-greedy player breaches point and dice threshold, ending turn: "
                f"{turn_points} + {total.points}"
            )
            turn_points += total.points
            state = TurnState.BANKED
        elif turn_points + optimal.value >= required:
            if len(hand) - optimal.dice_cost < dice_threshold:
                sink.emit(f"optimal take breaches dice threshold, ending turn: "
                          f"{turn_points} + {total.points}")
                turn_points += total.points
                state = TurnState.BANKED
            else:
                sink.emit(f"point threshold met, taking {optimal} and rolling again: "
                          f"{turn_points} + {optimal.value}")
                turn_points += optimal.value
                hand.remove_dice_for(optimal)
        else:
            sink.emit(f"threshold not met, taking {optimal} and rolling again: "
                      f"{turn_points} + {optimal.value}")
            turn_points += optimal.value
            hand.remove_dice_for(optimal)

    sink.emit(f"total score this turn: {turn_points}")
    return TurnResult(player.name, state, turn_points, rolls, hot_dice, required, final_turn)


# ---------------------------------------------------------------------------
# Game-level structures
# ---------------------------------------------------------------------------


@dataclass(slots=True)
class GameStats:
    """Aggregate results of one game.

    Attributes
    ----------
    n_players
        Number of participants.
    seed
        Seed used for the game RNG (``None`` when a generator was injected).
    n_rounds
        Ordinary rounds played before the final round.
    total_rolls
        Combined dice rolls for all players.
    total_farkles
        Total number of Farkles rolled.
    margin
        Points separating first and second place.
    hit_max_rounds
        True when play stopped at the round cap without a trigger.
    """

    n_players: int
    seed: int | None
    n_rounds: int
    total_rolls: int
    total_farkles: int
    margin: int
    hit_max_rounds: bool = False


@dataclass(slots=True)
class PlayerStats:
    """Statistics for a single player.

    Attributes
    ----------
    score
        Final committed score.
    farkles
        Number of turns lost to a farkle.
    rolls
        Dice rolls taken across all turns.
    turns
        Turns taken, final turn included.
    hot_dice
        Number of hot-dice rerolls.
    highest_turn
        Highest single banked turn.
    strategy
        String representation of the strategy used.
    rank
        Finishing position (1 for the winner).
    loss_margin
        Point difference from the winner (``0`` if they won).
    """

    score: int
    farkles: int
    rolls: int
    turns: int
    hot_dice: int
    highest_turn: int
    strategy: str
    rank: int
    loss_margin: int


@dataclass(slots=True)
class GameMetrics:
    """Per-game statistics keyed by player name, in rank order."""

    players: Dict[str, PlayerStats]
    game: GameStats

    @property
    def players_dict(self) -> Dict[str, Dict[str, int]]:
        """Return per-player statistics as plain dictionaries."""
        return {n: asdict(ps) for n, ps in self.players.items()}

    @property
    def winner(self) -> str:
        return min(self.players.items(), key=lambda p: p[1].rank)[0]

    @property
    def winning_score(self) -> int:
        return self.players[self.winner].score

    @property
    def n_rounds(self) -> int:
        return self.game.n_rounds

    @property
    def ranking(self) -> list[tuple[str, int]]:
        """``(name, score)`` pairs, winner first."""
        ordered = sorted(self.players.items(), key=lambda p: p[1].rank)
        return [(name, ps.score) for name, ps in ordered]

    def ranking_description(self) -> str:
        lines = [f"{name}: {score}" for name, score in self.ranking]
        return "RANKING:\n" + "\n".join(lines)


class FarkleGame:
    """Driver for a *single* Farkle game."""

    def __init__(
        self,
        players: Sequence[FarklePlayer],
        *,
        minimum_win_score: int = 10_000,
        on_the_board: int = 500,
        rng: np.random.Generator | None = None,
        seed: int | None = None,
        sink: NarrationSink | None = None,
    ) -> None:
        """Create a new game instance.

        Inputs
        ------
        players
            Participants in turn order; at least one, names unique.
        minimum_win_score
            Committed score that triggers the final round.
        on_the_board
            Points a player must bank in one turn before scoring at all.
        rng
            Generator for all dice; built from *seed* when omitted.
        seed
            Seed for the game generator; ignored when *rng* is given.
        sink
            Narration target; silent by default.

        Raises
        ------
        ValueError
            If *players* is empty or contains duplicate names.
        """
        self.players: List[FarklePlayer] = list(players)
        if not self.players:
            raise ValueError("FarkleGame requires at least one player")
        self.ledger = ScoreLedger((p.name for p in self.players), on_the_board=on_the_board)
        self.rotation: deque[FarklePlayer] = deque(self.players)
        self.minimum_win_score: int = minimum_win_score
        self.seed = seed if rng is None else None
        self.rng = rng if rng is not None else make_rng(seed)
        self.sink: NarrationSink = sink if sink is not None else NULL_SINK
        self.possible_winner: FarklePlayer | None = None
        self.rounds_played: int = 0
        self.turns: List[TurnResult] = []

    # ---------------------------- gameplay -----------------------------
    def play(self, max_rounds: int | None = None) -> GameMetrics:
        """Play rounds until someone triggers the final round, then finish.

        Inputs
        ------
        max_rounds
            Optional cap on ordinary rounds.  When reached without a
            trigger the game ends and the top ledger score wins.

        Returns
        -------
        GameMetrics
            Dataclass summarising the winner and per-player stats.
        """
        hit_max_rounds = False
        while self.possible_winner is None:
            if max_rounds is not None and self.rounds_played >= max_rounds:
                LOGGER.warning(
                    "Stopping after %d rounds without reaching %d",
                    self.rounds_played,
                    self.minimum_win_score,
                    extra={"stage": "engine"},
                )
                hit_max_rounds = True
                break
            self.play_round()

        if self.possible_winner is not None:
            self.final_round()

        metrics = self.metrics(hit_max_rounds=hit_max_rounds)
        LOGGER.debug(
            "Game finished",
            extra={
                "stage": "engine",
                "winner": metrics.winner,
                "winning_score": metrics.winning_score,
                "n_rounds": metrics.n_rounds,
            },
        )
        return metrics

    def play_round(self) -> None:
        """Give each player in rotation one turn, stopping at the first trigger."""
        self.rounds_played += 1
        self.sink.emit(f"================ ROUND {self.rounds_played} ================")

        for _ in range(len(self.rotation)):
            player = self.rotation.popleft()
            self.sink.emit(
                f"Player {player.name} taking turn #{self.rounds_played}: "
                f"{self.ledger.score(player.name)}"
            )
            self._play_turn(player)
            self.rotation.append(player)

            score = self.ledger.score(player.name)
            if score >= self.minimum_win_score:
                self.possible_winner = player
                self.sink.emit(f"PLAYER {player.name} ENDED WITH SCORE {score}")
                return

    def final_round(self) -> None:
        """One last turn for everyone except the player who triggered it."""
        if len(self.rotation) <= 1:
            return

        self.sink.emit("================ FINAL ROUND ================")
        trigger = self.possible_winner
        for player in [p for p in self.rotation if p is not trigger]:
            top = self._top_score()
            self.sink.emit(
                f"Player {player.name} taking final turn: {self.ledger.score(player.name)}"
            )
            self._play_turn(player, final_turn=True, top_score=top)

            score = self.ledger.score(player.name)
            if score > top:
                self.possible_winner = player
            self.sink.emit(f"PLAYER {player.name} ENDED WITH SCORE {score}")

    # ---------------------------- helpers ------------------------------
    def _top_score(self) -> int:
        if self.possible_winner is None:
            return self.minimum_win_score
        return self.ledger.score(self.possible_winner.name)

    def _play_turn(
        self, player: FarklePlayer, *, final_turn: bool = False, top_score: int | None = None
    ) -> TurnResult:
        result = take_turn(
            player,
            self.ledger,
            rng=self.rng,
            final_turn=final_turn,
            top_score=top_score,
            sink=self.sink,
        )
        if result.banked:
            self.ledger.commit(player.name, result.points)
        self.turns.append(result)
        return result

    def ranked_players(self) -> List[FarklePlayer]:
        """Players best first; ties go to the possible winner, then seat order."""
        seat = {p.name: i for i, p in enumerate(self.players)}
        return sorted(
            self.players,
            key=lambda p: (
                -self.ledger.score(p.name),
                p is not self.possible_winner,
                seat[p.name],
            ),
        )

    def metrics(self, *, hit_max_rounds: bool = False) -> GameMetrics:
        """Summarise the game so far."""
        ranked = self.ranked_players()
        winner_score = self.ledger.score(ranked[0].name)

        players_block: Dict[str, PlayerStats] = {}
        for rank, player in enumerate(ranked, start=1):
            own = [t for t in self.turns if t.player == player.name]
            score = self.ledger.score(player.name)
            players_block[player.name] = PlayerStats(
                score=score,
                farkles=sum(1 for t in own if t.state is TurnState.FARKLED),
                rolls=sum(t.rolls for t in own),
                turns=len(own),
                hot_dice=sum(t.hot_dice for t in own),
                highest_turn=max((t.points for t in own if t.banked), default=0),
                strategy=str(player.strategy),
                rank=rank,
                loss_margin=winner_score - score,
            )

        runner_score = self.ledger.score(ranked[1].name) if len(ranked) > 1 else 0
        game_block = GameStats(
            n_players=len(self.players),
            seed=self.seed,
            n_rounds=self.rounds_played,
            total_rolls=sum(t.rolls for t in self.turns),
            total_farkles=sum(1 for t in self.turns if t.state is TurnState.FARKLED),
            margin=winner_score - runner_score,
            hit_max_rounds=hit_max_rounds,
        )
        return GameMetrics(players_block, game_block)
