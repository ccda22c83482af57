# src/farkle_sim/cli/main.py
"""
Command line interface for the :mod:`farkle_sim` package.

``farkle-sim play`` runs one game quietly and prints the ranking;
``farkle-sim watch`` narrates the same game roll by roll through logging.
"""
from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import Sequence

from farkle_sim.config import AppConfig, apply_dot_overrides, load_app_config
from farkle_sim.simulation.watch_game import play_game, watch_game
from farkle_sim.utils.logging import configure_logging

LOGGER = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Argument parser
# ---------------------------------------------------------------------------


def build_parser() -> argparse.ArgumentParser:
    """Construct the top-level CLI parser."""
    parser = argparse.ArgumentParser(prog="farkle-sim")
    parser.add_argument("--config", type=Path, help="Path to YAML configuration")
    parser.add_argument(
        "--set",
        dest="overrides",
        action="append",
        default=[],
        metavar="KEY=VALUE",
        help="Override configuration values, e.g. game.seed=7 or players.0.greedy=true",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        help="Root logging level (defaults to logging.level from the config)",
    )

    sub = parser.add_subparsers(dest="command", required=True)

    play_parser = sub.add_parser("play", help="Play one game and print the ranking")
    play_parser.add_argument("--seed", type=int, default=None, help="Seed for deterministic play")

    watch_parser = sub.add_parser("watch", help="Narrate one game roll by roll")
    watch_parser.add_argument("--seed", type=int, default=None, help="Seed for deterministic play")

    return parser


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------


def _parse_level(level: str | int) -> int:
    """Normalize a logging level string or integer to ``logging`` constants."""
    if isinstance(level, str):
        return getattr(logging, level.upper(), logging.INFO)
    return int(level)


def _load_config(args: argparse.Namespace) -> AppConfig:
    overlays: list[Path] = [args.config] if args.config is not None else []
    cfg = load_app_config(*overlays) if overlays else AppConfig()
    return apply_dot_overrides(cfg, list(args.overrides or []))


def main(argv: Sequence[str] | None = None) -> None:
    """Entry point for the ``farkle-sim`` CLI dispatcher."""
    parser = build_parser()
    args = parser.parse_args(argv)

    cfg = _load_config(args)
    level = args.log_level if args.log_level is not None else cfg.logging.level
    configure_logging(level=_parse_level(level), log_file=cfg.logging.log_file)

    LOGGER.info(
        "CLI arguments parsed",
        extra={
            "stage": "cli",
            "command": args.command,
            "config_path": str(args.config) if args.config is not None else None,
            "overrides": list(args.overrides or []),
            "seed": args.seed,
        },
    )

    if args.command == "play":
        metrics = play_game(cfg, seed=args.seed)
        print(f"Winner: {metrics.winner} after {metrics.n_rounds} rounds")
        print(metrics.ranking_description())
    elif args.command == "watch":
        LOGGER.info(
            "Dispatching watch_game",
            extra={"stage": "cli", "command": "watch", "seed": args.seed},
        )
        watch_game(seed=args.seed, cfg=cfg)
    else:  # pragma: no cover - argparse enforces valid choices
        parser.error(f"Unknown command {args.command}")


if __name__ == "__main__":  # pragma: no cover
    main()
