# src/farkle_sim/utils/sinks.py
"""Narration sinks for roll-by-roll game commentary.

The engine never prints.  Anything that wants to follow a game line by line
(the ``watch`` command, a test, a notebook) hands the engine an object with an
``emit(line)`` method.  :class:`NullSink` is the default and drops everything.
"""

from __future__ import annotations

import logging
from typing import Protocol, runtime_checkable


@runtime_checkable
class NarrationSink(Protocol):
    """Anything that accepts one line of narration at a time."""

    def emit(self, line: str) -> None: ...


class NullSink:
    """Discard every line."""

    def emit(self, line: str) -> None:  # noqa: ARG002
        return None


class ListSink:
    """Collect lines in memory, handy for tests and post-game inspection."""

    def __init__(self) -> None:
        self.lines: list[str] = []

    def emit(self, line: str) -> None:
        self.lines.append(line)

    def __iter__(self):
        return iter(self.lines)

    def __len__(self) -> int:
        return len(self.lines)


class LoggingSink:
    """Forward narration through :mod:`logging`.

    Parameters
    ----------
    logger:
        Target logger; defaults to this module's logger.
    level:
        Level used for every emitted line.
    stage:
        Value placed in ``extra={"stage": ...}`` so handlers can filter on it.
    """

    def __init__(
        self,
        logger: logging.Logger | None = None,
        *,
        level: int = logging.INFO,
        stage: str = "watch",
    ) -> None:
        self.logger = logger if logger is not None else logging.getLogger(__name__)
        self.level = level
        self.stage = stage

    def emit(self, line: str) -> None:
        self.logger.log(self.level, "%s", line, extra={"stage": self.stage})


NULL_SINK = NullSink()

__all__ = ["NarrationSink", "NullSink", "ListSink", "LoggingSink", "NULL_SINK"]
