# src/farkle_sim/__main__.py
"""Command line entry point for the :mod:`farkle_sim` package.

When executed as ``python -m farkle_sim`` this module simply delegates to
:func:`farkle_sim.cli.main.main`.
"""

from __future__ import annotations

from farkle_sim.cli.main import main as cli_main


def main() -> None:
    """Invoke :func:`farkle_sim.cli.main.main`."""

    cli_main()


if __name__ == "__main__":  # pragma: no cover - direct execution path
    main()
