# pragma: no cover
import logging
import sys
from pathlib import Path

import pytest

PROJECT_ROOT = Path(__file__).resolve().parents[1]
SRC_PATH = PROJECT_ROOT / "src"
if SRC_PATH.exists():
    sys.path.insert(0, str(SRC_PATH))
TEST_PATH = PROJECT_ROOT / "tests"
if TEST_PATH.exists():
    sys.path.insert(0, str(TEST_PATH))

from farkle_sim.game.ledger import ScoreLedger  # noqa: E402
from farkle_sim.simulation.strategies import ThresholdStrategy  # noqa: E402


@pytest.fixture
def capinfo(caplog: pytest.LogCaptureFixture) -> pytest.LogCaptureFixture:
    caplog.set_level(logging.INFO)
    return caplog


@pytest.fixture
def preserve_root_logger():
    root = logging.getLogger()
    level = root.level
    handlers = list(root.handlers)
    yield
    root.setLevel(level)
    root.handlers[:] = handlers


@pytest.fixture
def open_ledger():
    """Ledger for a single player ``P`` with no on-the-board requirement."""

    return ScoreLedger(["P"], on_the_board=0)


@pytest.fixture
def careful() -> ThresholdStrategy:
    """Non-greedy 300/6 strategy: banks after the first scoring roll."""

    return ThresholdStrategy(point_threshold=300, dice_threshold=6, greedy=False)
