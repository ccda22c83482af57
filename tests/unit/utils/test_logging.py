import logging

import pytest

from farkle_sim.utils.logging import configure_logging


@pytest.mark.parametrize(
    "level,expected",
    [("info", logging.INFO), ("WARNING", logging.WARNING), (logging.ERROR, logging.ERROR)],
)
def test_configure_logging_sets_root_level(level, expected, preserve_root_logger):
    configure_logging(level=level)
    root = logging.getLogger()
    assert root.level == expected
    assert not any(isinstance(h, logging.FileHandler) for h in root.handlers)


def test_unknown_level_name_falls_back_to_info(preserve_root_logger):
    configure_logging(level="chatty")
    assert logging.getLogger().level == logging.INFO


def test_log_file_parent_dirs_are_created(tmp_path, preserve_root_logger):
    log_file = tmp_path / "nested" / "dir" / "game.log"
    configure_logging(level="debug", log_file=log_file)
    logging.getLogger("farkle_sim.game.engine").debug("rolled")

    assert log_file.exists()
    assert logging.getLogger().level == logging.DEBUG
    assert "DEBUG farkle_sim.game.engine: rolled" in log_file.read_text(encoding="utf-8")


def test_reconfiguring_replaces_file_handler(tmp_path, capsys, preserve_root_logger):
    first = tmp_path / "first.log"
    second = tmp_path / "second.log"

    configure_logging(log_file=first)
    logging.info("round one")
    capsys.readouterr()

    configure_logging(log_file=second)
    logging.info("round two")
    assert "round two" in capsys.readouterr().err

    root = logging.getLogger()
    files = [h.baseFilename for h in root.handlers if isinstance(h, logging.FileHandler)]
    assert files == [str(second)]
    assert "round one" in first.read_text()
    assert "round two" not in first.read_text()
    assert "round two" in second.read_text()
