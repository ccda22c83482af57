from __future__ import annotations

import logging

from farkle_sim.utils.sinks import NULL_SINK, ListSink, LoggingSink, NarrationSink, NullSink


def test_every_sink_satisfies_the_protocol():
    for sink in (NullSink(), ListSink(), LoggingSink(), NULL_SINK):
        assert isinstance(sink, NarrationSink)


def test_null_sink_drops_lines():
    assert NullSink().emit("anything") is None


def test_list_sink_keeps_order():
    sink = ListSink()
    sink.emit("-- ROLL 6 -- 1, 2, 3, 4, 5, 6")
    sink.emit("farkle")
    assert sink.lines == ["-- ROLL 6 -- 1, 2, 3, 4, 5, 6", "farkle"]
    assert list(sink) == sink.lines
    assert len(sink) == 2


def test_logging_sink_forwards_with_stage(caplog):
    logger = logging.getLogger("farkle_sim.test_sink")
    caplog.set_level(logging.DEBUG, logger=logger.name)

    LoggingSink(logger, level=logging.DEBUG, stage="narration").emit("hot dice, 100%")

    (record,) = caplog.records
    assert record.name == logger.name
    assert record.levelno == logging.DEBUG
    assert record.getMessage() == "hot dice, 100%"
    assert record.stage == "narration"


def test_logging_sink_defaults(caplog):
    caplog.set_level(logging.INFO, logger="farkle_sim.utils.sinks")
    LoggingSink().emit("farkle")
    (record,) = caplog.records
    assert record.levelno == logging.INFO
    assert record.stage == "watch"
