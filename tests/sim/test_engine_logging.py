# tests/sim/test_engine_logging.py
import io
import json
import logging
import math

import pytest

from sp_trace.domain.entities.geography import Edge, Graph, Node
from sp_trace.domain.mechanics.mechanics_path_engines import DijkstraEngine, InvalidNodeError
from sp_trace.io.engine_logging import EngineLogging, _default_json_logger, _JsonFormatter

LOGGER = "sp_trace.test_engine_logging"


@pytest.fixture
def graph() -> Graph:
    nodes = [Node(0, 0.0, 0.0), Node(1, 3.0, 4.0), Node(2, 6.0, 8.0), Node(3, 50.0, 50.0)]
    return Graph(nodes, [Edge(0, 1, 5.0), Edge(1, 2, 5.0)])


def _hooks(**kw):
    return EngineLogging(run_id="t-1", logger=logging.getLogger(LOGGER), **kw)


def test_search_lifecycle_is_logged(graph, caplog):
    caplog.set_level(logging.INFO, logger=LOGGER)
    DijkstraEngine(hooks=_hooks()).find_path(graph, 0, 2)
    recs = [r for r in caplog.records if r.name == LOGGER]
    assert [r.getMessage() for r in recs] == ["search_start", "search_end"]
    start, end = recs[0].extra, recs[1].extra
    assert start["run_id"] == "t-1" and start["start_id"] == 0 and start["nodes"] == 4
    assert end["status"] == "found" and end["relaxed"] == 2 and end["distance"] == 10.0
    assert end["wall_ms"] >= 0.0


def test_debug_records_are_sampled(graph, caplog):
    caplog.set_level(logging.DEBUG, logger=LOGGER)
    res = DijkstraEngine(hooks=_hooks(debug=True, sample_every=1)).find_path(graph, 0, 2)
    msgs = [r.getMessage() for r in caplog.records if r.name == LOGGER]
    assert msgs.count("node_settled") == len(res.settled)
    assert msgs.count("edge_relaxed") == len(res.trace)

    caplog.clear()
    DijkstraEngine(hooks=_hooks(debug=True, sample_every=2)).find_path(graph, 0, 2)
    msgs = [r.getMessage() for r in caplog.records if r.name == LOGGER]
    assert msgs.count("node_settled") == 1  # seq 2 of 3


def test_debug_off_emits_no_step_records(graph, caplog):
    caplog.set_level(logging.DEBUG, logger=LOGGER)
    DijkstraEngine(hooks=_hooks()).find_path(graph, 0, 2)
    msgs = {r.getMessage() for r in caplog.records if r.name == LOGGER}
    assert msgs == {"search_start", "search_end"}


def test_errors_are_logged_before_raising(graph, caplog):
    caplog.set_level(logging.INFO, logger=LOGGER)
    with pytest.raises(InvalidNodeError):
        DijkstraEngine(hooks=_hooks()).find_path(graph, 0, 7)
    (rec,) = [r for r in caplog.records if r.name == LOGGER]
    assert rec.levelno == logging.ERROR
    assert rec.getMessage() == "engine_error" and rec.extra["reason"] == "invalid_node"


def test_searches_are_counted(graph, caplog):
    caplog.set_level(logging.INFO, logger=LOGGER)
    hooks = _hooks()
    engine = DijkstraEngine(hooks=hooks)
    engine.find_path(graph, 0, 1)
    engine.find_path(graph, 0, 3)
    ends = [r.extra for r in caplog.records if r.name == LOGGER and r.getMessage() == "search_end"]
    assert [e["search"] for e in ends] == [1, 2]
    assert ends[1]["status"] == "unreachable" and math.isinf(ends[1]["distance"])


def test_json_formatter_maps_infinity_to_null():
    rec = logging.LogRecord(LOGGER, logging.INFO, __file__, 1, "search_end", None, None)
    rec.extra = {"distance": math.inf, "status": "unreachable"}
    out = json.loads(_JsonFormatter().format(rec))
    assert out == {
        "level": "INFO",
        "msg": "search_end",
        "logger": LOGGER,
        "distance": None,
        "status": "unreachable",
    }


def test_default_logger_reapplies_level_and_stream():
    name = "sp_trace.test_default_logger"
    first, second = io.StringIO(), io.StringIO()
    log = _default_json_logger(name, level="WARNING", stream=first)
    log.propagate = False
    assert log.level == logging.WARNING

    log = _default_json_logger(name, level="DEBUG", stream=second)
    assert log.level == logging.DEBUG
    assert len(log.handlers) == 1
    log.info("hello")
    assert first.getvalue() == ""
    assert json.loads(second.getvalue())["msg"] == "hello"


def test_default_logger_keeps_stream_when_none_given():
    name = "sp_trace.test_default_logger_keep"
    buf = io.StringIO()
    log = _default_json_logger(name, level="INFO", stream=buf)
    log.propagate = False
    _default_json_logger(name, level="ERROR")
    assert log.level == logging.ERROR
    log.error("kept")
    assert json.loads(buf.getvalue())["msg"] == "kept"
