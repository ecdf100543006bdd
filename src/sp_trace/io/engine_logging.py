# io/engine_logging.py
import json
import logging
import math
import sys

from sp_trace.sim.hooks import NoopHooks


class _JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "level": record.levelname,
            "msg": record.getMessage(),
            "logger": record.name,
        }
        extra = getattr(record, "extra", None)
        if isinstance(extra, dict):
            payload.update(extra)
        # json has no infinity; unreachable distances are reported as null
        for k, v in payload.items():
            if isinstance(v, float) and not math.isfinite(v):
                payload[k] = None
        return json.dumps(payload)


def _default_json_logger(name="sp_trace", level="INFO", stream=None):
    """
    JSON logger writing to ``stream`` (stdout by default).
    Repeated calls reuse the handler but re-apply the level, and re-point the
    handler when a stream is given.
    """
    logger = logging.getLogger(name)
    if not logger.handlers:
        h = logging.StreamHandler(stream or sys.stdout)
        h.setFormatter(_JsonFormatter())
        logger.addHandler(h)
    elif stream is not None:
        for h in logger.handlers:
            # plain assignment: the previous stream may already be closed, and
            # setStream would flush it
            if type(h) is logging.StreamHandler:
                h.stream = stream
    logger.setLevel(level)
    return logger


class EngineLogging(NoopHooks):
    """
    Structured logs for path searches.
    Per-node and per-edge records are DEBUG only and sampled, since one search
    over a few hundred nodes already produces thousands of them.
    """

    def __init__(
        self,
        run_id: str = "local",
        level: str = "INFO",
        debug: bool = False,
        sample_every: int = 1000,
        logger: logging.Logger | None = None,
    ):
        self.run_id, self.debug, self.sample_every = run_id, debug, max(1, sample_every)
        self.log = logger or _default_json_logger(level=level)
        self._searches = 0

    def _emit(self, level: str, msg: str, **extra):
        payload = {"run_id": self.run_id, "search": self._searches}
        self.log.log(getattr(logging, level), msg, extra={"extra": {**payload, **extra}})

    # search lifecycle

    def search_start(self, *, start_id: int, end_id: int, nodes: int, edges: int):
        self._searches += 1
        self._emit(
            "INFO", "search_start", start_id=start_id, end_id=end_id, nodes=nodes, edges=edges
        )

    def search_end(self, *, status: str, settled: int, relaxed: int, **extra):
        self._emit("INFO", "search_end", status=status, settled=settled, relaxed=relaxed, **extra)

    def node_settled(self, node_id: int, *, distance: float, seq: int):
        if self.debug and (seq % self.sample_every) == 0:
            self._emit("DEBUG", "node_settled", node_id=node_id, distance=distance, seq=seq)

    def edge_relaxed(self, edge, *, distance: float, seq: int):
        if self.debug and (seq % self.sample_every) == 0:
            self._emit(
                "DEBUG",
                "edge_relaxed",
                source_id=edge.source_id,
                target_id=edge.target_id,
                weight=edge.weight,
                distance=distance,
                seq=seq,
            )

    def error(self, *, reason: str, **extra):
        self._emit("ERROR", "engine_error", reason=reason, **extra)
