# sim/hooks.py
from typing import Protocol

from sp_trace.domain.entities.geography import Edge


class EngineHooks(Protocol):
    def search_start(self, *, start_id, end_id, nodes, edges): ...
    def search_end(self, *, status, settled, relaxed, distance, wall_ms): ...
    def node_settled(self, node_id: int, *, distance, seq): ...
    def edge_relaxed(self, edge: Edge, *, distance, seq): ...
    def error(self, *, reason: str, **kw): ...


class NoopHooks:
    def search_start(self, **_):
        pass

    def search_end(self, **_):
        pass

    def node_settled(self, *_, **__):
        pass

    def edge_relaxed(self, *_, **__):
        pass

    def error(self, *_, **__):
        pass
