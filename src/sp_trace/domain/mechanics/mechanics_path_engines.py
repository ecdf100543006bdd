import heapq
import math
import time
from collections.abc import Callable

import numpy as np

from sp_trace.app.protocols import PathEngine
from sp_trace.domain.entities.geography import Edge, Graph
from sp_trace.domain.entities.search import PathResult, PathStatus
from sp_trace.sim.hooks import EngineHooks, NoopHooks


class InvalidNodeError(ValueError):
    """Start or end id is not a node of the graph."""


class SearchCancelled(RuntimeError):
    pass


def _node_id(graph: Graph, node_id, role: str) -> int:
    if isinstance(node_id, bool) or not isinstance(node_id, (int, np.integer)):
        raise InvalidNodeError(f"{role} node id must be an int, got {node_id!r}")
    if node_id not in graph:
        raise InvalidNodeError(f"{role} node {node_id} is not in the graph ({len(graph)} nodes)")
    return int(node_id)


class DijkstraEngine(PathEngine):
    """
    Dijkstra with a full exploration trace.

    Pending nodes sit in a binary heap keyed (distance, id), so selection is
    "smallest tentative distance, ties by ascending id". Stale heap entries are
    skipped on pop instead of being removed.

    Only improving relaxations are traced: an edge is appended when it strictly
    lowers the tentative distance of its unvisited endpoint. The second stored
    direction of an undirected connection never improves on the first in the
    same step, so no extra dedup is needed. Keep the comparison strict.
    """

    def __init__(self, hooks: EngineHooks | None = None):
        self._hooks = hooks or NoopHooks()

    def find_path(
        self,
        graph: Graph,
        start_id: int,
        end_id: int,
        *,
        should_cancel: Callable[[], bool] | None = None,
    ) -> PathResult:
        try:
            start = _node_id(graph, start_id, "start")
            end = _node_id(graph, end_id, "end")
        except InvalidNodeError as exc:
            self._hooks.error(reason="invalid_node", error=str(exc))
            raise

        t0 = time.perf_counter()
        self._hooks.search_start(
            start_id=start, end_id=end, nodes=len(graph), edges=len(graph.edges)
        )
        try:
            dist, prev, trace, settled = self._search(graph, start, end, should_cancel)
        except SearchCancelled:
            raise  # already reported
        except Exception as exc:
            self._hooks.error(reason="exception", error=repr(exc), start_id=start, end_id=end)
            raise

        if math.isinf(dist[end]):
            status, path = PathStatus.UNREACHABLE, ()
        else:
            status, path = PathStatus.FOUND, self._walk_back(prev, end)

        self._hooks.search_end(
            status=status.value,
            settled=len(settled),
            relaxed=len(trace),
            distance=dist[end],
            wall_ms=(time.perf_counter() - t0) * 1000,
        )
        return PathResult(
            start_id=start,
            end_id=end,
            status=status,
            trace=tuple(trace),
            path=path,
            distance=dist[end],
            settled=tuple(settled),
        )

    def _search(self, graph: Graph, start: int, end: int, should_cancel):
        n = len(graph)
        dist = [math.inf] * n
        prev: list[int | None] = [None] * n
        visited = [False] * n
        trace: list[Edge] = []
        settled: list[int] = []

        dist[start] = 0.0
        q: list[tuple[float, int]] = [(0.0, start)]
        while q:
            d, u = heapq.heappop(q)
            if visited[u]:
                continue
            if should_cancel is not None and should_cancel():
                self._hooks.error(reason="cancelled", settled=len(settled), relaxed=len(trace))
                raise SearchCancelled(
                    f"search {start}->{end} cancelled after {len(settled)} settled nodes"
                )
            visited[u] = True
            settled.append(u)
            self._hooks.node_settled(u, distance=d, seq=len(settled))
            if u == end:
                break  # target distance is final; nothing past it is explored

            for e in graph.incident_edges(u):
                v = e.other(u)
                if visited[v]:
                    continue
                nd = d + e.weight
                if nd < dist[v]:
                    dist[v] = nd
                    prev[v] = u
                    trace.append(e)
                    self._hooks.edge_relaxed(e, distance=nd, seq=len(trace))
                    heapq.heappush(q, (nd, v))
        # an exhausted queue means every remaining node is at +inf
        return dist, prev, trace, settled

    @staticmethod
    def _walk_back(prev: list[int | None], end: int) -> tuple[int, ...]:
        path = []
        cur: int | None = end
        while cur is not None:
            path.append(cur)
            cur = prev[cur]
        path.reverse()
        return tuple(path)


def find_shortest_path(
    graph: Graph,
    start_id: int,
    end_id: int,
    *,
    hooks: EngineHooks | None = None,
    should_cancel: Callable[[], bool] | None = None,
) -> PathResult:
    return DijkstraEngine(hooks=hooks).find_path(
        graph, start_id, end_id, should_cancel=should_cancel
    )
