from collections.abc import Callable
from typing import Protocol, runtime_checkable

from sp_trace.domain.entities.geography import Edge, Graph, Node
from sp_trace.domain.entities.search import PathResult


# ------------- Graph construction --------------------
@runtime_checkable
class NodeSampler(Protocol):
    """
    Responsibilities:
      • Produce the ordered node set of a graph.
      • Assign ids 0..n-1 in generation order.
    Coordinates live in the same planar units as edge weights.
    """

    def nodes(self) -> tuple[Node, ...]: ...


@runtime_checkable
class EdgeBuilder(Protocol):
    """
    Responsibilities:
      • Connect nodes with weighted edges; no self-edges.
      • Edges may be stored once per direction.
    """

    def edges(self, nodes: tuple[Node, ...]) -> tuple[Edge, ...]: ...


# ------------- Search --------------------
@runtime_checkable
class PathEngine(Protocol):
    """
    Single-source shortest path between two node ids.
    Must not mutate the graph; each call owns its working state.
    """

    def find_path(
        self,
        graph: Graph,
        start_id: int,
        end_id: int,
        *,
        should_cancel: Callable[[], bool] | None = None,
    ) -> PathResult: ...
