import math
from dataclasses import dataclass
from enum import Enum

from sp_trace.domain.entities.geography import Edge, Graph

ExplorationTrace = tuple[Edge, ...]
ShortestPath = tuple[int, ...]


class PathStatus(Enum):
    FOUND = "found"
    UNREACHABLE = "unreachable"


@dataclass(frozen=True)
class PathResult:
    start_id: int
    end_id: int
    status: PathStatus
    trace: ExplorationTrace  # improving relaxations, in the order they happened
    path: ShortestPath  # start..end inclusive; empty when unreachable
    distance: float = math.inf
    settled: tuple[int, ...] = ()  # nodes in the order they were finalized

    @property
    def reachable(self) -> bool:
        return self.status is PathStatus.FOUND

    def path_edges(self, graph: Graph) -> list[Edge]:
        out = []
        for a, b in zip(self.path, self.path[1:]):
            e = graph.edge_between(a, b)
            if e is None:
                raise ValueError(f"path step {a}->{b} has no edge in this graph")
            out.append(e)
        return out

    def path_weight(self, graph: Graph) -> float:
        return sum(e.weight for e in self.path_edges(graph))
