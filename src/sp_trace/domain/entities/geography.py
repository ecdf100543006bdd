import math
from dataclasses import dataclass, field


# Core graph types used by the builder and the engine
@dataclass(frozen=True)
class Node:
    id: int
    x: float  # same planar units as the bounding area
    y: float


@dataclass(frozen=True)
class Edge:
    source_id: int
    target_id: int
    weight: float  # Euclidean length at construction time

    def __post_init__(self):
        if self.source_id == self.target_id:
            raise ValueError(f"self-edge on node {self.source_id} is not allowed")

    def other(self, node_id: int) -> int:
        """Return the endpoint opposite ``node_id`` (edges are undirected)."""
        return self.target_id if self.source_id == node_id else self.source_id


def distance(a: Node, b: Node) -> float:
    return math.hypot(a.x - b.x, a.y - b.y)


@dataclass(frozen=True)
class Graph:
    """
    Immutable node/edge pair.
    Edges may be stored in both directions; they are interpreted as undirected.
    The incidence index is computed once here and never mutated, so one Graph
    can be searched from several threads at once.
    """

    nodes: tuple[Node, ...]
    edges: tuple[Edge, ...]
    _incident: dict[int, tuple[Edge, ...]] = field(
        init=False, repr=False, compare=False, default_factory=dict
    )

    def __post_init__(self):
        nodes, edges = tuple(self.nodes), tuple(self.edges)
        object.__setattr__(self, "nodes", nodes)
        object.__setattr__(self, "edges", edges)

        for i, n in enumerate(nodes):
            if n.id != i:
                raise ValueError(f"node ids must be 0..n-1 in order; position {i} has id {n.id}")

        incident: dict[int, list[Edge]] = {n.id: [] for n in nodes}
        for e in edges:
            if e.source_id not in incident or e.target_id not in incident:
                raise ValueError(f"edge {e.source_id}->{e.target_id} references an unknown node")
            if not e.weight >= 0.0:
                raise ValueError(f"edge {e.source_id}->{e.target_id} has invalid weight {e.weight}")
            # preserve edge-list order per node; trace ordering depends on it
            incident[e.source_id].append(e)
            incident[e.target_id].append(e)
        object.__setattr__(self, "_incident", {k: tuple(v) for k, v in incident.items()})

    def __len__(self) -> int:
        return len(self.nodes)

    def __contains__(self, node_id) -> bool:
        return node_id in self._incident

    def node(self, node_id: int) -> Node:
        return self.nodes[node_id]

    def incident_edges(self, node_id: int) -> tuple[Edge, ...]:
        return self._incident[node_id]

    def edge_between(self, a: int, b: int) -> Edge | None:
        """Lightest stored edge joining ``a`` and ``b`` in either direction."""
        best = None
        for e in self._incident.get(a, ()):
            if e.other(a) == b and (best is None or e.weight < best.weight):
                best = e
        return best
