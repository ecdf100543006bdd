import logging

from sp_trace.app.protocols import EdgeBuilder
from sp_trace.domain.entities.geography import Edge, Node, distance

log = logging.getLogger(__name__)


def generate_edges(nodes: tuple[Node, ...], max_distance: float) -> tuple[Edge, ...]:
    """
    Proximity-threshold edges over every ordered pair of distinct nodes.

    a->b is emitted when dist(a, b) < max_distance (strict), so each undirected
    connection is stored twice. Order: source in node order, then target.
    O(n^2): fine for hundreds to low thousands of nodes; larger graphs need a
    spatial index first.
    """
    if max_distance <= 0:
        return ()
    edges = []
    for a in nodes:
        for b in nodes:
            if a.id == b.id:
                continue
            d = distance(a, b)
            if d < max_distance:
                edges.append(Edge(a.id, b.id, d))
    log.debug("generated %d edge records over %d nodes", len(edges), len(nodes))
    return tuple(edges)


class ProximityEdgeBuilder(EdgeBuilder):
    def __init__(self, max_distance: float):
        self.max_distance = max_distance

    def edges(self, nodes: tuple[Node, ...]) -> tuple[Edge, ...]:
        return generate_edges(nodes, self.max_distance)
