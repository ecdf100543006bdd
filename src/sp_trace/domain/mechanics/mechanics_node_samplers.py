from collections.abc import Iterable

import numpy as np

from sp_trace.app.protocols import NodeSampler
from sp_trace.domain.entities.geography import Node


def generate_nodes(count: int, width: float, height: float, *, rng: np.random.Generator):
    """
    ``count`` nodes drawn uniformly from [0, width) x [0, height).
    Ids follow generation order. Coincident positions are allowed.
    """
    if count < 0:
        raise ValueError(f"node count must be >= 0, got {count}")
    if width < 0 or height < 0:
        raise ValueError(f"bounding area must be non-negative, got {width}x{height}")
    return tuple(
        Node(i, float(rng.uniform(0.0, width)), float(rng.uniform(0.0, height)))
        for i in range(count)
    )


def nodes_from_points(points: Iterable[tuple[float, float]]) -> tuple[Node, ...]:
    pts = np.asarray(list(points), dtype=float).reshape(-1, 2)
    if not np.isfinite(pts).all():
        bad = np.where(~np.isfinite(pts).all(axis=1))[0]
        raise ValueError(f"point coordinates must be finite; bad indices: {bad.tolist()}")
    return tuple(Node(i, float(x), float(y)) for i, (x, y) in enumerate(pts))


class UniformNodeSampler(NodeSampler):
    def __init__(self, *, count: int, width: float, height: float, rng):
        self.count, self.width, self.height, self.rng = count, width, height, rng

    def nodes(self) -> tuple[Node, ...]:
        return generate_nodes(self.count, self.width, self.height, rng=self.rng)


class PointsNodeSampler(NodeSampler):
    """Pre-supplied coordinates (user input, fixtures)."""

    def __init__(self, *, points: Iterable[tuple[float, float]]):
        self.points = list(points)

    def nodes(self) -> tuple[Node, ...]:
        return nodes_from_points(self.points)
