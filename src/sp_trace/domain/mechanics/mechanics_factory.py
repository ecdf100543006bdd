# sp_trace/domain/mechanics/mechanics_factory.py
import logging

import numpy as np

from sp_trace.config.models import GraphModel
from sp_trace.domain.entities.geography import Graph
from sp_trace.domain.mechanics.mechanics_edge_builders import generate_edges
from sp_trace.domain.mechanics.mechanics_node_samplers import generate_nodes
from sp_trace.runtime.registries import make_edge_builder, make_node_sampler
from sp_trace.sim.rng import RNGRegistry

log = logging.getLogger(__name__)


def build_graph(
    node_count: int,
    width: float,
    height: float,
    max_edge_distance: float,
    *,
    rng: np.random.Generator | None = None,
    seed: int | None = None,
) -> Graph:
    """
    Random nodes in [0, width) x [0, height) joined by every pair closer than
    ``max_edge_distance``. Deterministic: without ``rng`` the "nodes" stream,
    keyed by ``node_count``, of an RNGRegistry seeded with ``seed`` (default 0)
    is used.
    """
    if rng is None:
        rng = RNGRegistry(seed or 0).stream("nodes", node_count)
    nodes = generate_nodes(node_count, width, height, rng=rng)
    return Graph(nodes, generate_edges(nodes, max_edge_distance))


def build_graph_from_config(cfg: GraphModel, rng_registry: RNGRegistry) -> Graph:
    node_sampler = make_node_sampler(cfg.nodes, deps={"rng_registry": rng_registry})
    edge_builder = make_edge_builder(cfg.edges, deps={})

    nodes = node_sampler.nodes()
    graph = Graph(nodes, edge_builder.edges(nodes))
    log.debug(
        "built graph nodes=%d edges=%d sampler=%s", len(graph), len(graph.edges), cfg.nodes.kind
    )
    return graph
