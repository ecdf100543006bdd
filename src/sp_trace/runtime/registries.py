# runtime/registries.py
from collections.abc import Callable

from sp_trace.app.protocols import EdgeBuilder, NodeSampler
from sp_trace.config.models import (
    EdgeBuilderProximityModel,
    EdgeBuilderUnion,
    NodeSamplerPointsModel,
    NodeSamplerUniformModel,
    NodeSamplerUnion,
)
from sp_trace.domain.mechanics.mechanics_edge_builders import ProximityEdgeBuilder
from sp_trace.domain.mechanics.mechanics_node_samplers import (
    PointsNodeSampler,
    UniformNodeSampler,
)

NodeSamplerFactory = Callable[[NodeSamplerUnion, dict], NodeSampler]
EdgeBuilderFactory = Callable[[EdgeBuilderUnion, dict], EdgeBuilder]

_node_sampler_registry: dict[str, NodeSamplerFactory] = {}
_edge_builder_registry: dict[str, EdgeBuilderFactory] = {}


# ------------------- Node samplers ---------------------------


def register_node_sampler(kind: str):
    def deco(fn: NodeSamplerFactory):
        _node_sampler_registry[kind] = fn
        return fn

    return deco


def make_node_sampler(cfg: NodeSamplerUnion, *, deps: dict) -> NodeSampler:
    try:
        factory = _node_sampler_registry[cfg.kind]
    except KeyError:
        raise ValueError(f"Unknown node sampler kind {cfg.kind!r}") from None
    return factory(cfg, deps)


@register_node_sampler("uniform")
def _make_uniform(cfg: NodeSamplerUniformModel, deps):
    # keyed by count so resizing a graph draws a fresh, independent point set
    rng = deps["rng_registry"].stream("nodes", cfg.count)
    return UniformNodeSampler(count=cfg.count, width=cfg.width, height=cfg.height, rng=rng)


@register_node_sampler("points")
def _make_points(cfg: NodeSamplerPointsModel, deps):
    return PointsNodeSampler(points=cfg.points)


# --------------------- Edge builders ---------------------


def register_edge_builder(kind: str):
    def deco(fn: EdgeBuilderFactory):
        _edge_builder_registry[kind] = fn
        return fn

    return deco


def make_edge_builder(cfg: EdgeBuilderUnion, *, deps: dict) -> EdgeBuilder:
    try:
        factory = _edge_builder_registry[cfg.kind]
    except KeyError:
        raise ValueError(f"Unknown edge builder kind {cfg.kind!r}") from None
    return factory(cfg, deps)


@register_edge_builder("proximity")
def _make_proximity(cfg: EdgeBuilderProximityModel, deps):
    return ProximityEdgeBuilder(cfg.max_distance)
