# tests/app/test_config_models.py
import json

import pytest
from pydantic import ValidationError

from sp_trace.config.models import (
    EdgeBuilderProximityModel,
    NodeSamplerPointsModel,
    NodeSamplerUniformModel,
    ScenarioModel,
)
from sp_trace.io.config import load_scenario
from sp_trace.runtime.registries import make_edge_builder, make_node_sampler


def test_defaults():
    m = ScenarioModel.model_validate({"name": "x"})
    assert isinstance(m.graph.nodes, NodeSamplerUniformModel)
    assert m.graph.nodes.count == 500
    assert m.graph.edges.max_distance == 150.0
    assert m.replay.delay_s == 0.01
    assert m.log.level == "INFO"


def test_discriminated_node_sampler():
    m = ScenarioModel.model_validate(
        {"name": "x", "graph": {"nodes": {"kind": "points", "points": [[1, 2], [3, 4]]}}}
    )
    assert isinstance(m.graph.nodes, NodeSamplerPointsModel)
    assert m.graph.nodes.points == [(1.0, 2.0), (3.0, 4.0)]


@pytest.mark.parametrize(
    "payload",
    [
        {"name": "x", "unknown": 1},
        {"name": "x", "graph": {"nodes": {"kind": "hexgrid"}}},
        {"name": "x", "graph": {"nodes": {"kind": "uniform", "count": -1}}},
        {"name": "x", "graph": {"nodes": {"kind": "uniform", "width": -3.0}}},
        {"name": "x", "graph": {"nodes": {"kind": "points", "points": [[0, "nan"]]}}},
        {"name": "x", "log": {"sample_every": 0}},
        {"name": "x", "replay": {"delay_s": -1}},
        {"graph": {}},
    ],
)
def test_invalid_configs_are_rejected(payload):
    with pytest.raises(ValidationError):
        ScenarioModel.model_validate(payload)


def test_non_positive_threshold_is_allowed():
    m = EdgeBuilderProximityModel(max_distance=0.0)
    assert make_edge_builder(m, deps={}).edges(()) == ()


def test_registry_rejects_unknown_kind():
    cfg = NodeSamplerPointsModel.model_construct(kind="bogus", points=[])
    with pytest.raises(ValueError, match="bogus"):
        make_node_sampler(cfg, deps={})


def test_load_scenario_from_json(tmp_path):
    p = tmp_path / "scenario.json"
    p.write_text(
        json.dumps(
            {
                "name": "file",
                "seed": 5,
                "graph": {"nodes": {"kind": "uniform", "count": 10, "width": 50, "height": 50}},
            }
        )
    )
    m = load_scenario(p)
    assert m.name == "file" and m.seed == 5 and m.graph.nodes.count == 10


def test_load_scenario_surfaces_validation_errors(tmp_path):
    p = tmp_path / "bad.json"
    p.write_text(json.dumps({"name": "bad", "graph": {"edges": {"kind": "knn"}}}))
    with pytest.raises(ValidationError):
        load_scenario(str(p))
