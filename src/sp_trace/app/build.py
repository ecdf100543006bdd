# sp_trace/app/build.py
import logging
from collections.abc import Mapping
from dataclasses import dataclass

from sp_trace.config.models import ScenarioModel
from sp_trace.domain.entities.geography import Graph
from sp_trace.domain.entities.search import PathResult
from sp_trace.domain.mechanics.mechanics_factory import build_graph_from_config
from sp_trace.domain.mechanics.mechanics_path_engines import DijkstraEngine
from sp_trace.io.engine_logging import EngineLogging  # JSON logs
from sp_trace.io.recorder import JsonlSink, Recorder
from sp_trace.sim.hooks import NoopHooks
from sp_trace.sim.replay import Replay
from sp_trace.sim.rng import RNGRegistry


@dataclass
class App:
    config: ScenarioModel
    rng: RNGRegistry
    graph: Graph
    engine: DijkstraEngine
    recorder: Recorder

    def find_path(self, start_id: int, end_id: int) -> PathResult:
        return self.engine.find_path(self.graph, start_id, end_id)

    def replay(self, result: PathResult) -> Replay:
        return Replay(self.graph, result, include_path=self.config.replay.include_path)

    def play(self, result: PathResult, t0: float = 0.0) -> int:
        """Push every frame of ``result`` to the recorder; returns the frame count."""
        n = 0
        for _, frame in self.replay(result).schedule(self.config.replay.delay_s, t0=t0):
            self.recorder.emit(frame)
            n += 1
        return n


def build(
    cfg: ScenarioModel | Mapping,
    *,
    use_logging: bool = True,
    recorder: Recorder | None = None,
    logger: logging.Logger | None = None,
) -> App:
    # 0) Validate config
    model = cfg if isinstance(cfg, ScenarioModel) else ScenarioModel.model_validate(cfg)

    # 1) RNG
    rng_registry = RNGRegistry(model.seed, scenario=model.name)

    # 2) Engine (with hooks)
    hooks = (
        EngineLogging(
            run_id=model.run_id,
            level=model.log.level,
            debug=model.log.debug,
            sample_every=model.log.sample_every,
            logger=logger,
        )
        if use_logging
        else NoopHooks()
    )
    engine = DijkstraEngine(hooks=hooks)

    # 3) Graph, fixed for the life of the app
    graph = build_graph_from_config(model.graph, rng_registry)

    return App(model, rng_registry, graph, engine, recorder or Recorder(JsonlSink()))
