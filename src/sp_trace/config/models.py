from math import isfinite
from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator


class LogModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    debug: bool = False
    sample_every: int = Field(default=1, ge=1)


# ----------------- NODE SAMPLERS ---------------------


class NodeSamplerUniformModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    kind: Literal["uniform"] = "uniform"
    count: int = Field(default=500, ge=0)
    width: float = 1920.0
    height: float = 1080.0

    @field_validator("width", "height")
    @classmethod
    def _nonneg_finite(cls, v: float, info: ValidationInfo) -> float:
        if not isfinite(v) or v < 0:
            raise ValueError(f"{info.field_name} must be finite and >= 0")
        return v


class NodeSamplerPointsModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    kind: Literal["points"] = "points"
    points: list[tuple[float, float]] = Field(default_factory=list)

    @field_validator("points")
    @classmethod
    def _finite(cls, v):
        bad = [i for i, (x, y) in enumerate(v) if not (isfinite(x) and isfinite(y))]
        if bad:
            raise ValueError(f"point coordinates must be finite; bad indices: {bad}")
        return v


NodeSamplerUnion = Annotated[
    NodeSamplerUniformModel | NodeSamplerPointsModel,
    Field(discriminator="kind"),
]

# ----------------- EDGE BUILDERS ---------------------


class EdgeBuilderProximityModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    kind: Literal["proximity"] = "proximity"
    max_distance: float = 150.0  # non-positive => no edges


EdgeBuilderUnion = Annotated[EdgeBuilderProximityModel, Field(discriminator="kind")]


# ------------------------------------------------------------------


class GraphModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    nodes: NodeSamplerUnion = Field(default_factory=NodeSamplerUniformModel)
    edges: EdgeBuilderUnion = Field(default_factory=EdgeBuilderProximityModel)


class ReplayModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    delay_s: float = Field(default=0.01, ge=0.0)  # one frame per tick
    include_path: bool = True


class ScenarioModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    name: str
    run_id: str = "local"
    seed: int = 0
    graph: GraphModel = Field(default_factory=GraphModel)
    log: LogModel = LogModel()
    replay: ReplayModel = ReplayModel()
