from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator, model_validator


class SimModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    epoch: tuple[int, int, int, int, int, int] = (2025, 1, 1, 0, 0, 0)
    seed: int = 0


class LogModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    debug: bool = False
    sample_every: int = 1
    events: Literal["none", "stderr"] = "none"  # JSONL business-event stream
    async_sink: bool = False


class MapModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    width: float = Field(800.0, gt=0)
    height: float = Field(600.0, gt=0)
    margin: float = Field(20.0, ge=0)

    @model_validator(mode="after")
    def _margin_fits(self):
        if 2 * self.margin >= min(self.width, self.height):
            raise ValueError("margin leaves no room inside the map")
        return self


class FleetModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    size: int = Field(12, ge=0)
    tick_interval_s: float = Field(1.0, gt=0)
    # velocities are pixels per tick
    initial_speed: float = 1.5
    max_speed: float = 2.0
    jitter: float = 0.3
    bounce_noise: float = 0.5
    park_in_trip: bool = False

    @field_validator("initial_speed", "max_speed", "jitter", "bounce_noise")
    @classmethod
    def _nonneg(cls, v: float, info: ValidationInfo) -> float:
        if v < 0:
            raise ValueError(f"{info.field_name} must be >= 0")
        return v


class VehicleTypeModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    name: str
    base_fare: float = Field(ge=0)
    per_km: float = Field(ge=0)
    speed_kmh: float = Field(gt=0)
    color: str = "#888888"


def _default_types() -> list[VehicleTypeModel]:
    from dispatch_sim.domain.entities.vehicle import DEFAULT_VEHICLE_TYPES

    return [
        VehicleTypeModel(
            name=vt.name,
            base_fare=vt.base_fare,
            per_km=vt.per_km,
            speed_kmh=vt.speed_kmh,
            color=vt.color,
        )
        for vt in DEFAULT_VEHICLE_TYPES
    ]


class PricingModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    px_to_km: float = Field(0.05, gt=0)


class BookingModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    min_duration_ms: int = Field(5000, ge=0)
    ms_per_minute: int = Field(200, ge=0)


# ------------------ MATCHING -----------------------------


class MatchingPolicyScanModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    kind: Literal["scan"] = "scan"


class MatchingPolicyVectorizedModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    kind: Literal["vectorized"] = "vectorized"


MatchingPolicyUnion = Annotated[
    MatchingPolicyScanModel | MatchingPolicyVectorizedModel, Field(discriminator="kind")
]


# ------------------------------------------------------------------


class ScenarioModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    name: str = "dispatch"
    run_id: str = "local"
    sim: SimModel = SimModel()
    log: LogModel = LogModel()
    map: MapModel = MapModel()
    fleet: FleetModel = FleetModel()
    vehicle_types: list[VehicleTypeModel] = Field(default_factory=_default_types, min_length=1)
    pricing: PricingModel = PricingModel()
    booking: BookingModel = BookingModel()
    matching: MatchingPolicyUnion = Field(default_factory=MatchingPolicyScanModel)

    @field_validator("vehicle_types")
    @classmethod
    def _unique_names(cls, v: list[VehicleTypeModel]) -> list[VehicleTypeModel]:
        names = [t.name for t in v]
        dupes = sorted({n for n in names if names.count(n) > 1})
        if dupes:
            raise ValueError(f"duplicate vehicle type names: {dupes}")
        return v
