from collections.abc import Iterable, Iterator
from dataclasses import dataclass, replace

from dispatch_sim.domain.entities.geography import Point
from dispatch_sim.domain.entities.motion import Velocity


@dataclass(frozen=True)
class VehicleType:
    name: str
    base_fare: float  # currency units
    per_km: float  # currency per km
    speed_kmh: float
    color: str = "#888888"  # display only

    def __post_init__(self):
        if self.speed_kmh <= 0:
            raise ValueError(f"{self.name}: speed_kmh must be > 0, got {self.speed_kmh}")


@dataclass(frozen=True)
class Vehicle:
    id: int
    type: VehicleType
    pos: Point
    vel: Velocity
    available: bool = True

    def moved(self, pos: Point, vel: Velocity) -> "Vehicle":
        return replace(self, pos=pos, vel=vel)

    def with_available(self, available: bool) -> "Vehicle":
        return replace(self, available=available)


class VehicleTypeRegistry:
    """Ordered, immutable lookup of vehicle classes by name."""

    def __init__(self, types: Iterable[VehicleType]):
        self._types: dict[str, VehicleType] = {}
        for vt in types:
            if vt.name in self._types:
                raise ValueError(f"duplicate vehicle type {vt.name!r}")
            self._types[vt.name] = vt
        if not self._types:
            raise ValueError("at least one vehicle type is required")

    def get(self, name: str) -> VehicleType:
        try:
            return self._types[name]
        except KeyError:
            raise ValueError(f"Unknown vehicle type {name!r}") from None

    def __contains__(self, name: object) -> bool:
        return name in self._types

    def __iter__(self) -> Iterator[VehicleType]:
        return iter(self._types.values())

    def __len__(self) -> int:
        return len(self._types)

    def names(self) -> list[str]:
        return list(self._types)


DEFAULT_VEHICLE_TYPES = (
    VehicleType("Economy", base_fare=2.0, per_km=0.8, speed_kmh=40.0, color="#2e86de"),
    VehicleType("Comfort", base_fare=3.0, per_km=1.0, speed_kmh=45.0, color="#10ac84"),
    VehicleType("Premium", base_fare=5.0, per_km=1.6, speed_kmh=55.0, color="#222f3e"),
    VehicleType("XL", base_fare=4.0, per_km=1.3, speed_kmh=35.0, color="#ee5253"),
)
