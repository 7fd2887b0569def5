from collections.abc import Sequence
from typing import Protocol, runtime_checkable

from dispatch_sim.domain.entities.booking import Estimate
from dispatch_sim.domain.entities.geography import Point
from dispatch_sim.domain.entities.vehicle import Vehicle, VehicleType


# --------------- Policies -------------------------


@runtime_checkable
class MatchingPolicy(Protocol):
    """
    Pick the available vehicle of a class closest to a point.
    Contract:
      • only vehicles with ``available`` and matching ``type.name`` qualify
      • None when nothing qualifies
      • ties go to the vehicle that comes first in ``vehicles`` order
    Implementations are free to index space however they like.
    """

    def find_nearest(
        self, vehicles: Sequence[Vehicle], type_name: str, origin: Point
    ) -> Vehicle | None: ...


@runtime_checkable
class PricingPolicy(Protocol):
    def estimate(
        self, vehicle: Vehicle, vtype: VehicleType, pickup: Point, dropoff: Point
    ) -> Estimate: ...


@runtime_checkable
class TripDurationPolicy(Protocol):
    def duration_ms(self, estimate: Estimate) -> int: ...
