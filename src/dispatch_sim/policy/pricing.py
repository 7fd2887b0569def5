# dispatch_sim/policy/pricing.py
from decimal import ROUND_HALF_UP, Decimal

from dispatch_sim.app.protocols import PricingPolicy
from dispatch_sim.domain.entities.booking import Estimate
from dispatch_sim.domain.entities.geography import Point, distance
from dispatch_sim.domain.entities.vehicle import Vehicle, VehicleType

MIN_ETA_MINUTES = 2
MIN_TRIP_MINUTES = 3


def round_half_up(x: float, ndigits: int = 0) -> float:
    """Round .5 away from zero on the decimal repr of x; builtin round() is half-to-even."""
    q = Decimal(str(float(x))).quantize(Decimal(10) ** -ndigits, rounding=ROUND_HALF_UP)
    return float(q)


def minutes_at(km: float, speed_kmh: float) -> int:
    return int(round_half_up(km / speed_kmh * 60.0))


class FareEstimator(PricingPolicy):
    """
    Quote for a matched vehicle: approach ETA, trip duration, distance and price.
    Canvas pixels are converted to km with a fixed ``px_to_km`` factor.
    Pure: the same inputs always give the same Estimate.
    """

    def __init__(self, px_to_km: float = 0.05):
        if px_to_km <= 0:
            raise ValueError(f"px_to_km must be > 0, got {px_to_km}")
        self.px_to_km = px_to_km

    def estimate(
        self, vehicle: Vehicle, vtype: VehicleType, pickup: Point, dropoff: Point
    ) -> Estimate:
        approach_km = distance(vehicle.pos, pickup) * self.px_to_km
        trip_km = distance(pickup, dropoff) * self.px_to_km
        return Estimate(
            vehicle_id=vehicle.id,
            vehicle_type=vtype.name,
            eta_minutes=max(MIN_ETA_MINUTES, minutes_at(approach_km, vtype.speed_kmh)),
            trip_minutes=max(MIN_TRIP_MINUTES, minutes_at(trip_km, vtype.speed_kmh)),
            trip_distance_km=round_half_up(trip_km, 2),
            price=round_half_up(vtype.base_fare + vtype.per_km * trip_km, 2),
        )
