# dispatch_sim/domain/state.py
from dataclasses import dataclass, field

from dispatch_sim.domain.entities.booking import Booking, EstimateResult
from dispatch_sim.domain.entities.geography import Point
from dispatch_sim.domain.entities.vehicle import Vehicle
from dispatch_sim.domain.fleet import Fleet


@dataclass(frozen=True)
class FleetSnapshot:
    """Read-only view handed to the rendering side after each mutation."""

    generation: int
    t: float
    vehicles: tuple[Vehicle, ...]
    estimate: EstimateResult | None = None
    last_booked: Booking | None = None
    matched_id: int | None = None
    pickup: Point | None = None
    dropoff: Point | None = None
    active_bookings: int = 0

    @property
    def matched(self) -> Vehicle | None:
        if self.matched_id is None:
            return None
        return next((v for v in self.vehicles if v.id == self.matched_id), None)


@dataclass
class WorldState:
    fleet: Fleet
    estimate: EstimateResult | None = None  # at most one pending
    last_booked: Booking | None = None
    matched_id: int | None = None  # display-only pointer, never a reservation
    pickup: Point | None = None
    dropoff: Point | None = None

    # in-flight bookings by vehicle id; one per unavailable vehicle
    bookings: dict[int, Booking] = field(default_factory=dict)

    @property
    def generation(self) -> int:
        return self.fleet.generation

    def clear_scene(self) -> None:
        self.estimate = None
        self.last_booked = None
        self.matched_id = None
        self.pickup = None
        self.dropoff = None
        self.bookings.clear()

    def snapshot(self, t: float) -> FleetSnapshot:
        return FleetSnapshot(
            generation=self.fleet.generation,
            t=t,
            vehicles=self.fleet.vehicles,
            estimate=self.estimate,
            last_booked=self.last_booked,
            matched_id=self.matched_id,
            pickup=self.pickup,
            dropoff=self.dropoff,
            active_bookings=len(self.bookings),
        )
