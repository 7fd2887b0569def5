# dispatch_sim/app/controllers/trips.py
import logging
from itertools import count

from dispatch_sim.app.events import VehicleRelease
from dispatch_sim.app.protocols import MatchingPolicy, PricingPolicy, TripDurationPolicy
from dispatch_sim.domain.entities.booking import (
    Booking,
    BookingError,
    BookingReceipt,
    BookingResult,
    Estimate,
    EstimateError,
    EstimateResult,
)
from dispatch_sim.domain.entities.geography import Bounds, Pt, to_point
from dispatch_sim.domain.entities.vehicle import Vehicle, VehicleTypeRegistry
from dispatch_sim.domain.state import WorldState
from dispatch_sim.io.business_events import (
    BookingConfirmedBiz,
    BookingRejectedBiz,
    EstimateCanceledBiz,
    NoVehicleAvailableBiz,
    RideEstimatedBiz,
    RideRequestedBiz,
    VehicleHailedBiz,
    VehicleReleasedBiz,
)
from dispatch_sim.sim.clock import SimClock, ms
from dispatch_sim.sim.hooks import KernelHooks, NoopHooks

log = logging.getLogger("dispatch_sim.trips")


class TripHandler:
    """
    Booking lifecycle: Idle -> Estimated -> Confirmed (in trip) -> Idle.

    An estimate never reserves its vehicle; only confirm flips ``available``.
    Command methods run at the caller's ``now`` and return the events the
    kernel must schedule, the same way event handlers do.
    """

    def __init__(
        self,
        world: WorldState,
        types: VehicleTypeRegistry,
        matching: MatchingPolicy,
        pricing: PricingPolicy,
        duration: TripDurationPolicy,
        clock: SimClock,
        map_bounds: Bounds,
        run_id: str = "local",
        hooks: KernelHooks | None = None,
    ):
        self.world = world
        self.types = types
        self.matching = matching
        self.pricing = pricing
        self.duration = duration
        self.clock = clock
        self.map_bounds = map_bounds
        self.run_id = run_id
        self.hooks = hooks or NoopHooks()
        self._booking_ids = count(1)

    def _biz(self, cls, now: float, **fields):
        name = cls.__name__.removesuffix("Biz")
        self.hooks.biz(
            cls(run_id=self.run_id, t=now, generation=self.world.generation, name=name, **fields)
        )

    # ------------ commands --------------

    def request_ride(self, now: float, type_name: str, pickup: Pt, dropoff: Pt) -> EstimateResult:
        vtype = self.types.get(type_name)  # ValueError before anything changes
        raw_p, raw_d = to_point(pickup), to_point(dropoff)
        p, d = self.map_bounds.clamp(raw_p), self.map_bounds.clamp(raw_d)

        w = self.world
        w.pickup, w.dropoff = p, d
        self._biz(
            RideRequestedBiz,
            now,
            vehicle_type=vtype.name,
            pickup=(p.x, p.y),
            dropoff=(d.x, d.y),
            clamped=(p != raw_p or d != raw_d),
        )

        v = self.matching.find_nearest(w.fleet.vehicles, vtype.name, p)
        if v is None:
            w.estimate = EstimateError(vehicle_type=vtype.name)
            w.matched_id = None
            self._biz(NoVehicleAvailableBiz, now, vehicle_type=vtype.name)
            return w.estimate

        est = self.pricing.estimate(v, vtype, p, d)
        w.estimate = est  # replaces any earlier pending estimate
        w.matched_id = v.id
        self._biz(
            RideEstimatedBiz,
            now,
            vehicle_id=est.vehicle_id,
            vehicle_type=est.vehicle_type,
            eta_minutes=est.eta_minutes,
            trip_minutes=est.trip_minutes,
            trip_distance_km=est.trip_distance_km,
            price=est.price,
        )
        return est

    def cancel_estimate(self, now: float) -> None:
        est = self.world.estimate
        if est is None:
            return
        self.world.estimate = None
        self._biz(
            EstimateCanceledBiz,
            now,
            vehicle_id=est.vehicle_id if isinstance(est, Estimate) else None,
        )

    def confirm_booking(self, now: float) -> tuple[BookingResult, list[VehicleRelease]]:
        w = self.world
        est = w.estimate
        v = w.fleet.get(est.vehicle_id) if isinstance(est, Estimate) else None
        if v is None or not v.available:
            self._biz(BookingRejectedBiz, now)
            return BookingError(), []

        dur_ms = self.duration.duration_ms(est)
        booking = Booking(
            booking_id=next(self._booking_ids),
            vehicle_id=v.id,
            vehicle_type=est.vehicle_type,
            price=est.price,
            eta_minutes=est.eta_minutes,
            trip_minutes=est.trip_minutes,
            confirmed_t=now,
            release_t=now + ms(dur_ms),
            generation=w.generation,
        )
        w.fleet.set_available(v.id, False)
        w.bookings[v.id] = booking
        w.last_booked = booking
        w.estimate = None

        self._biz(
            BookingConfirmedBiz,
            now,
            booking_id=booking.booking_id,
            vehicle_id=v.id,
            price=booking.price,
            release_t=booking.release_t,
        )
        receipt = BookingReceipt(
            booking_id=booking.booking_id,
            vehicle_id=v.id,
            vehicle_type=booking.vehicle_type,
            price=booking.price,
            confirmed_at=self.clock.to_wall(booking.confirmed_t),
            release_at=self.clock.to_wall(booking.release_t),
            duration_ms=dur_ms,
        )
        release = VehicleRelease(
            t=booking.release_t,
            vehicle_id=v.id,
            booking_id=booking.booking_id,
            generation=booking.generation,
        )
        return receipt, [release]

    def hail(self, now: float, vehicle_id: int) -> Vehicle | None:
        """Point the display at a vehicle without reserving it."""
        v = self.world.fleet.get(vehicle_id)
        if v is None:
            return None
        self.world.matched_id = v.id
        self._biz(VehicleHailedBiz, now, vehicle_id=v.id)
        return v

    # ------------ causal event handlers --------------

    def on_vehicle_release(self, ev: VehicleRelease):
        w = self.world
        if ev.generation != w.generation:
            log.debug(
                "stale release dropped",
                extra={"extra": {"vehicle_id": ev.vehicle_id, "generation": ev.generation}},
            )
            return []
        booking = w.bookings.get(ev.vehicle_id)
        if booking is None or booking.booking_id != ev.booking_id:
            return []

        del w.bookings[ev.vehicle_id]
        v = w.fleet.release(ev.vehicle_id)
        if w.matched_id == ev.vehicle_id:
            w.matched_id = None
        if w.last_booked is not None and w.last_booked.booking_id == booking.booking_id:
            w.last_booked = None
        if v is not None:
            self._biz(
                VehicleReleasedBiz,
                ev.t,
                booking_id=booking.booking_id,
                vehicle_id=v.id,
                x=v.pos.x,
                y=v.pos.y,
            )
        return []
