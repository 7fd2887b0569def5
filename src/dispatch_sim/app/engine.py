# dispatch_sim/app/engine.py
from dispatch_sim.app.controllers.fleet import FleetHandler
from dispatch_sim.app.controllers.trips import TripHandler
from dispatch_sim.domain.entities.booking import BookingResult, EstimateResult
from dispatch_sim.domain.entities.geography import Pt
from dispatch_sim.domain.entities.vehicle import Vehicle
from dispatch_sim.domain.state import FleetSnapshot, WorldState
from dispatch_sim.io.business_events import SceneResetBiz
from dispatch_sim.io.recorder import Recorder
from dispatch_sim.sim.clock import SimClock
from dispatch_sim.sim.kernel import Kernel


class DispatchEngine:
    """
    Single owner of fleet, estimate and booking state.

    Commands (request/confirm/cancel/hail/reset) run immediately at the kernel's
    current time; motion ticks and trip releases are kernel events that fire as
    time is advanced. Every mutation ends by publishing a fresh immutable
    ``FleetSnapshot``; readers only ever see the last published one.
    """

    def __init__(
        self,
        kernel: Kernel,
        clock: SimClock,
        world: WorldState,
        fleet: FleetHandler,
        trips: TripHandler,
        *,
        fleet_size: int,
        run_id: str = "local",
        recorder: Recorder | None = None,
    ):
        self.kernel = kernel
        self.clock = clock
        self.world = world
        self.fleet = fleet
        self.trips = trips
        self.fleet_size = fleet_size
        self.run_id = run_id
        self.recorder = recorder or Recorder()
        self._snapshot = world.snapshot(kernel.now)

    @property
    def now(self) -> float:
        return self.kernel.now

    def snapshot(self) -> FleetSnapshot:
        return self._snapshot

    def close(self) -> None:
        self.recorder.close()

    def _publish(self) -> FleetSnapshot:
        self._snapshot = self.world.snapshot(self.kernel.now)
        return self._snapshot

    # ------------- fleet lifecycle -----------------

    def init_fleet(self, count: int | None = None) -> FleetSnapshot:
        return self._reseed(self.fleet_size if count is None else count)

    def reset_scene(self, count: int | None = None) -> FleetSnapshot:
        """Drop fleet, estimate and bookings; outstanding timers become no-ops."""
        dropped = len(self.world.bookings)
        snap = self._reseed(self.fleet_size if count is None else count)
        self.kernel.hooks.biz(
            SceneResetBiz(
                run_id=self.run_id,
                t=self.now,
                generation=snap.generation,
                name="SceneReset",
                fleet_size=len(snap.vehicles),
                dropped_bookings=dropped,
            )
        )
        return snap

    def _reseed(self, count: int) -> FleetSnapshot:
        if count < 0:
            raise ValueError(f"fleet size must be >= 0, got {count}")
        self.world.clear_scene()
        self.world.fleet.initialize(count)
        self.kernel.schedule(self.fleet.first_tick(self.now))
        return self._publish()

    def tick(self) -> FleetSnapshot:
        """One motion step outside the recurring schedule."""
        self.world.fleet.tick()
        return self._publish()

    # ------------- time -----------------

    def run_until(self, t: float) -> FleetSnapshot:
        if t < self.now:
            raise ValueError(f"cannot run backwards to {t} from {self.now}")
        self.kernel.run(until=t)
        return self._publish()

    def advance(self, seconds: float) -> FleetSnapshot:
        return self.run_until(self.now + seconds)

    # ------------- rider commands -----------------

    def request_ride(self, vehicle_type: str, pickup: Pt, dropoff: Pt) -> EstimateResult:
        est = self.trips.request_ride(self.now, vehicle_type, pickup, dropoff)
        self._publish()
        return est

    def confirm_booking(self) -> BookingResult:
        result, out = self.trips.confirm_booking(self.now)
        for ev in out:
            self.kernel.schedule(ev)
        self._publish()
        return result

    def cancel_estimate(self) -> None:
        self.trips.cancel_estimate(self.now)
        self._publish()

    def hail(self, vehicle_id: int) -> Vehicle | None:
        v = self.trips.hail(self.now, vehicle_id)
        self._publish()
        return v
