# dispatch_sim/app/wiring.py
from dispatch_sim.app.controllers.fleet import FleetHandler
from dispatch_sim.app.controllers.trips import TripHandler
from dispatch_sim.app.events import MotionTick, VehicleRelease
from dispatch_sim.sim.kernel import Kernel


def wire(kernel: Kernel, *, fleet: FleetHandler, trips: TripHandler) -> None:
    k = kernel

    # supply motion
    k.on(MotionTick, fleet.on_motion_tick)

    # trips
    k.on(VehicleRelease, trips.on_vehicle_release)  # in-trip -> available at a fresh spot
