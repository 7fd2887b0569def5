# app/events.py
from dataclasses import dataclass

from dispatch_sim.sim.event import BaseEvent

# Every scheduled event carries the fleet generation it was created under;
# handlers drop events from an older generation (the fleet was reset since).


@dataclass(order=True)
class MotionTick(BaseEvent):
    generation: int


@dataclass(order=True)
class VehicleRelease(BaseEvent):
    vehicle_id: int
    booking_id: int
    generation: int
