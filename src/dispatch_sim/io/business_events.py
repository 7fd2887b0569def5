# dispatch_sim/io/business_events.py

from dataclasses import dataclass
from typing import Literal


# Base type for analytics events (not scheduled in the kernel!)
@dataclass
class BizEvent:
    run_id: str
    t: float  # simulation time
    generation: int  # fleet generation the event belongs to
    name: str  # stable event name


@dataclass
class RideRequestedBiz(BizEvent):
    vehicle_type: str
    pickup: tuple[float, float]
    dropoff: tuple[float, float]
    clamped: bool = False


@dataclass
class RideEstimatedBiz(BizEvent):
    vehicle_id: int
    vehicle_type: str
    eta_minutes: int
    trip_minutes: int
    trip_distance_km: float
    price: float


@dataclass
class NoVehicleAvailableBiz(BizEvent):
    vehicle_type: str


@dataclass
class EstimateCanceledBiz(BizEvent):
    vehicle_id: int | None = None


@dataclass
class BookingConfirmedBiz(BizEvent):
    booking_id: int
    vehicle_id: int
    price: float
    release_t: float


@dataclass
class BookingRejectedBiz(BizEvent):
    reason: Literal["NoPendingEstimate"] = "NoPendingEstimate"


@dataclass
class VehicleReleasedBiz(BizEvent):
    booking_id: int
    vehicle_id: int
    x: float
    y: float


@dataclass
class VehicleHailedBiz(BizEvent):
    vehicle_id: int


@dataclass
class SceneResetBiz(BizEvent):
    fleet_size: int
    dropped_bookings: int
