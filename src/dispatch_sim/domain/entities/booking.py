from dataclasses import dataclass
from datetime import datetime
from typing import Literal


@dataclass(frozen=True)
class Estimate:
    vehicle_id: int
    vehicle_type: str
    eta_minutes: int  # >= 2
    trip_minutes: int  # >= 3
    trip_distance_km: float  # 2 decimals
    price: float  # 2 decimals

    ok = True


@dataclass(frozen=True)
class EstimateError:
    vehicle_type: str
    reason: Literal["NoVehicleAvailable"] = "NoVehicleAvailable"

    ok = False


EstimateResult = Estimate | EstimateError


@dataclass(frozen=True)
class Booking:
    booking_id: int
    vehicle_id: int
    vehicle_type: str
    price: float
    eta_minutes: int
    trip_minutes: int
    confirmed_t: float  # sim seconds
    release_t: float
    generation: int


@dataclass(frozen=True)
class BookingReceipt:
    booking_id: int
    vehicle_id: int
    vehicle_type: str
    price: float
    confirmed_at: datetime
    release_at: datetime
    duration_ms: int

    ok = True


@dataclass(frozen=True)
class BookingError:
    reason: Literal["NoPendingEstimate"] = "NoPendingEstimate"

    ok = False


BookingResult = BookingReceipt | BookingError
