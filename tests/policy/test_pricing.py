import pytest

from dispatch_sim.domain.entities.booking import Estimate
from dispatch_sim.domain.entities.geography import Point
from dispatch_sim.domain.entities.motion import Velocity
from dispatch_sim.domain.entities.vehicle import DEFAULT_VEHICLE_TYPES, Vehicle, VehicleType
from dispatch_sim.policy.pricing import FareEstimator, round_half_up
from dispatch_sim.policy.trip_duration import CompressedTripDuration

ECONOMY = DEFAULT_VEHICLE_TYPES[0]


def at(x, y, vtype=ECONOMY):
    return Vehicle(1, vtype, Point(x, y), Velocity(0.0, 0.0))


def test_economy_fifteen_km_quote():
    est = FareEstimator(px_to_km=0.05).estimate(
        at(100, 100), ECONOMY, Point(100, 100), Point(400, 100)
    )
    assert est.trip_distance_km == pytest.approx(15.0)
    assert est.price == pytest.approx(14.00)
    assert est.trip_minutes == 23  # 22.5 rounds half up
    assert est.eta_minutes == 2  # colocated vehicle hits the floor
    assert est.vehicle_id == 1 and est.vehicle_type == "Economy"


def test_approach_eta_from_vehicle_distance():
    # 400px * 0.05 = 20km at 40 km/h -> 30 min
    est = FareEstimator(0.05).estimate(at(0, 0), ECONOMY, Point(400, 0), Point(400, 0))
    assert est.eta_minutes == 30


def test_floors_hold_for_degenerate_points():
    est = FareEstimator(0.05).estimate(at(5, 5), ECONOMY, Point(5, 5), Point(5, 5))
    assert est.eta_minutes == 2
    assert est.trip_minutes == 3
    assert est.trip_distance_km == 0.0
    assert est.price == pytest.approx(ECONOMY.base_fare)


def test_floors_hold_for_many_short_distances():
    fast = VehicleType("Rocket", base_fare=0.0, per_km=0.0, speed_kmh=1000.0)
    fe = FareEstimator(0.05)
    for d in range(0, 200, 7):
        est = fe.estimate(at(0, 0, fast), fast, Point(d, 0), Point(d, d))
        assert est.eta_minutes >= 2
        assert est.trip_minutes >= 3
        assert est.price >= 0


def test_price_and_distance_have_two_decimals():
    est = FareEstimator(0.0333).estimate(at(0, 0), ECONOMY, Point(0, 0), Point(123, 45))
    assert round(est.price, 2) == est.price
    assert round(est.trip_distance_km, 2) == est.trip_distance_km


def test_round_half_up():
    assert round_half_up(22.5) == 23
    assert round_half_up(2.5) == 3
    assert round_half_up(14.004, 2) == 14.0
    assert round_half_up(14.005000001, 2) == 14.01
    # 1.005 is stored as 1.00499999..., but quotes follow its decimal form
    assert round_half_up(1.005, 2) == 1.01
    assert round_half_up(2.675, 2) == 2.68


def test_px_to_km_must_be_positive():
    with pytest.raises(ValueError):
        FareEstimator(0.0)


def test_compressed_trip_duration():
    d = CompressedTripDuration(min_ms=5000, ms_per_minute=200)
    short = Estimate(1, "Economy", eta_minutes=2, trip_minutes=3, trip_distance_km=0.0, price=2.0)
    long = Estimate(1, "Economy", eta_minutes=10, trip_minutes=37, trip_distance_km=9.0, price=9.2)
    assert d.duration_ms(short) == 5000
    assert d.duration_ms(long) == 47 * 200
