import pytest

from dispatch_sim.domain.entities.geography import Bounds, Point, distance, to_point
from dispatch_sim.domain.entities.motion import MotionParams, Velocity, step_motion
from dispatch_sim.sim.rng import RNGRegistry


def test_distance_and_coercion():
    assert distance(Point(0, 0), Point(3, 4)) == 5.0
    assert to_point((1, 2)) == Point(1.0, 2.0)
    p = Point(1, 2)
    assert to_point(p) is p


def test_bounds_clamp_and_inset():
    b = Bounds.of_map(800, 600)
    assert b.clamp(Point(-5, 900)) == Point(0.0, 600.0)
    assert b.inset(20) == Bounds(20, 20, 780, 580)
    assert b.contains(Point(800, 0))
    with pytest.raises(ValueError):
        Bounds(10, 0, 0, 10)


def test_free_step_adds_velocity():
    params = MotionParams(bounds=Bounds(0, 0, 100, 100), jitter=0.0, bounce_noise=0.0)
    rng = RNGRegistry(0).stream("motion")
    pos, vel = step_motion(Point(50, 50), Velocity(1.0, -1.5), params, rng)
    assert pos == Point(51.0, 48.5)
    assert vel == Velocity(1.0, -1.5)


def test_bounce_clamps_position_and_flips_axis():
    params = MotionParams(bounds=Bounds(0, 0, 100, 100), jitter=0.0, bounce_noise=0.0)
    rng = RNGRegistry(0).stream("motion")
    pos, vel = step_motion(Point(99.5, 0.5), Velocity(2.0, -2.0), params, rng)
    assert pos == Point(100.0, 0.0)
    assert vel == Velocity(-2.0, 2.0)


def test_velocity_clamped_per_axis():
    params = MotionParams(bounds=Bounds(0, 0, 100, 100), max_speed=2.0, jitter=5.0)
    rng = RNGRegistry(3).stream("motion")
    vel = Velocity(0.0, 0.0)
    pos = Point(50, 50)
    for _ in range(500):
        pos, vel = step_motion(pos, vel, params, rng)
        assert abs(vel.vx) <= 2.0 and abs(vel.vy) <= 2.0
        assert params.bounds.contains(pos)
