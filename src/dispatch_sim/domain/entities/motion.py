from dataclasses import dataclass

import numpy as np

from dispatch_sim.domain.entities.geography import Bounds, Point
from dispatch_sim.sim.rng import symmetric


@dataclass(frozen=True)
class Velocity:
    vx: float  # pixels per tick
    vy: float


@dataclass(frozen=True)
class MotionParams:
    """Per-tick wander model: bounce off the inset map edge, jitter, clamp."""

    bounds: Bounds  # already inset by the boundary margin
    initial_speed: float = 1.5
    max_speed: float = 2.0
    jitter: float = 0.3
    bounce_noise: float = 0.5


def random_velocity(rng: np.random.Generator, params: MotionParams) -> Velocity:
    return Velocity(symmetric(rng, params.initial_speed), symmetric(rng, params.initial_speed))


def random_position(rng: np.random.Generator, bounds: Bounds) -> Point:
    return Point(float(rng.uniform(bounds.x0, bounds.x1)), float(rng.uniform(bounds.y0, bounds.y1)))


def _bounce(x: float, v: float, lo: float, hi: float, noise: float, rng) -> tuple[float, float]:
    if x < lo:
        return lo, -v + symmetric(rng, noise)
    if x > hi:
        return hi, -v + symmetric(rng, noise)
    return x, v


def _clip(v: float, limit: float) -> float:
    return float(np.clip(v, -limit, limit))


def step_motion(
    pos: Point, vel: Velocity, params: MotionParams, rng: np.random.Generator
) -> tuple[Point, Velocity]:
    b = params.bounds
    x, vx = _bounce(pos.x + vel.vx, vel.vx, b.x0, b.x1, params.bounce_noise, rng)
    y, vy = _bounce(pos.y + vel.vy, vel.vy, b.y0, b.y1, params.bounce_noise, rng)
    vx = _clip(vx + symmetric(rng, params.jitter), params.max_speed)
    vy = _clip(vy + symmetric(rng, params.jitter), params.max_speed)
    return Point(x, y), Velocity(vx, vy)
