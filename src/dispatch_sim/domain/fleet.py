# domain/fleet.py
from collections.abc import Iterator
from itertools import count

import numpy as np

from dispatch_sim.domain.entities.motion import (
    MotionParams,
    random_position,
    random_velocity,
    step_motion,
)
from dispatch_sim.domain.entities.vehicle import Vehicle, VehicleTypeRegistry


class Fleet:
    """
    Owns every simulated vehicle.

    The vehicle collection is an immutable tuple; every mutation builds a new
    tuple and swaps the reference, so a reader holding ``vehicles`` never sees
    a half-applied tick. Vehicle ids come from a process-wide counter and are
    never reused, even across resets.
    """

    def __init__(
        self,
        types: VehicleTypeRegistry,
        motion: MotionParams,
        *,
        placement_rng: np.random.Generator,
        motion_rng: np.random.Generator,
        park_in_trip: bool = False,
    ):
        self.types = types
        self.motion = motion
        self.placement_rng = placement_rng
        self.motion_rng = motion_rng
        self.park_in_trip = park_in_trip
        self.generation = 0
        self._ids = count(1)
        self._vehicles: tuple[Vehicle, ...] = ()

    @property
    def vehicles(self) -> tuple[Vehicle, ...]:
        return self._vehicles

    def __iter__(self) -> Iterator[Vehicle]:
        return iter(self._vehicles)

    def __len__(self) -> int:
        return len(self._vehicles)

    def _spawn(self, vt, vid: int | None = None) -> Vehicle:
        return Vehicle(
            id=next(self._ids) if vid is None else vid,
            type=vt,
            pos=random_position(self.placement_rng, self.motion.bounds),
            vel=random_velocity(self.placement_rng, self.motion),
            available=True,
        )

    def initialize(self, n: int) -> tuple[Vehicle, ...]:
        """Replace the whole fleet with n fresh vehicles, types assigned round-robin."""
        if n < 0:
            raise ValueError(f"fleet size must be >= 0, got {n}")
        types = list(self.types)
        self.generation += 1
        self._vehicles = tuple(self._spawn(types[i % len(types)]) for i in range(n))
        return self._vehicles

    def load(self, vehicles) -> tuple[Vehicle, ...]:
        """Install a hand-built fleet in the current generation (scenarios, tests)."""
        vs = tuple(vehicles)
        ids = [v.id for v in vs]
        if len(set(ids)) != len(ids):
            raise ValueError("vehicle ids must be unique")
        if vs:
            self._ids = count(max(max(ids) + 1, next(self._ids)))
        self._vehicles = vs
        return self._vehicles

    def get(self, vehicle_id: int) -> Vehicle | None:
        for v in self._vehicles:
            if v.id == vehicle_id:
                return v
        return None

    def available(self, type_name: str | None = None) -> list[Vehicle]:
        return [
            v
            for v in self._vehicles
            if v.available and (type_name is None or v.type.name == type_name)
        ]

    def tick(self) -> tuple[Vehicle, ...]:
        nxt = []
        for v in self._vehicles:
            if self.park_in_trip and not v.available:
                nxt.append(v)
                continue
            pos, vel = step_motion(v.pos, v.vel, self.motion, self.motion_rng)
            nxt.append(v.moved(pos, vel))
        self._vehicles = tuple(nxt)
        return self._vehicles

    def _replace_one(self, vehicle_id: int, fn) -> Vehicle | None:
        out, hit = [], None
        for v in self._vehicles:
            if v.id == vehicle_id:
                v = hit = fn(v)
            out.append(v)
        if hit is not None:
            self._vehicles = tuple(out)
        return hit

    def set_available(self, vehicle_id: int, available: bool) -> Vehicle | None:
        return self._replace_one(vehicle_id, lambda v: v.with_available(available))

    def release(self, vehicle_id: int) -> Vehicle | None:
        """Drop a vehicle back into the pool at a fresh random spot. None if the id is gone."""
        return self._replace_one(vehicle_id, lambda v: self._spawn(v.type, vid=v.id))
