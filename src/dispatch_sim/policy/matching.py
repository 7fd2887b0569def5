# dispatch_sim/policy/matching.py
from collections.abc import Sequence

import numpy as np

from dispatch_sim.app.protocols import MatchingPolicy
from dispatch_sim.domain.entities.geography import Point, distance
from dispatch_sim.domain.entities.vehicle import Vehicle


class NearestScanMatchingPolicy(MatchingPolicy):
    """Linear scan; strict ``<`` keeps the first vehicle on ties."""

    def find_nearest(
        self, vehicles: Sequence[Vehicle], type_name: str, origin: Point
    ) -> Vehicle | None:
        best, best_d = None, float("inf")
        for v in vehicles:
            if not v.available or v.type.name != type_name:
                continue
            d = distance(v.pos, origin)
            if d < best_d:
                best, best_d = v, d
        return best


class VectorizedNearestMatchingPolicy(MatchingPolicy):
    """numpy variant for large fleets; argmin returns the first minimum, same tie rule."""

    def find_nearest(
        self, vehicles: Sequence[Vehicle], type_name: str, origin: Point
    ) -> Vehicle | None:
        cands = [v for v in vehicles if v.available and v.type.name == type_name]
        if not cands:
            return None
        xy = np.array([(v.pos.x, v.pos.y) for v in cands], dtype=float)
        d = np.hypot(xy[:, 0] - origin.x, xy[:, 1] - origin.y)
        return cands[int(np.argmin(d))]
