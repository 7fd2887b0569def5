# dispatch_sim/policy/trip_duration.py
from dispatch_sim.app.protocols import TripDurationPolicy
from dispatch_sim.domain.entities.booking import Estimate


class CompressedTripDuration(TripDurationPolicy):
    """Quoted minutes map to sim milliseconds at ``ms_per_minute``, never below ``min_ms``."""

    def __init__(self, min_ms: int = 5000, ms_per_minute: int = 200):
        self.min_ms = min_ms
        self.ms_per_minute = ms_per_minute

    def duration_ms(self, estimate: Estimate) -> int:
        quoted = estimate.eta_minutes + estimate.trip_minutes
        return max(self.min_ms, quoted * self.ms_per_minute)
