from dispatch_sim.app.protocols import MatchingPolicy, PricingPolicy, TripDurationPolicy
from dispatch_sim.config.models import (
    BookingModel,
    MatchingPolicyScanModel,
    MatchingPolicyUnion,
    MatchingPolicyVectorizedModel,
    PricingModel,
    VehicleTypeModel,
)
from dispatch_sim.domain.entities.vehicle import VehicleType, VehicleTypeRegistry
from dispatch_sim.policy.matching import NearestScanMatchingPolicy, VectorizedNearestMatchingPolicy
from dispatch_sim.policy.pricing import FareEstimator
from dispatch_sim.policy.trip_duration import CompressedTripDuration


def make_matching_policy(cfg: MatchingPolicyUnion) -> MatchingPolicy:
    if isinstance(cfg, MatchingPolicyScanModel):
        return NearestScanMatchingPolicy()
    elif isinstance(cfg, MatchingPolicyVectorizedModel):
        return VectorizedNearestMatchingPolicy()
    else:
        raise TypeError(cfg)


def make_pricing_policy(cfg: PricingModel) -> PricingPolicy:
    return FareEstimator(px_to_km=cfg.px_to_km)


def make_trip_duration(cfg: BookingModel) -> TripDurationPolicy:
    return CompressedTripDuration(min_ms=cfg.min_duration_ms, ms_per_minute=cfg.ms_per_minute)


def make_vehicle_types(cfgs: list[VehicleTypeModel]) -> VehicleTypeRegistry:
    return VehicleTypeRegistry(
        VehicleType(
            name=c.name,
            base_fare=c.base_fare,
            per_km=c.per_km,
            speed_kmh=c.speed_kmh,
            color=c.color,
        )
        for c in cfgs
    )
