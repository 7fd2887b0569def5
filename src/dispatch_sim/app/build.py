# dispatch_sim/app/build.py
import sys
from collections.abc import Mapping

from dispatch_sim.app.controllers.fleet import FleetHandler
from dispatch_sim.app.controllers.trips import TripHandler
from dispatch_sim.app.engine import DispatchEngine
from dispatch_sim.app.wiring import wire
from dispatch_sim.config.models import ScenarioModel
from dispatch_sim.domain.entities.geography import Bounds
from dispatch_sim.domain.entities.motion import MotionParams
from dispatch_sim.domain.fleet import Fleet
from dispatch_sim.domain.state import WorldState
from dispatch_sim.io.kernel_logging import KernelLogging  # JSON logs
from dispatch_sim.io.recorder import AsyncSink, JsonlSink, Recorder, Sink
from dispatch_sim.runtime.policy_factory import (
    make_matching_policy,
    make_pricing_policy,
    make_trip_duration,
    make_vehicle_types,
)
from dispatch_sim.sim.clock import SimClock
from dispatch_sim.sim.hooks import NoopHooks
from dispatch_sim.sim.kernel import Kernel
from dispatch_sim.sim.rng import RNGRegistry


def build(
    cfg: ScenarioModel | Mapping | None = None,
    *,
    worker: int = 0,
    use_logging: bool = True,
    sinks: list[Sink] | None = None,
    init: bool = True,
) -> DispatchEngine:
    # 0) Validate config
    if cfg is None:
        model = ScenarioModel()
    else:
        model = cfg if isinstance(cfg, ScenarioModel) else ScenarioModel.model_validate(cfg)

    # 1) Clock & RNG
    clock = SimClock.utc_epoch(*model.sim.epoch)
    rng_registry = RNGRegistry(model.sim.seed, scenario=model.name, worker=worker)

    # 2) Kernel (with hooks)
    if sinks is None:
        sinks = [JsonlSink(sys.stderr)] if model.log.events == "stderr" else []
    if model.log.async_sink:
        sinks = [AsyncSink(s) for s in sinks]
    recorder = Recorder(*sinks)
    hooks = (
        KernelLogging(
            run_id=model.run_id,
            recorder=recorder,
            clock=clock,
            level=model.log.level,
            debug=model.log.debug,
            sample_every=model.log.sample_every,
        )
        if use_logging
        else NoopHooks()
    )
    kernel = Kernel(hooks=hooks)

    # 3) World
    map_bounds = Bounds.of_map(model.map.width, model.map.height)
    motion = MotionParams(
        bounds=map_bounds.inset(model.map.margin),
        initial_speed=model.fleet.initial_speed,
        max_speed=model.fleet.max_speed,
        jitter=model.fleet.jitter,
        bounce_noise=model.fleet.bounce_noise,
    )
    types = make_vehicle_types(model.vehicle_types)
    fleet = Fleet(
        types,
        motion,
        placement_rng=rng_registry.stream("placement"),
        motion_rng=rng_registry.stream("motion"),
        park_in_trip=model.fleet.park_in_trip,
    )
    world = WorldState(fleet=fleet)

    # 4) Handlers (inject deps explicitly)
    fleet_handler = FleetHandler(world=world, tick_interval_s=model.fleet.tick_interval_s)
    trips = TripHandler(
        world=world,
        types=types,
        matching=make_matching_policy(model.matching),
        pricing=make_pricing_policy(model.pricing),
        duration=make_trip_duration(model.booking),
        clock=clock,
        map_bounds=map_bounds,
        run_id=model.run_id,
        hooks=hooks,
    )

    # 5) Wiring
    wire(kernel, fleet=fleet_handler, trips=trips)

    engine = DispatchEngine(
        kernel,
        clock,
        world,
        fleet_handler,
        trips,
        fleet_size=model.fleet.size,
        run_id=model.run_id,
        recorder=recorder,
    )
    # 6) Seed the fleet and its tick chain
    if init:
        engine.init_fleet()
    return engine
