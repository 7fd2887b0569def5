# dispatch_sim/app/controllers/fleet.py
import logging

from dispatch_sim.app.events import MotionTick
from dispatch_sim.domain.state import WorldState

log = logging.getLogger("dispatch_sim.fleet")


class FleetHandler:
    def __init__(self, world: WorldState, tick_interval_s: float = 1.0):
        if tick_interval_s <= 0:
            raise ValueError("tick_interval_s must be > 0")
        self.world = world
        self.tick_interval_s = tick_interval_s

    def first_tick(self, now: float) -> MotionTick:
        return MotionTick(t=now + self.tick_interval_s, generation=self.world.generation)

    def on_motion_tick(self, ev: MotionTick):
        if ev.generation != self.world.generation:
            # tick chain of a fleet that has since been reset; let it die
            return []
        self.world.fleet.tick()
        return [MotionTick(t=ev.t + self.tick_interval_s, generation=ev.generation)]
