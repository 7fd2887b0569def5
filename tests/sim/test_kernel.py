# tests/sim/test_kernel.py
from dataclasses import dataclass

import pytest

from dispatch_sim.sim.event import BaseEvent
from dispatch_sim.sim.hooks import NoopHooks
from dispatch_sim.sim.kernel import Kernel


# ---- demo domain events ----
@dataclass(order=True)
class Ping(BaseEvent):
    n: int = 0


@dataclass(order=True)
class Pong(BaseEvent):
    n: int = 0


def handle_ping(ev: Ping):
    out: list[BaseEvent] = [Pong(t=ev.t + 0.5, n=ev.n)]
    if ev.n > 0:
        out.append(Ping(t=ev.t + 1.0, n=ev.n - 1))
    return out


class TraceHooks(NoopHooks):
    def __init__(self):
        self.trace = []

    def dispatch_start(self, ev, *, seq, qsize, handlers):
        self.trace.append((ev.t, type(ev).__name__))


def test_order_and_fan_out():
    hooks = TraceHooks()
    k = Kernel(hooks=hooks)
    k.on(Ping, handle_ping)
    k.on(Pong, lambda ev: None)

    k.schedule(Ping(t=0.0, n=2))
    assert k.run(until=3.0) == 6
    assert hooks.trace == [
        (0.0, "Ping"),
        (0.5, "Pong"),
        (1.0, "Ping"),
        (1.5, "Pong"),
        (2.0, "Ping"),
        (2.5, "Pong"),
    ]


def test_fifo_tie_break():
    k = Kernel()
    seen: list[str] = []
    k.on(Ping, lambda ev: seen.append(f"A{ev.n}"))
    k.on(Ping, lambda ev: seen.append(f"B{ev.n}"))
    k.schedule(Ping(t=5.0, n=1))
    k.schedule(Ping(t=5.0, n=2))
    k.run()
    assert seen == ["A1", "B1", "A2", "B2"]


def test_run_until_moves_clock_even_when_idle():
    k = Kernel()
    k.schedule(Ping(t=10.0))
    k.run(until=4.0)
    assert k.now == 4.0
    assert k.pending == 1
    assert k.peek_t() == 10.0


def test_max_events_gate():
    k = Kernel()
    k.on(Ping, handle_ping)
    k.schedule(Ping(t=0.0, n=10))
    assert k.run(max_events=1) == 1
    assert k.now == 0.0


def test_scheduling_in_the_past_raises():
    k = Kernel()
    k.on(Ping, lambda ev: [Ping(t=ev.t - 1.0, n=0)])
    k.schedule(Ping(t=1.0, n=0))
    with pytest.raises(RuntimeError):
        k.run()

    k2 = Kernel()
    k2.run(until=5.0)
    with pytest.raises(RuntimeError):
        k2.schedule(Ping(t=1.0))
