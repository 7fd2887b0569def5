import json
import logging

from dispatch_sim.app.events import VehicleRelease
from dispatch_sim.io.business_events import SceneResetBiz
from dispatch_sim.io.kernel_logging import JsonFormatter, KernelLogging
from dispatch_sim.io.recorder import MemorySink, Recorder
from dispatch_sim.sim.clock import SimClock


class ListHandler(logging.Handler):
    def __init__(self):
        super().__init__()
        self.setFormatter(JsonFormatter())
        self.lines: list[dict] = []

    def emit(self, record):
        self.lines.append(json.loads(self.format(record)))


def make_logger(name):
    logger = logging.getLogger(name)
    logger.handlers.clear()
    h = ListHandler()
    logger.addHandler(h)
    logger.setLevel("DEBUG")
    logger.propagate = False
    return logger, h


def test_biz_events_logged_and_recorded():
    logger, h = make_logger("dispatch_sim.test.biz")
    sink = MemorySink()
    hooks = KernelLogging(
        run_id="r1",
        clock=SimClock.utc_epoch(2025, 1, 1),
        logger=logger,
        recorder=Recorder(sink),
    )
    ev = SceneResetBiz(
        run_id="r1", t=2.0, generation=3, name="SceneReset", fleet_size=5, dropped_bookings=1
    )
    hooks.biz(ev)
    assert sink.events == [ev]
    (line,) = h.lines
    assert line["msg"] == "SceneReset"
    assert line["run_id"] == "r1"
    assert line["fleet_size"] == 5
    assert line["wall"].startswith("2025-01-01T00:00:02")


def test_release_dispatch_logged_at_info_and_errors_at_error():
    logger, h = make_logger("dispatch_sim.test.kernel")
    hooks = KernelLogging(logger=logger)
    ev = VehicleRelease(t=4.0, vehicle_id=7, booking_id=1, generation=1)
    hooks.dispatch_start(ev, seq=1, qsize=0, handlers=1)
    hooks.error(ev, reason="time_backwards", prev_t=5.0, t=4.0)
    assert [ln["level"] for ln in h.lines] == ["INFO", "ERROR"]
    assert h.lines[0]["data"]["vehicle_id"] == 7
    assert h.lines[1]["reason"] == "time_backwards"


def test_failing_sink_does_not_break_recorder():
    class Broken:
        def write(self, ev):
            raise OSError("disk full")

    good = MemorySink()
    Recorder(Broken(), good).emit("x")
    assert good.events == ["x"]


def test_async_sink_drains_on_recorder_close():
    from dispatch_sim.io.recorder import AsyncSink

    inner = MemorySink()
    sink = AsyncSink(inner, maxsize=100)
    rec = Recorder(sink)
    for i in range(10):
        rec.emit(i)
    rec.close()
    assert inner.events == list(range(10))
    assert sink.dropped == 0
