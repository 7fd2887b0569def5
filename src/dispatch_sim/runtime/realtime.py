# dispatch_sim/runtime/realtime.py
import logging
import queue
import threading
import time
from collections.abc import Callable
from concurrent.futures import Future

from dispatch_sim.app.engine import DispatchEngine
from dispatch_sim.domain.state import FleetSnapshot

log = logging.getLogger("dispatch_sim.realtime")

COMMANDS = frozenset(
    {
        "init_fleet",
        "tick",
        "request_ride",
        "confirm_booking",
        "cancel_estimate",
        "reset_scene",
        "hail",
    }
)


class RealtimeRunner:
    """
    Drives a DispatchEngine against the wall clock from one worker thread.

    The worker is the only thread that touches engine state: callers submit
    commands through a queue and get a Future back, while the worker keeps the
    kernel caught up with ``time_scale`` sim seconds per wall second. Readers
    call ``snapshot()`` from any thread.
    """

    _STOP = object()

    def __init__(
        self,
        engine: DispatchEngine,
        *,
        time_scale: float = 1.0,
        poll_s: float = 0.05,
        wall_clock: Callable[[], float] = time.monotonic,
    ):
        if time_scale <= 0:
            raise ValueError("time_scale must be > 0")
        self.engine = engine
        self.time_scale = time_scale
        self.poll_s = poll_s
        self._wall = wall_clock
        self._q: queue.Queue = queue.Queue()
        self._lock = threading.Lock()
        self._accepting = False
        self._thread: threading.Thread | None = None
        self._wall0 = 0.0
        self._sim0 = 0.0

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> None:
        if self.running:
            return
        self._wall0, self._sim0 = self._wall(), self.engine.now
        with self._lock:
            self._accepting = True
        self._thread = threading.Thread(target=self._run, name="dispatch-sim-engine", daemon=True)
        self._thread.start()

    def stop(self, timeout: float = 1.0) -> None:
        with self._lock:
            self._accepting = False
        if not self.running:
            return
        self._q.put(self._STOP)
        self._thread.join(timeout=timeout)

    def __enter__(self):
        self.start()
        return self

    def __exit__(self, *exc):
        self.stop()

    def snapshot(self) -> FleetSnapshot:
        return self.engine.snapshot()

    def submit(self, command: str, *args) -> Future:
        if command not in COMMANDS:
            raise ValueError(f"Unknown command {command!r}")
        fut: Future = Future()
        with self._lock:
            if not (self._accepting and self.running):
                raise RuntimeError(f"runner is not running; cannot submit {command!r}")
            self._q.put((fut, command, args))
        return fut

    # convenience shorthands
    def request_ride(self, vehicle_type: str, pickup, dropoff) -> Future:
        return self.submit("request_ride", vehicle_type, pickup, dropoff)

    def confirm_booking(self) -> Future:
        return self.submit("confirm_booking")

    def cancel_estimate(self) -> Future:
        return self.submit("cancel_estimate")

    def reset_scene(self, count: int | None = None) -> Future:
        return self.submit("reset_scene", count)

    def hail(self, vehicle_id: int) -> Future:
        return self.submit("hail", vehicle_id)

    # --------------------------------------------------------

    def _sim_now(self) -> float:
        return self._sim0 + (self._wall() - self._wall0) * self.time_scale

    def _wait_s(self) -> float:
        nxt = self.engine.kernel.peek_t()
        if nxt is None:
            return self.poll_s
        return min(self.poll_s, max(0.0, (nxt - self._sim_now()) / self.time_scale))

    def _catch_up(self) -> None:
        target = self._sim_now()
        if target > self.engine.now:
            try:
                self.engine.run_until(target)
            except Exception:
                # the failing event is already off the queue; later ones still run
                log.exception("catch-up to t=%.3f failed", target)

    def _run(self) -> None:
        try:
            self._loop()
        finally:
            self._drain()

    def _loop(self) -> None:
        while True:
            try:
                item = self._q.get(timeout=self._wait_s())
            except queue.Empty:
                item = None
            self._catch_up()
            if item is self._STOP:
                return
            if item is None:
                continue
            fut, command, args = item
            if not fut.set_running_or_notify_cancel():
                continue
            try:
                fut.set_result(getattr(self.engine, command)(*args))
            except Exception as exc:
                log.exception("command %s failed", command)
                fut.set_exception(exc)

    def _drain(self) -> None:
        """Fail whatever is still queued once the worker exits."""
        with self._lock:
            self._accepting = False
        while True:
            try:
                item = self._q.get_nowait()
            except queue.Empty:
                return
            if item is self._STOP:
                continue
            fut, command, _ = item
            if fut.set_running_or_notify_cancel():
                fut.set_exception(RuntimeError(f"runner stopped before {command!r} ran"))
