# dispatch_sim/io/recorder.py
import json
import logging
import queue
import sys
import threading
from dataclasses import asdict
from typing import Protocol

log = logging.getLogger("dispatch_sim.recorder")


class Sink(Protocol):
    def write(self, ev) -> None: ...


class JsonlSink:
    def __init__(self, fp=sys.stdout):
        self.fp = fp

    def write(self, ev) -> None:
        self.fp.write(json.dumps(asdict(ev)) + "\n")


class MemorySink:
    def __init__(self):
        self.events: list = []

    def write(self, ev) -> None:
        self.events.append(ev)

    def named(self, name: str) -> list:
        return [e for e in self.events if e.name == name]


# Async sink (non-blocking, drops on overflow)
class AsyncSink:
    _STOP = object()

    def __init__(self, sink: Sink, maxsize: int = 10000):
        self.sink, self.q = sink, queue.Queue(maxsize=maxsize)
        self.dropped = 0
        self._t = threading.Thread(target=self._run, name="dispatch-sim-sink", daemon=True)
        self._t.start()

    def write(self, ev) -> None:
        try:
            self.q.put_nowait(ev)
        except queue.Full:
            self.dropped += 1  # never block the sim

    def _run(self):
        while True:
            ev = self.q.get()
            if ev is self._STOP:
                return
            try:
                self.sink.write(ev)
            except Exception:
                log.exception("sink write failed for %s", getattr(ev, "name", ev))

    def stop(self):
        self.q.put(self._STOP)
        self._t.join(timeout=1.0)


class Recorder:
    def __init__(self, *sinks: Sink):
        self.sinks = sinks

    def emit(self, ev):
        for s in self.sinks:
            try:
                s.write(ev)
            except Exception:
                # never break the sim
                log.exception("sink %s failed on %s", type(s).__name__, getattr(ev, "name", ev))

    def close(self) -> None:
        """Flush and stop any background sinks."""
        for s in self.sinks:
            stop = getattr(s, "stop", None)
            if stop is not None:
                stop()
