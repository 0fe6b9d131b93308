# io/recorder.py
import json
import logging
import sys
from dataclasses import asdict
from typing import Protocol, TextIO

from map_index.io.query_events import QueryEvent

log = logging.getLogger("map_index.recorder")


class Sink(Protocol):
    def write(self, ev: QueryEvent) -> None: ...


class JsonlSink:
    """One JSON object per audit record."""

    def __init__(self, fp: TextIO = sys.stdout, *, flush: bool = False):
        self.fp, self.flush = fp, flush

    def write(self, ev: QueryEvent) -> None:
        self.fp.write(json.dumps(asdict(ev)) + "\n")
        if self.flush:
            self.fp.flush()


class MemorySink:
    def __init__(self):
        self.events: list[QueryEvent] = []

    def write(self, ev: QueryEvent) -> None:
        self.events.append(ev)

    def named(self, name: str) -> list[QueryEvent]:
        return [ev for ev in self.events if ev.name == name]


class Recorder:
    """Fans query audit records out to sinks; a failing sink is logged and skipped."""

    def __init__(self, *sinks: Sink):
        self.sinks = sinks or (JsonlSink(),)
        self.emitted = 0

    def emit(self, ev: QueryEvent) -> None:
        self.emitted += 1
        for s in self.sinks:
            try:
                s.write(ev)
            except (OSError, TypeError, ValueError):
                log.exception("sink %r failed on %s seq=%d", s, ev.name, ev.seq)
