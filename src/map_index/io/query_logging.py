# io/query_logging.py
import itertools
import json
import logging
import sys

from map_index.app.hooks import NoopHooks
from map_index.domain.entities.geography import BoundingBox
from map_index.io.query_events import (
    LocationSearchEvent,
    NearestServedEvent,
    TilesRejectedEvent,
    TilesServedEvent,
)
from map_index.io.recorder import Recorder


class _JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "level": record.levelname,
            "msg": record.getMessage(),
            "logger": record.name,
        }
        extra = getattr(record, "extra", None)
        if isinstance(extra, dict):
            payload.update(extra)
        return json.dumps(payload, default=str)


def _default_json_logger(name="map_index", level="INFO"):
    logger = logging.getLogger(name)
    if not logger.handlers:
        h = logging.StreamHandler(sys.stdout)
        h.setFormatter(_JsonFormatter())
        logger.addHandler(h)
        logger.setLevel(level)
    return logger


def _box(box: BoundingBox) -> tuple[float, float, float, float]:
    return (box.ullon, box.ullat, box.lrlon, box.lrlat)


class QueryLogging(NoopHooks):
    """
    One place to shape and emit structured logs for tile and location queries.
    Per-query records go out at DEBUG unless `debug` is set.
    """

    def __init__(
        self,
        run_id: str = "local",
        level: str = "INFO",
        debug: bool = False,
        logger: logging.Logger | None = None,
        recorder: Recorder | None = None,
    ):
        self.run_id, self.debug = run_id, debug
        self.recorder = recorder
        self.log = logger or _default_json_logger(level=level)
        self._seq = itertools.count(1)

    # --------------- Helpers -----------------------------

    def _emit(self, level: str, msg: str, **extra):
        payload = {"run_id": self.run_id}
        self.log.log(getattr(logging, level), msg, extra={"extra": {**payload, **extra}})

    @property
    def _query_level(self) -> str:
        return "INFO" if self.debug else "DEBUG"

    def _record(self, cls, name: str, **fields):
        if self.recorder:
            self.recorder.emit(cls(run_id=self.run_id, seq=next(self._seq), name=name, **fields))

    # --------------------------------------------------------

    def tiles_served(self, *, box, depth, rows, cols):
        fields = {"box": _box(box), "depth": depth, "rows": rows, "cols": cols}
        self._emit(self._query_level, "tiles_served", **fields)
        self._record(TilesServedEvent, "TilesServed", **fields)

    def tiles_rejected(self, *, box, reason: str):
        self._emit("WARNING", "tiles_rejected", box=_box(box), reason=reason)
        self._record(TilesRejectedEvent, "TilesRejected", box=_box(box), reason=reason)

    def locations_searched(self, *, query: str, hits: int):
        self._emit(self._query_level, "locations_searched", query=query, hits=hits)
        self._record(LocationSearchEvent, "LocationSearch", query=query, hits=hits)

    def prefix_searched(self, *, prefix: str, hits: int):
        self._emit(self._query_level, "prefix_searched", prefix=prefix, hits=hits)
        self._record(LocationSearchEvent, "PrefixSearch", query=prefix, hits=hits, prefix=True)

    def nearest_served(self, *, lon, lat, vertex_id):
        self._emit(self._query_level, "nearest_served", lon=lon, lat=lat, vertex_id=vertex_id)
        self._record(NearestServedEvent, "NearestServed", lon=lon, lat=lat, vertex_id=vertex_id)

    def nearest_failed(self, *, lon, lat, reason: str):
        self._emit("WARNING", "nearest_failed", lon=lon, lat=lat, reason=reason)
        self._record(NearestServedEvent, "NearestFailed", lon=lon, lat=lat, vertex_id=None)

    def graph_pruned(self, *, active: int, removed: int, edges: int):
        self._emit("INFO", "graph_pruned", active=active, removed=removed, edges=edges)
