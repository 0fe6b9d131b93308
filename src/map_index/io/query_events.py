# map_index/io/query_events.py

from dataclasses import dataclass


# Audit records for served queries (not part of any response)
@dataclass
class QueryEvent:
    run_id: str
    seq: int  # per-logger sequence, total ordering within one process
    name: str  # stable event name


@dataclass
class TilesServedEvent(QueryEvent):
    box: tuple[float, float, float, float]  # ullon, ullat, lrlon, lrlat
    depth: int
    rows: int
    cols: int


@dataclass
class TilesRejectedEvent(QueryEvent):
    box: tuple[float, float, float, float]
    reason: str


@dataclass
class LocationSearchEvent(QueryEvent):
    query: str
    hits: int
    prefix: bool = False


@dataclass
class NearestServedEvent(QueryEvent):
    lon: float
    lat: float
    vertex_id: int | None
