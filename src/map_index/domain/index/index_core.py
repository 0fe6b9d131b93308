# map_index/domain/index/index_core.py
from dataclasses import dataclass

from map_index.app.hooks import NoopHooks, QueryHooks
from map_index.app.protocols import NameIndex, NearestFinder
from map_index.domain.errors import EmptyGraph
from map_index.domain.index.index_graph import SpatialGraph
from map_index.domain.index.index_trie import clean_name


@dataclass(frozen=True)
class LocationRecord:
    lat: float
    lon: float
    name: str | None
    id: int

    def as_params(self) -> dict:
        return {"lat": self.lat, "lon": self.lon, "name": self.name, "id": self.id}


class LocationIndex:
    """
    Public location-search surface over a pruned graph.
    Read-only after construction; every method is safe to call concurrently.
    """

    def __init__(
        self,
        graph: SpatialGraph,
        names: NameIndex,
        nearest: NearestFinder,
        hooks: QueryHooks | None = None,
    ):
        self.graph, self.names, self.nearest = graph, names, nearest
        self.hooks = hooks or NoopHooks()

    def search(self, name: str) -> list[LocationRecord]:
        """All locations whose cleaned name equals the cleaned `name`."""
        node = self.names.find_exact(clean_name(name))
        out: list[LocationRecord] = []
        if node is not None and node.exists:
            for vid in node.ids:
                vertex = self.graph.lookup(vid)
                if vertex is None:
                    continue
                out.append(LocationRecord(vertex.lat, vertex.lon, vertex.name, vid))
        self.hooks.locations_searched(query=name, hits=len(out))
        return out

    def search_by_prefix(self, prefix: str) -> list[str]:
        names = self.names.find_by_prefix(prefix)
        self.hooks.prefix_searched(prefix=prefix, hits=len(names))
        return names

    def closest(self, lon: float, lat: float) -> int | None:
        try:
            vid = self.nearest.closest(lon, lat)
        except EmptyGraph as e:
            self.hooks.nearest_failed(lon=lon, lat=lat, reason=str(e))
            return None
        self.hooks.nearest_served(lon=lon, lat=lat, vertex_id=vid)
        return vid

    def distance(self, v: int, w: int) -> float:
        return self.graph.distance(v, w)

    def bearing(self, v: int, w: int) -> float:
        return self.graph.bearing(v, w)
