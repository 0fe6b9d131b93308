import numpy as np

from map_index.app.protocols import NearestFinder
from map_index.domain.entities.geography import Point
from map_index.domain.errors import EmptyGraph
from map_index.domain.index.index_geomath import distance_mi, distance_mi_many
from map_index.domain.index.index_graph import SpatialGraph


class ScanNearestFinder(NearestFinder):
    """Linear scan over the active vertices; ties keep the first one seen."""

    def __init__(self, graph: SpatialGraph):
        self.G = graph

    def closest(self, lon: float, lat: float) -> int:
        q = Point(lon, lat)
        best_id, best_d = None, float("inf")
        for vertex in self.G.iter_vertices():
            d = distance_mi(q, vertex.point)
            if d < best_d:
                best_id, best_d = vertex.id, d
        if best_id is None:
            raise EmptyGraph("graph has no active vertices")
        return best_id


class VectorizedNearestFinder(NearestFinder):
    """
    numpy snapshot of the active vertices taken at construction.
    Build it after the graph is pruned; later graph mutations are not seen.
    """

    def __init__(self, graph: SpatialGraph):
        vertices = list(graph.iter_vertices())
        self._ids = np.fromiter((v.id for v in vertices), dtype=np.int64, count=len(vertices))
        self._lons = np.fromiter((v.lon for v in vertices), dtype=float, count=len(vertices))
        self._lats = np.fromiter((v.lat for v in vertices), dtype=float, count=len(vertices))
        for arr in (self._ids, self._lons, self._lats):
            arr.setflags(write=False)

    def closest(self, lon: float, lat: float) -> int:
        if self._ids.size == 0:
            raise EmptyGraph("graph has no active vertices")
        d = distance_mi_many(Point(lon, lat), self._lons, self._lats)
        return int(self._ids[int(np.argmin(d))])
