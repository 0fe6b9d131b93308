# map_index/domain/index/index_builder.py
from map_index.app.hooks import NoopHooks, QueryHooks
from map_index.config.models import NearestScanModel, NearestUnion
from map_index.domain.errors import IngestOrderError
from map_index.domain.index.index_core import LocationIndex
from map_index.domain.index.index_graph import SpatialGraph
from map_index.domain.index.index_trie import PrefixIndex
from map_index.runtime.registries import make_nearest

NAME_TAG = "name"


class GraphBuilder:
    """
    Entry point for the ingestion side.

    Call order: every add_vertex, then add_edge, then finish() exactly once.
    Tags may be set any time before finish(). A "name" tag makes the vertex searchable.
    """

    _VERTICES, _EDGES, _DONE = range(3)

    def __init__(self, hooks: QueryHooks | None = None):
        self.graph = SpatialGraph()
        self.names = PrefixIndex()
        self.hooks = hooks or NoopHooks()
        self._phase = self._VERTICES

    def _require(self, allowed: int, what: str) -> None:
        if self._phase > allowed:
            stage = "finish" if self._phase == self._DONE else "edges"
            raise IngestOrderError(f"{what} after {stage}")

    def add_vertex(self, v: int, lon: float, lat: float) -> None:
        self._require(self._VERTICES, "add_vertex")
        self.graph.add_vertex(v, lon, lat)

    def set_tag(self, v: int, key: str, value: str) -> None:
        self._require(self._EDGES, "set_tag")
        self.graph.set_tag(v, key, value)
        if key == NAME_TAG:
            self.names.insert(value, v)

    def add_edge(self, v: int, w: int) -> None:
        self._require(self._EDGES, "add_edge")
        self._phase = self._EDGES
        self.graph.add_edge(v, w)

    def add_way(self, refs: list[int]) -> None:
        """Connect consecutive vertices of a way."""
        for v, w in zip(refs, refs[1:]):
            self.add_edge(v, w)

    def finish(self, nearest: NearestUnion | None = None) -> LocationIndex:
        self._require(self._EDGES, "finish")
        self._phase = self._DONE
        removed = self.graph.prune()
        self.hooks.graph_pruned(
            active=self.graph.vertex_count, removed=len(removed), edges=self.graph.edge_count
        )
        finder = make_nearest(nearest or NearestScanModel(), graph=self.graph)
        return LocationIndex(self.graph, self.names, finder, hooks=self.hooks)
