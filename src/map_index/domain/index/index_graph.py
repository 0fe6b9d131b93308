# map_index/domain/index/index_graph.py
from collections.abc import Iterable, Iterator

from map_index.domain.entities.geography import Point, Vertex
from map_index.domain.index.index_geomath import bearing_deg, distance_mi


class SpatialGraph:
    """
    Undirected adjacency graph of map locations.

    Active vertices live in `_vertices` (insertion ordered); isolated vertices are
    moved to `_removed` by `prune()` and stay resolvable through `lookup()` only.
    Adjacency is kept symmetric by every mutator.
    """

    def __init__(self):
        self._vertices: dict[int, Vertex] = {}
        self._removed: dict[int, Vertex] = {}
        self.vertex_count = 0
        self.edge_count = 0  # distinct undirected pairs
        self.edge_calls = 0  # raw add_edge invocations, duplicates included

    def __len__(self) -> int:
        return self.vertex_count

    def __contains__(self, v: int) -> bool:
        return v in self._vertices

    # ------------- build phase ------------------------------

    def add_vertex(self, v: int, lon: float, lat: float) -> Vertex:
        vertex = Vertex(id=int(v), lon=float(lon), lat=float(lat))
        if vertex.id in self._vertices or vertex.id in self._removed:
            raise ValueError(f"duplicate vertex id {vertex.id}")
        self._vertices[vertex.id] = vertex
        self.vertex_count += 1
        return vertex

    def set_tag(self, v: int, key: str, value: str) -> None:
        self._vertices[v].tags[key] = value

    def add_edge(self, v: int, w: int) -> None:
        a, b = self._vertices[v], self._vertices[w]
        self.edge_calls += 1
        if w in a.adj:
            return
        a.adj.add(w)
        b.adj.add(v)
        self.edge_count += 1

    def remove_vertex(self, v: int) -> Vertex:
        vertex = self._vertices.pop(v)
        for w in vertex.adj:
            if w != v:
                self._vertices[w].adj.discard(v)
            self.edge_count -= 1
        vertex.adj.clear()
        self.vertex_count -= 1
        return vertex

    def prune(self) -> list[int]:
        """Move every vertex without neighbours into the removed holding set."""
        isolated = [v for v, vertex in self._vertices.items() if not vertex.adj]
        for v in isolated:
            self._removed[v] = self.remove_vertex(v)
        return isolated

    # ------------- query phase ------------------------------

    def vertices(self) -> Iterable[int]:
        return self._vertices.keys()

    def all_vertex_ids(self) -> list[int]:
        return list(self._vertices)

    def removed_ids(self) -> list[int]:
        return list(self._removed)

    def iter_vertices(self) -> Iterator[Vertex]:
        return iter(self._vertices.values())

    def vertex(self, v: int) -> Vertex:
        return self._vertices[v]

    def lookup(self, v: int) -> Vertex | None:
        return self._vertices.get(v) or self._removed.get(v)

    def neighbors(self, v: int) -> Iterable[int]:
        return self._vertices[v].adj

    def coordinates_of(self, v: int) -> Point:
        return self._vertices[v].point

    def lon(self, v: int) -> float:
        return self._vertices[v].lon

    def lat(self, v: int) -> float:
        return self._vertices[v].lat

    def distance(self, v: int, w: int) -> float:
        return distance_mi(self.coordinates_of(v), self.coordinates_of(w))

    def bearing(self, v: int, w: int) -> float:
        return bearing_deg(self.coordinates_of(v), self.coordinates_of(w))
