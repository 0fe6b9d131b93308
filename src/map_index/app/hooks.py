# app/hooks.py
from typing import Protocol


class QueryHooks(Protocol):
    def tiles_served(self, *, box, depth, rows, cols): ...
    def tiles_rejected(self, *, box, reason: str): ...
    def locations_searched(self, *, query: str, hits: int): ...
    def prefix_searched(self, *, prefix: str, hits: int): ...
    def nearest_served(self, *, lon, lat, vertex_id): ...
    def nearest_failed(self, *, lon, lat, reason: str): ...
    def graph_pruned(self, *, active: int, removed: int, edges: int): ...


class NoopHooks:
    def tiles_served(self, **_):
        pass

    def tiles_rejected(self, **_):
        pass

    def locations_searched(self, **_):
        pass

    def prefix_searched(self, **_):
        pass

    def nearest_served(self, **_):
        pass

    def nearest_failed(self, **_):
        pass

    def graph_pruned(self, **_):
        pass
