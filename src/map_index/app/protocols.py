from typing import Protocol, runtime_checkable

from map_index.domain.entities.geography import BoundingBox


# ------------- Location index --------------------
@runtime_checkable
class NearestFinder(Protocol):
    """
    Responsibilities:
      • Return the id of the active vertex nearest to (lon, lat) by great-circle distance.
      • Raise EmptyGraph when there is nothing to compare against.
    Must not mutate the graph; queries may run concurrently.
    """

    def closest(self, lon: float, lat: float) -> int: ...


@runtime_checkable
class NameIndex(Protocol):
    def insert(self, name: str, vertex_id: int) -> None: ...
    def find_exact(self, cleaned: str): ...
    def find_by_prefix(self, prefix: str) -> list[str]: ...


# --------------- Raster -------------------------


@runtime_checkable
class TileSelector(Protocol):
    """
    Responsibilities:
      • Pick the coarsest depth whose resolution still meets the query.
      • Return the tile grid covering the query box and the bounds of that grid.
    """

    depth_scale: tuple[float, ...]

    def select_tiles(self, box: BoundingBox, width: float, height: float): ...
