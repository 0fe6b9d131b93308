from collections.abc import Mapping
from dataclasses import dataclass

from map_index.domain.entities.geography import BoundingBox


@dataclass(frozen=True)
class TileSpan:
    """Inclusive tile index range at one depth; y grows downward."""

    left_x: int
    right_x: int
    top_y: int
    bottom_y: int

    @property
    def cols(self) -> int:
        return self.right_x - self.left_x + 1

    @property
    def rows(self) -> int:
        return self.bottom_y - self.top_y + 1


@dataclass(frozen=True)
class RasterRequest:
    box: BoundingBox
    width: float  # viewport pixels
    height: float

    @classmethod
    def from_params(cls, params: Mapping[str, float]) -> "RasterRequest":
        """Parse the query-string shape {ullon, ullat, lrlon, lrlat, w, h}."""
        width, height = float(params["w"]), float(params["h"])
        if width <= 0 or height <= 0:
            raise ValueError(f"viewport must be positive, got {width}x{height}")
        box = BoundingBox(
            ullon=float(params["ullon"]),
            ullat=float(params["ullat"]),
            lrlon=float(params["lrlon"]),
            lrlat=float(params["lrlat"]),
        )
        return cls(box, width, height)


@dataclass(frozen=True)
class TileGrid:
    render_grid: list[list[str]] | None
    raster_ul_lon: float
    raster_ul_lat: float
    raster_lr_lon: float
    raster_lr_lat: float
    depth: int
    query_success: bool

    @classmethod
    def failed(cls) -> "TileGrid":
        return cls(None, 0.0, 0.0, 0.0, 0.0, 0, False)

    @property
    def bounds(self) -> BoundingBox:
        return BoundingBox(
            self.raster_ul_lon, self.raster_ul_lat, self.raster_lr_lon, self.raster_lr_lat
        )

    def as_params(self) -> dict:
        return {
            "render_grid": self.render_grid,
            "raster_ul_lon": self.raster_ul_lon,
            "raster_ul_lat": self.raster_ul_lat,
            "raster_lr_lon": self.raster_lr_lon,
            "raster_lr_lat": self.raster_lr_lat,
            "depth": self.depth,
            "query_success": self.query_success,
        }
