"""
Tile selection for a query box.

At depth d the root box is cut into 2**d columns and 2**d rows. The chosen depth
is the coarsest one whose longitude-per-pixel does not exceed the query's.
Tile x grows eastward from the root's west edge, tile y grows southward from
the root's north edge.
"""

import math

from map_index.app.hooks import NoopHooks, QueryHooks
from map_index.app.protocols import TileSelector
from map_index.config.models import RasterModel
from map_index.domain.entities.geography import BoundingBox
from map_index.domain.entities.raster import RasterRequest, TileGrid, TileSpan
from map_index.domain.errors import InvalidBoundingBox


def lon_dpp(box: BoundingBox, width: float) -> float:
    return box.lon_extent / width


def generate_depth_scale(root: BoundingBox, tile_size: int, max_depth: int) -> tuple[float, ...]:
    return tuple(root.lon_extent / 2**d / tile_size for d in range(max_depth + 1))


class Rasterer(TileSelector):
    def __init__(self, cfg: RasterModel | None = None, *, hooks: QueryHooks | None = None):
        cfg = cfg or RasterModel()
        r = cfg.root
        self.root = BoundingBox(r.ullon, r.ullat, r.lrlon, r.lrlat)
        self.tile_size, self.max_depth, self.image_ext = cfg.tile_size, cfg.max_depth, cfg.image_ext
        self.depth_scale = generate_depth_scale(self.root, self.tile_size, self.max_depth)
        self.hooks = hooks or NoopHooks()

    # --------------- Helpers -----------------------------

    def check_box(self, box: BoundingBox) -> None:
        if box.is_degenerate():
            raise InvalidBoundingBox(f"degenerate box {box}")
        if box.encloses(self.root):
            raise InvalidBoundingBox("box encloses the whole dataset")

    def check_viewport(self, width: float, height: float) -> None:
        if not (width > 0 and height > 0):
            raise InvalidBoundingBox(f"viewport must be positive, got {width}x{height}")

    def find_depth(self, box: BoundingBox, width: float) -> int:
        query_dpp = lon_dpp(box, width)
        for depth, scale in enumerate(self.depth_scale):
            if scale <= query_dpp:
                return depth
        return self.max_depth

    def _units(self, depth: int) -> tuple[float, float]:
        n = 2**depth
        return self.root.lon_extent / n, self.root.lat_extent / n

    def _clamp(self, i: int, depth: int) -> int:
        return min(max(i, 0), 2**depth - 1)

    def tile_span(self, box: BoundingBox, depth: int) -> TileSpan:
        x_unit, y_unit = self._units(depth)

        def x_index(lon: float) -> int:
            return self._clamp(math.floor((lon - self.root.ullon) / x_unit), depth)

        def y_index(lat: float) -> int:
            return self._clamp(math.floor((self.root.ullat - lat) / y_unit), depth)

        return TileSpan(
            left_x=x_index(box.ullon),
            right_x=x_index(box.lrlon),
            top_y=y_index(box.ullat),
            bottom_y=y_index(box.lrlat),
        )

    def tile_name(self, depth: int, x: int, y: int) -> str:
        return f"d{depth}_x{x}_y{y}{self.image_ext}"

    def tile_names(self, span: TileSpan, depth: int) -> list[list[str]]:
        return [
            [self.tile_name(depth, x, y) for x in range(span.left_x, span.right_x + 1)]
            for y in range(span.top_y, span.bottom_y + 1)
        ]

    def raster_bounds(self, span: TileSpan, depth: int) -> BoundingBox:
        x_unit, y_unit = self._units(depth)
        return BoundingBox(
            ullon=self.root.ullon + span.left_x * x_unit,
            ullat=self.root.ullat - span.top_y * y_unit,
            lrlon=self.root.ullon + (span.right_x + 1) * x_unit,
            lrlat=self.root.ullat - (span.bottom_y + 1) * y_unit,
        )

    # --------------------------------------------------------

    def select_tiles(self, box: BoundingBox, width: float, height: float) -> TileGrid:
        try:
            self.check_box(box)
            self.check_viewport(width, height)
        except InvalidBoundingBox as e:
            self.hooks.tiles_rejected(box=box, reason=str(e))
            return TileGrid.failed()

        depth = self.find_depth(box, width)
        span = self.tile_span(box, depth)
        bounds = self.raster_bounds(span, depth)
        self.hooks.tiles_served(box=box, depth=depth, rows=span.rows, cols=span.cols)
        return TileGrid(
            render_grid=self.tile_names(span, depth),
            raster_ul_lon=bounds.ullon,
            raster_ul_lat=bounds.ullat,
            raster_lr_lon=bounds.lrlon,
            raster_lr_lat=bounds.lrlat,
            depth=depth,
            query_success=True,
        )

    def get_map_raster(self, params) -> dict:
        """Query-string in, response mapping out."""
        req = RasterRequest.from_params(params)
        return self.select_tiles(req.box, req.width, req.height).as_params()
