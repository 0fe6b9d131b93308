# tests/domain/test_rasterer.py
import re

import pytest

from map_index.config.models import RasterModel, RootBoxModel
from map_index.domain.entities.geography import BoundingBox
from map_index.domain.raster.rasterer import Rasterer

# ---------- Fixtures


@pytest.fixture
def rasterer() -> Rasterer:
    # 20x20 degree root, 256 px tiles, depths 0..7
    cfg = RasterModel(root=RootBoxModel(ullon=-10.0, ullat=10.0, lrlon=10.0, lrlat=-10.0))
    return Rasterer(cfg)


class RecordingHooks:
    def __init__(self):
        self.calls = []

    def tiles_served(self, **kw):
        self.calls.append(("served", kw))

    def tiles_rejected(self, **kw):
        self.calls.append(("rejected", kw))


_NAME = re.compile(r"^d(\d+)_x(\d+)_y(\d+)\.png$")


def _indices(grid):
    return [tuple(int(g) for g in _NAME.match(name).groups()) for row in grid for name in row]


# ---------- Depth scale


def test_depth_scale_matches_formula_and_decreases(rasterer: Rasterer):
    scale = rasterer.depth_scale
    assert len(scale) == 8
    for d, s in enumerate(scale):
        assert s == 20.0 / (2**d) / 256
    assert all(a > b for a, b in zip(scale, scale[1:]))


def test_default_config_uses_berkeley_root():
    r = Rasterer()
    assert r.root.ullon == pytest.approx(-122.2998046875)
    assert r.depth_scale[0] == pytest.approx((-122.2119140625 + 122.2998046875) / 256)


# ---------- Depth selection


def test_find_depth_picks_first_scale_at_or_below_query(rasterer: Rasterer):
    box = BoundingBox(-5.0, 5.0, 5.0, -5.0)
    # lonDPP = 10 / 500 = 0.02; scales are 0.078, 0.039, 0.0195, ...
    assert rasterer.find_depth(box, 500) == 2
    # exactly on a scale value counts as meeting it
    assert rasterer.find_depth(BoundingBox(-10.0, 10.0, 10.0, -10.0), 256) == 0


def test_find_depth_falls_back_to_max_depth(rasterer: Rasterer):
    box = BoundingBox(0.0, 0.001, 0.001, 0.0)
    assert rasterer.find_depth(box, 10_000) == 7


# ---------- Full queries


def test_worked_example_lands_on_tile_boundaries(rasterer: Rasterer):
    res = rasterer.select_tiles(BoundingBox(-5.0, 5.0, 5.0, -5.0), 500, 500)
    assert res.query_success
    assert res.depth == 2
    assert len(res.render_grid) == 3 and all(len(row) == 3 for row in res.render_grid)
    assert res.render_grid[0] == ["d2_x1_y1.png", "d2_x2_y1.png", "d2_x3_y1.png"]
    assert res.render_grid[2][2] == "d2_x3_y3.png"
    # union of the selected tiles, not the query box
    assert res.raster_ul_lon == pytest.approx(-5.0)
    assert res.raster_ul_lat == pytest.approx(5.0)
    assert res.raster_lr_lon == pytest.approx(10.0)
    assert res.raster_lr_lat == pytest.approx(-10.0)


def test_grid_shape_is_inclusive_span(rasterer: Rasterer):
    box = BoundingBox(-9.0, 9.0, -1.0, 1.0)
    depth = rasterer.find_depth(box, 300)
    span = rasterer.tile_span(box, depth)
    res = rasterer.select_tiles(box, 300, 300)
    assert len(res.render_grid) == span.bottom_y - span.top_y + 1
    assert len(res.render_grid[0]) == span.right_x - span.left_x + 1


def test_partially_outside_box_is_clamped(rasterer: Rasterer):
    res = rasterer.select_tiles(BoundingBox(-15.0, 5.0, 0.0, -5.0), 500, 500)
    assert res.query_success and res.depth == 2
    idx = _indices(res.render_grid)
    assert min(x for _, x, _ in idx) == 0
    assert all(0 <= x <= 3 and 0 <= y <= 3 for _, x, y in idx)
    assert res.raster_ul_lon == pytest.approx(-10.0)
    assert res.raster_lr_lon == pytest.approx(5.0)


def test_indices_past_east_and_south_collapse_to_last_tile(rasterer: Rasterer):
    res = rasterer.select_tiles(BoundingBox(0.0, 0.0, 25.0, -25.0), 1000, 1000)
    assert res.depth == 2
    assert res.render_grid[-1][-1] == "d2_x3_y3.png"
    assert res.raster_lr_lon == pytest.approx(10.0)
    assert res.raster_lr_lat == pytest.approx(-10.0)


def test_box_entirely_west_of_root_collapses_to_first_column(rasterer: Rasterer):
    # edges west of the root clamp to column 0 rather than mirroring eastward
    res = rasterer.select_tiles(BoundingBox(-18.0, 5.0, -12.0, -5.0), 300, 300)
    assert res.query_success and res.depth == 2
    assert all(name.startswith("d2_x0_") for row in res.render_grid for name in row)
    assert res.raster_ul_lon == pytest.approx(-10.0)
    assert res.raster_lr_lon == pytest.approx(-5.0)


def test_box_equal_to_root_is_served_at_depth_zero(rasterer: Rasterer):
    res = rasterer.select_tiles(BoundingBox(-10.0, 10.0, 10.0, -10.0), 256, 256)
    assert res.query_success
    assert res.render_grid == [["d0_x0_y0.png"]]
    assert res.bounds == BoundingBox(-10.0, 10.0, 10.0, -10.0)


# ---------- Failures


@pytest.mark.parametrize(
    "box, width, height",
    [
        (BoundingBox(5.0, 5.0, -5.0, -5.0), 500, 500),  # west > east
        (BoundingBox(-5.0, -5.0, 5.0, 5.0), 500, 500),  # south > north
        (BoundingBox(-20.0, 20.0, 20.0, -20.0), 500, 500),  # encloses root
        (BoundingBox(-5.0, 5.0, 5.0, -5.0), 0, 500),  # zero width
        (BoundingBox(-5.0, 5.0, 5.0, -5.0), 500, 0),  # zero height
        (BoundingBox(-5.0, 5.0, 5.0, -5.0), -100, 500),
    ],
)
def test_invalid_queries_fail_with_zeroed_output(rasterer: Rasterer, box, width, height):
    res = rasterer.select_tiles(box, width, height)
    assert res.as_params() == {
        "render_grid": None,
        "raster_ul_lon": 0.0,
        "raster_ul_lat": 0.0,
        "raster_lr_lon": 0.0,
        "raster_lr_lat": 0.0,
        "depth": 0,
        "query_success": False,
    }


def test_hooks_see_served_and_rejected_queries():
    hooks = RecordingHooks()
    r = Rasterer(
        RasterModel(root=RootBoxModel(ullon=-10.0, ullat=10.0, lrlon=10.0, lrlat=-10.0)),
        hooks=hooks,
    )
    r.select_tiles(BoundingBox(-5.0, 5.0, 5.0, -5.0), 500, 500)
    r.select_tiles(BoundingBox(5.0, 5.0, -5.0, -5.0), 500, 500)
    kinds = [k for k, _ in hooks.calls]
    assert kinds == ["served", "rejected"]
    assert hooks.calls[0][1]["rows"] == 3 and hooks.calls[0][1]["depth"] == 2
    assert "degenerate" in hooks.calls[1][1]["reason"]


# ---------- Query-string surface


def test_get_map_raster_accepts_query_params(rasterer: Rasterer):
    out = rasterer.get_map_raster(
        {"ullon": -5.0, "ullat": 5.0, "lrlon": 5.0, "lrlat": -5.0, "w": 500.0, "h": 500.0}
    )
    assert out["query_success"] is True
    assert out["depth"] == 2
    assert out["render_grid"][1][0] == "d2_x1_y2.png"


def test_get_map_raster_rejects_bad_viewport(rasterer: Rasterer):
    params = {"ullon": -5.0, "ullat": 5.0, "lrlon": 5.0, "lrlat": -5.0, "w": 0.0, "h": 500.0}
    with pytest.raises(ValueError):
        rasterer.get_map_raster(params)
    with pytest.raises(KeyError):
        rasterer.get_map_raster({"ullon": -5.0})
