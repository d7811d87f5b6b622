import pytest

from tilegraph.core.models import QueryBox, RasterConfig, TileCoordinate
from tilegraph.tiling import ROOT_TILE, Rasterer

ULLON, ULLAT, LRLON, LRLAT = -122.30, 37.88, -122.20, 37.82


@pytest.fixture()
def rasterer() -> Rasterer:
    config = RasterConfig(
        root_ullon=ULLON,
        root_ullat=ULLAT,
        root_lrlon=LRLON,
        root_lrlat=LRLAT,
        tile_size=256,
    )
    return Rasterer(config)


def _names(grid):  # type: ignore[no-untyped-def]
    return [[tile.filename for tile in row] for row in grid]


def test_root_query_at_tile_width_returns_single_root_tile(rasterer: Rasterer) -> None:
    query = QueryBox(ULLON, ULLAT, LRLON, LRLAT, width=256)

    result = rasterer.get_map_raster(query)

    assert result.depth == 0
    assert result.render_grid == [["d0_x0_y0.png"]]
    assert result.query_success is True
    assert result.raster_ul_lon == pytest.approx(ULLON)
    assert result.raster_ul_lat == pytest.approx(ULLAT)
    assert result.raster_lr_lon == pytest.approx(LRLON)
    assert result.raster_lr_lat == pytest.approx(LRLAT)


def test_find_depth_doubles_with_viewport(rasterer: Rasterer) -> None:
    assert rasterer.find_depth(ULLON, LRLON, 256) == 0
    assert rasterer.find_depth(ULLON, LRLON, 512) == 1
    assert rasterer.find_depth(ULLON, LRLON, 4096) == 4


def test_find_depth_is_clamped(rasterer: Rasterer) -> None:
    assert rasterer.find_depth(ULLON, LRLON, 1e9) == 7
    assert rasterer.find_depth(ULLON, LRLON, 1.0) == 0
    assert rasterer.find_depth(ULLON, ULLON, 256) == 7
    assert rasterer.find_depth(ULLON, LRLON, 0) == 0


def test_find_depth_respects_configured_max_depth() -> None:
    shallow = Rasterer(RasterConfig(ULLON, ULLAT, LRLON, LRLAT, tile_size=256, max_depth=3))
    assert shallow.find_depth(ULLON, LRLON, 1e9) == 3


def test_find_depth_is_monotone_in_width(rasterer: Rasterer) -> None:
    widths = [1, 50, 100, 256, 300, 511, 512, 700, 1024, 2000, 4096, 9000, 40000, 1e7]
    depths = [rasterer.find_depth(-122.28, -122.24, w) for w in widths]
    assert depths == sorted(depths)
    assert all(0 <= depth <= 7 for depth in depths)


def test_tile_bounds_split_root_evenly(rasterer: Rasterer) -> None:
    root = rasterer.tile_bounds(0, 0, 0)
    assert (root.ullon, root.ullat, root.lrlon, root.lrlat) == (ULLON, ULLAT, LRLON, LRLAT)

    tile = rasterer.tile_bounds(1, 1, 1)
    assert tile.ullon == pytest.approx(-122.25)
    assert tile.ullat == pytest.approx(37.85)
    assert tile.lrlon == pytest.approx(LRLON)
    assert tile.lrlat == pytest.approx(LRLAT)

    deep = rasterer.tile_bounds(3, 2, 3)
    assert deep.ullon == pytest.approx(ULLON + 3 * 0.1 / 8)
    assert deep.lrlon - deep.ullon == pytest.approx(0.1 / 8)
    assert deep.ullat == pytest.approx(ULLAT - 2 * 0.06 / 8)
    assert deep.ullat - deep.lrlat == pytest.approx(0.06 / 8)


@pytest.mark.parametrize("depth, expected", [(0, 0), (1, 1), (3, 7), (4, 14), (7, 126)])
def test_max_index_drops_a_row_from_depth_four(depth: int, expected: int) -> None:
    assert Rasterer.max_index(depth) == expected


def test_select_grid_full_root_at_depth_one(rasterer: Rasterer) -> None:
    query = QueryBox(ULLON, ULLAT, LRLON, LRLAT, width=512)
    grid = rasterer.select_grid(query, 1)
    assert _names(grid) == [
        ["d1_x0_y0.png", "d1_x1_y0.png"],
        ["d1_x0_y1.png", "d1_x1_y1.png"],
    ]


def test_select_grid_full_root_at_depth_four_is_short_one(rasterer: Rasterer) -> None:
    query = QueryBox(ULLON, ULLAT, LRLON, LRLAT, width=4096)

    result = rasterer.get_map_raster(query)

    assert result.depth == 4
    assert len(result.render_grid) == 15
    assert all(len(row) == 15 for row in result.render_grid)
    assert result.render_grid[-1][-1] == "d4_x14_y14.png"
    assert result.raster_lr_lon == pytest.approx(ULLON + 15 * 0.1 / 16)
    assert result.raster_lr_lat == pytest.approx(ULLAT - 15 * 0.06 / 16)


def test_select_grid_partial_query(rasterer: Rasterer) -> None:
    query = QueryBox(-122.29, 37.87, -122.26, 37.855, width=256)
    grid = rasterer.select_grid(query, 2)
    assert _names(grid) == [
        ["d2_x0_y0.png", "d2_x1_y0.png"],
        ["d2_x0_y1.png", "d2_x1_y1.png"],
    ]


def test_raster_bounds_come_from_tiles_not_query(rasterer: Rasterer) -> None:
    query = QueryBox(-122.29, 37.87, -122.26, 37.855, width=256)
    depth = rasterer.find_depth(query.ullon, query.lrlon, query.width)
    assert depth == 2

    result = rasterer.get_map_raster(query)

    assert result.raster_ul_lon == pytest.approx(ULLON)
    assert result.raster_ul_lat == pytest.approx(ULLAT)
    assert result.raster_lr_lon == pytest.approx(-122.25)
    assert result.raster_lr_lat == pytest.approx(37.85)
    assert result.query_success is True


def test_upper_left_outside_root_still_returns_grid(rasterer: Rasterer) -> None:
    query = QueryBox(-122.35, 37.87, -122.25, 37.83, width=256)

    result = rasterer.get_map_raster(query)

    assert result.query_success is False
    assert result.render_grid
    assert result.render_grid[0]


@pytest.mark.parametrize(
    "query",
    [
        QueryBox(ULLON, 37.90, LRLON, LRLAT, width=256),
        QueryBox(ULLON, ULLAT, -122.10, LRLAT, width=256),
        QueryBox(ULLON, ULLAT, LRLON, 37.80, width=256),
        QueryBox(-122.22, 37.87, -122.28, 37.83, width=256),
        QueryBox(-122.28, 37.83, -122.22, 37.87, width=256),
    ],
)
def test_query_success_false_for_out_of_bounds_or_inverted(
    rasterer: Rasterer, query: QueryBox
) -> None:
    assert rasterer.query_success(query) is False


def test_query_entirely_outside_root_falls_back_to_root_tile(rasterer: Rasterer) -> None:
    query = QueryBox(-100.0, 10.0, -99.0, 9.0, width=256)

    result = rasterer.get_map_raster(query)

    assert result.render_grid == [["d0_x0_y0.png"]]
    assert result.depth == 0
    assert result.query_success is False
    assert result.raster_ul_lon == pytest.approx(ULLON)
    assert result.raster_lr_lat == pytest.approx(LRLAT)


def test_inverted_query_at_depth_falls_back_to_root_tile(rasterer: Rasterer) -> None:
    query = QueryBox(-122.22, 37.87, -122.28, 37.83, width=10000)
    assert rasterer.find_depth(query.ullon, query.lrlon, query.width) == 7

    assert rasterer.select_grid(query, 7) == [[ROOT_TILE]]
    result = rasterer.get_map_raster(query)
    assert result.render_grid == [["d0_x0_y0.png"]]
    assert result.depth == 0
    assert result.query_success is False


@pytest.mark.parametrize(
    "query",
    [
        QueryBox(ULLON, ULLAT, LRLON, LRLAT, width=1000),
        QueryBox(-122.2759, 37.8712, -122.2411, 37.8503, width=800),
        QueryBox(-122.35, 37.90, -122.25, 37.84, width=640),
        QueryBox(-122.2105, 37.8244, -122.2011, 37.8227, width=300),
        QueryBox(-122.2541, 37.8600, -122.2539, 37.8598, width=2048),
    ],
)
def test_selected_tiles_form_rectangle_and_intersect_query(
    rasterer: Rasterer, query: QueryBox
) -> None:
    depth = rasterer.find_depth(query.ullon, query.lrlon, query.width)
    grid = rasterer.select_grid(query, depth)

    assert grid and grid[0]
    assert len({len(row) for row in grid}) == 1
    for row in grid:
        assert len({tile.y for tile in row}) == 1
        for tile in row:
            assert tile.depth == depth
            assert rasterer.tile_bounds(tile.x, tile.y, tile.depth).intersects(query.bounds)


def test_render_grid_matches_select_grid(rasterer: Rasterer) -> None:
    query = QueryBox(-122.29, 37.87, -122.26, 37.855, width=256)
    names = rasterer.render_grid(query, 2)
    coords = [[TileCoordinate.from_filename(name) for name in row] for row in names]
    assert coords == rasterer.select_grid(query, 2)


def test_default_config_serves_default_root() -> None:
    rasterer = Rasterer()
    cfg = rasterer.config
    query = QueryBox(cfg.root_ullon, cfg.root_ullat, cfg.root_lrlon, cfg.root_lrlat, width=256)

    result = rasterer.get_map_raster(query)

    assert result.query_success is True
    assert result.render_grid == [["d0_x0_y0.png"]]
    payload = result.to_dict()
    assert set(payload) == {
        "render_grid",
        "raster_ul_lon",
        "raster_ul_lat",
        "raster_lr_lon",
        "raster_lr_lat",
        "depth",
        "query_success",
    }
