# ================================
# file: tests/test_coords.py
# ================================
import numpy as np

from core import ARENA_CELLS
from core.coords import CoordinateSystem


def test_grid_shape_includes_border(coords):
    assert coords.width * coords.length == ARENA_CELLS
    assert coords.grid_shape == (coords.length + 2 * coords.border,
                                 coords.width + 2 * coords.border)


def test_arena_origin_maps_to_bottom_left_of_grid(coords):
    b = coords.border
    assert coords.arena_to_grid(0, 0) == (b + coords.length - 1, b)
    assert coords.arena_to_grid(coords.width - 1, coords.length - 1) == (b, b + coords.width - 1)


def test_grid_and_arena_frames_invert():
    cs = CoordinateSystem(width=5, length=4, border=2)
    for col in range(5):
        for row in range(4):
            assert cs.grid_to_arena(*cs.arena_to_grid(col, row)) == (col, row)


def test_user_frame_is_one_based(coords):
    assert coords.user_to_arena(8, 10) == (7, 9)
    assert coords.arena_to_user(7, 9) == (8, 10)


def test_footprint_fits_requires_one_cell_margin(coords):
    assert coords.footprint_fits(1, 1)
    assert coords.footprint_fits(coords.width - 2, coords.length - 2)
    assert not coords.footprint_fits(0, 5)
    assert not coords.footprint_fits(5, 0)
    assert not coords.footprint_fits(coords.width - 1, 5)
    assert not coords.footprint_fits(5, coords.length - 1)


def test_neighbourhood_is_clipped(coords):
    assert len(list(coords.neighbourhood(7, 9))) == 9
    assert sorted(coords.neighbourhood(0, 0)) == [(0, 0), (0, 1), (1, 0), (1, 1)]


def test_arena_array_is_flipped_north_first():
    cs = CoordinateSystem(width=3, length=2, border=0)
    arr = np.array([[1, 1, 1],     # row 0 (south)
                    [0, 0, 0]])    # row 1 (north)
    assert cs.arena_array_to_grid(arr).tolist() == [[0, 0, 0], [1, 1, 1]]
