import math
import random

import numpy as np

from chladni.field import chladni, field_grid, nodal_image


def test_chladni_bounded():
    rng = random.Random(7)
    for _ in range(2000):
        x, y = rng.random(), rng.random()
        m, n = rng.uniform(0, 40), rng.uniform(0, 40)
        assert -2.0 <= chladni(x, y, 1, 1, m, n) <= 2.0


def test_chladni_zero_on_edges():
    # sin(0) on every term along x = 0 and y = 0
    for t in (0.0, 0.25, 0.5, 0.9):
        assert chladni(0.0, t, 1, 1, 3, 5) == 0.0
        assert chladni(t, 0.0, 1, 1, 3, 5) == 0.0


def test_chladni_known_value():
    # m = n = 1 at the plate center: both terms are sin(pi/2)^2
    assert math.isclose(chladni(0.5, 0.5, 1, 1, 1, 1), 2.0)


def test_chladni_symmetric_in_mode_swap():
    assert math.isclose(chladni(0.3, 0.7, 1, 1, 4, 9), chladni(0.3, 0.7, 1, 1, 9, 4))


def test_field_grid_matches_scalar():
    grid = field_grid(11, 6, 3.0, 7.0)
    assert grid.shape == (6, 11)
    assert grid.dtype == np.float32
    assert math.isclose(grid[3, 4], chladni(0.4, 0.6, 1, 1, 3.0, 7.0), abs_tol=1e-5)


def test_nodal_image_shape_and_dark_edges():
    img = nodal_image(20, 10, 5, 9)
    assert img.shape == (10, 20, 3)
    assert img.dtype == np.uint8
    assert (img[0, :, :] == 0).all()
