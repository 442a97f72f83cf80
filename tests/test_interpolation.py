"""Tests of the piecewise linear interpolant.

The results are compared to the ones from scipy's linear interpolation function
interp1d with linear extrapolation.

"""

import jax
import jax.numpy as jnp
import numpy as np
import pytest
from numpy.testing import assert_allclose
from scipy.interpolate import interp1d

from jvsearch.interpolation import LinInterp, create_lin_interp


@pytest.fixture()
def random_test_data():
    """Draw a sorted random grid and random values."""
    np.random.seed(1234)
    n = 7
    m = 20

    x = np.sort(np.random.rand(n)) + np.arange(n)
    y = np.random.rand(n)
    x_new = np.random.rand(m) * (n + 2) - 1

    return x, y, x_new


@pytest.mark.parametrize(
    "x_new, expected",
    [(0.5, 5.0), (1.5, 15.0), (0.0, 0.0), (1.0, 10.0), (2.0, 20.0)],
)
def test_interpolation_inside_grid(x_new, expected):
    interp = create_lin_interp([0.0, 1.0, 2.0], [0.0, 10.0, 20.0])
    assert_allclose(interp(x_new), expected)


@pytest.mark.parametrize("x_new, expected", [(-1.0, -10.0), (3.0, 30.0)])
def test_extrapolation_extends_edge_segments(x_new, expected):
    interp = create_lin_interp([0.0, 1.0, 2.0], [0.0, 10.0, 20.0])
    assert_allclose(interp(x_new), expected)


def test_extrapolation_uses_nearest_segment_slope():
    interp = create_lin_interp([0.0, 1.0, 3.0], [0.0, 1.0, 5.0])

    assert_allclose(interp(-2.0), -2.0)
    assert_allclose(interp(4.0), 7.0)


def test_linear_interpolation_with_extrapolation(random_test_data):
    x, y, x_new = random_test_data

    got = create_lin_interp(x, y)(x_new)
    expected = interp1d(x, y, fill_value="extrapolate")(x_new)

    assert_allclose(got, expected)


def test_interpolant_under_jit_and_vmap(random_test_data):
    x, y, x_new = random_test_data
    interp = create_lin_interp(x, y)

    got = jax.jit(jax.vmap(interp.__call__))(jnp.asarray(x_new))
    expected = interp1d(x, y, fill_value="extrapolate")(x_new)

    assert_allclose(got, expected)


def test_interpolant_is_pytree():
    interp = LinInterp(grid=jnp.array([0.0, 1.0]), values=jnp.array([1.0, 3.0]))

    got = jax.jit(lambda f, z: f(z))(interp, 0.25)

    assert_allclose(got, 1.5)


@pytest.mark.parametrize(
    "grid, values",
    [
        ([0.0], [1.0]),
        ([[0.0, 1.0]], [[1.0, 2.0]]),
        ([0.0, 0.0, 1.0], [1.0, 2.0, 3.0]),
        ([0.0, 2.0, 1.0], [1.0, 2.0, 3.0]),
        ([0.0, 1.0, 2.0], [1.0, 2.0]),
    ],
)
def test_invalid_grid_or_values(grid, values):
    with pytest.raises(ValueError):
        create_lin_interp(grid, values)


@pytest.mark.parametrize(
    "x_new, expected",
    [(-1.0, 0), (0.0, 0), (0.5, 0), (1.0, 0), (1.5, 1), (2.0, 1), (3.0, 1)],
)
def test_segment_index(x_new, expected):
    interp = create_lin_interp([0.0, 1.0, 2.0], [0.0, 10.0, 20.0])
    assert interp.segment_index(x_new) == expected
