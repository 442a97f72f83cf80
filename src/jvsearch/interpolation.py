from typing import NamedTuple

import jax.numpy as jnp
import numpy as np


class LinInterp(NamedTuple):
    """Piecewise linear interpolant of values given on a strictly increasing grid.

    Outside of the grid, the first and last segment are extended linearly.

    """

    grid: jnp.ndarray
    values: jnp.ndarray

    def __call__(self, x_new):
        ind_low = self.segment_index(x_new)

        x_low = jnp.take(self.grid, ind_low)
        y_low = jnp.take(self.values, ind_low)
        slope = (jnp.take(self.values, ind_low + 1) - y_low) / (
            jnp.take(self.grid, ind_low + 1) - x_low
        )

        return y_low + slope * (x_new - x_low)

    def segment_index(self, x_new):
        """Index of the left end of the segment used for x_new.

        Points below the grid use the first, points above the grid the last
        segment.

        """
        n_segments = self.grid.shape[0] - 1
        return jnp.clip(jnp.searchsorted(self.grid, x_new) - 1, 0, n_segments - 1)


def create_lin_interp(grid, values) -> LinInterp:
    """Check grid and values and create the interpolant.

    Args:
        grid (np.ndarray): 1d array of shape (n,) with strictly increasing
            x-values. n has to be at least 2.
        values (np.ndarray): 1d array of shape (n,) containing the function
            values on the grid.

    Returns:
        LinInterp: The interpolant.

    """
    grid_np = np.asarray(grid, dtype=float)
    values_np = np.asarray(values, dtype=float)

    if grid_np.ndim != 1:
        raise ValueError(f"Grid must be one-dimensional. Got shape {grid_np.shape}.")
    if grid_np.shape[0] < 2:
        raise ValueError("Grid must contain at least two points.")
    if not np.all(np.diff(grid_np) > 0):
        raise ValueError("Grid must be strictly increasing.")
    if values_np.shape != grid_np.shape:
        raise ValueError(
            f"Values must have the same shape as the grid. Got {values_np.shape} "
            f"and {grid_np.shape}."
        )

    return LinInterp(grid=jnp.asarray(grid_np), values=jnp.asarray(values_np))
