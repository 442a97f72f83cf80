from typing import Callable, Tuple

import jax.numpy as jnp
import numpy as np
from scipy.special import roots_legendre


def quadrature_legendre(
    n_quad_points: int, lower: float, upper: float
) -> Tuple[np.ndarray, np.ndarray]:
    """Return the Gauss-Legendre quadrature points and weights on [lower, upper].

    The points and weights of the standard rule on [-1, 1] are shifted and
    rescaled to the integration interval, such that
    ``(weights * f(points)).sum()`` approximates the integral of ``f`` over
    [lower, upper].

    Args:
        n_quad_points (int): Number of quadrature points.
        lower (float): Lower bound of the integration interval.
        upper (float): Upper bound of the integration interval.

    Returns:
        tuple:

        - quad_points (np.ndarray): 1d array of shape (n_quad_points,)
            containing the quadrature points inside [lower, upper].
        - quad_weights (np.ndarray): 1d array of shape (n_quad_points,)
            containing the associated weights. They sum to upper - lower.

    """
    if isinstance(n_quad_points, bool) or not isinstance(
        n_quad_points, (int, np.integer)
    ):
        raise ValueError(
            f"Number of quadrature points must be an integer. Got {n_quad_points}."
        )
    if n_quad_points < 1:
        raise ValueError(
            f"Number of quadrature points must be at least 1. Got {n_quad_points}."
        )
    if not lower < upper:
        raise ValueError(
            f"Lower integration bound must be smaller than the upper bound. "
            f"Got lower={lower} and upper={upper}."
        )

    quad_points, quad_weights = roots_legendre(n_quad_points)

    half_width = (upper - lower) / 2
    quad_points_scaled = half_width * quad_points + (upper + lower) / 2
    quad_weights_scaled = half_width * quad_weights

    return quad_points_scaled, quad_weights_scaled


def do_quad(func: Callable, nodes, weights):
    """Integrate ``func`` as the weighted sum over the quadrature nodes.

    Args:
        func (callable): Vectorized function, evaluated at all nodes at once.
        nodes (jnp.ndarray): 1d array of quadrature nodes.
        weights (jnp.ndarray): 1d array of quadrature weights.

    Returns:
        float: The weighted sum ``(func(nodes) * weights).sum()``.

    """
    return jnp.sum(func(nodes) * weights)
