"""Jovanovic-type model of employment with on-the-job search.

The value function is given by

    V(x) = max_{s, phi} w(x, s, phi)

with

    w(x, s, phi) = x (1 - phi - s) + beta (1 - pi(s)) V(G(x, phi))
                   + beta pi(s) E[V(max(G(x, phi), U))]

where

- x: human capital
- s: search effort
- phi: investment in human capital
- pi(s): probability of a new job offer given search effort s
- x (1 - phi - s): wage
- G(x, phi): human capital next period if the current job is retained
- U: human capital of a new job offer, drawn from the distribution F

"""

import warnings
from typing import Any, Callable, NamedTuple

import jax.numpy as jnp
import numpy as np
from scipy.stats import beta as beta_distribution

from jvsearch.numerical_integration import quadrature_legendre
from jvsearch.pre_processing.check_params import (
    check_jv_worker_params,
    process_params,
)

N_SEARCH_GRID_POINTS = 15

# Quantiles of F delimiting the quadrature interval.
LOWER_QUAD_QUANTILE = 0.005
UPPER_QUAD_QUANTILE = 0.995


class JvWorker(NamedTuple):
    """Parameters, grids and primitives of the job search model.

    Attributes:
        A (float): Parameter in the human capital transition function.
        alpha (float): Parameter in the human capital transition function.
        beta (float): Discount factor in (0, 1).
        x_grid (np.ndarray): 1d array of shape (grid_size,) with the grid over
            human capital.
        G (callable): Human capital transition G(x, phi) if the job is retained.
        pi_func (callable): Maps search effort to the probability of an offer.
        F (scipy.stats.rv_continuous): Frozen distribution of new job offers.
        quad_nodes (np.ndarray): Quadrature nodes for integrating over offers.
        quad_weights (np.ndarray): Quadrature weights for integrating over offers.
        epsilon (float): Lower bound of the grids and of both controls.

    """

    A: float
    alpha: float
    beta: float
    x_grid: np.ndarray
    G: Callable
    pi_func: Callable
    F: Any
    quad_nodes: np.ndarray
    quad_weights: np.ndarray
    epsilon: float


def transition_human_capital(x, phi, A, alpha):
    """Human capital next period if the current job is retained."""
    return A * (x * phi) ** alpha


class HumanCapitalTransition(NamedTuple):
    """Transition G(x, phi) with A and alpha bound.

    Equal parameters give equal and hashable transitions, so models with the same
    A and alpha share the compiled Bellman operator.

    """

    A: float
    alpha: float

    def __call__(self, x, phi):
        return transition_human_capital(x, phi, A=self.A, alpha=self.alpha)


def offer_probability_sqrt(search_effort):
    """Probability of receiving a new offer."""
    return jnp.sqrt(search_effort)


def default_offer_distribution():
    """Beta(2, 2) distribution of new job offers."""
    return beta_distribution(2, 2)


def create_jv_worker(
    A=1.4,
    alpha=0.6,
    beta=0.96,
    grid_size=50,
    epsilon=1e-4,
    pi_func=None,
    F=None,
    n_quad_points=21,
) -> JvWorker:
    """Create the job search model.

    Args:
        A (float): Parameter in the human capital transition function.
        alpha (float): Parameter in the human capital transition function.
        beta (float): Discount factor in (0, 1).
        grid_size (int): Number of points in the grid over human capital.
        epsilon (float): Small number used as lower bound of the grids.
        pi_func (callable): Maps search effort to the probability of an offer.
            Must be traceable by jax. Defaults to the square root.
        F (scipy.stats.rv_continuous): Frozen distribution of new job offers.
            Defaults to Beta(2, 2).
        n_quad_points (int): Number of Gauss-Legendre quadrature points.

    Returns:
        JvWorker: The model.

    """
    check_jv_worker_params(
        A=A,
        alpha=alpha,
        beta=beta,
        grid_size=grid_size,
        epsilon=epsilon,
        n_quad_points=n_quad_points,
    )

    pi_func = offer_probability_sqrt if pi_func is None else pi_func
    F = default_offer_distribution() if F is None else F

    _check_offer_probability(pi_func, epsilon)

    lower, upper, upper_tail = (
        float(q)
        for q in F.ppf([LOWER_QUAD_QUANTILE, UPPER_QUAD_QUANTILE, 1 - epsilon])
    )
    if not np.all(np.isfinite([lower, upper, upper_tail])):
        raise ValueError(
            "The offer distribution F must have finite quantiles at "
            f"{LOWER_QUAD_QUANTILE}, {UPPER_QUAD_QUANTILE} and 1 - epsilon."
        )

    quad_nodes, quad_weights = quadrature_legendre(n_quad_points, lower, upper)

    # The grid covers the fixed point y = G(y, 1) and a high quantile of F.
    grid_max = max(A ** (1.0 / (1.0 - alpha)), upper_tail)
    x_grid = np.linspace(epsilon, grid_max, grid_size)

    if upper > x_grid[-1]:
        warnings.warn(
            f"The quadrature interval of the offer distribution reaches {upper}, "
            f"beyond the top of the human capital grid at {x_grid[-1]}. The value "
            f"function is extrapolated linearly above the grid."
        )

    return JvWorker(
        A=A,
        alpha=alpha,
        beta=beta,
        x_grid=x_grid,
        G=HumanCapitalTransition(A=A, alpha=alpha),
        pi_func=pi_func,
        F=F,
        quad_nodes=quad_nodes,
        quad_weights=quad_weights,
        epsilon=epsilon,
    )


def create_jv_worker_from_params(params) -> JvWorker:
    """Create the job search model from a parameter dict, Series or DataFrame."""
    return create_jv_worker(**process_params(params))


def create_search_grid(epsilon, n_points=N_SEARCH_GRID_POINTS):
    """Uniform grid over both controls, search effort and investment."""
    return np.linspace(epsilon, 1.0, n_points)


def _check_offer_probability(pi_func, epsilon):
    probs = np.asarray(pi_func(jnp.asarray(create_search_grid(epsilon))))
    if not np.all((probs >= 0) & (probs <= 1)):
        raise ValueError(
            "pi_func must map search effort in [epsilon, 1] to probabilities in "
            f"[0, 1]. Got values between {probs.min()} and {probs.max()}."
        )
