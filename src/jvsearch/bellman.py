"""Bellman operator of the job search model.

The maximization over search effort ``s`` and investment ``phi`` is a brute
force search over a uniform grid on [epsilon, 1] for both controls. The pairs
are visited with ``s`` in the outer and ``phi`` in the inner loop. If several
pairs attain the maximum, the first one in this order is selected. Pairs with
``s + phi > 1`` are infeasible and never selected.

"""

from functools import partial
from typing import Callable, NamedTuple, Tuple

import jax
import jax.numpy as jnp
import numpy as np
from jax import vmap

from jvsearch.interpolation import LinInterp
from jvsearch.jv_worker import JvWorker, create_search_grid
from jvsearch.numerical_integration import do_quad


class ControlObjective(NamedTuple):
    """Objective w(x, s, phi) at a fixed level of human capital x."""

    x: float
    value_interp: LinInterp
    quad_nodes: jnp.ndarray
    offer_weights: jnp.ndarray
    beta: float
    transition_func: Callable
    offer_prob_func: Callable

    def evaluate(self, search_effort, investment):
        x_retained = self.transition_func(self.x, investment)
        value_retained = self.value_interp(x_retained)

        # E[V(max(G(x, phi), U))] with the density of U in the offer weights
        expected_value_offer = do_quad(
            lambda u: self.value_interp(jnp.maximum(x_retained, u)),
            self.quad_nodes,
            self.offer_weights,
        )

        prob_offer = self.offer_prob_func(search_effort)
        expected_continuation = (
            prob_offer * expected_value_offer + (1 - prob_offer) * value_retained
        )

        wage = self.x * (1 - investment - search_effort)
        return wage + self.beta * expected_continuation


def bellman_operator(
    jv: JvWorker, V, ret_policies: bool = False
) -> np.ndarray | Tuple[np.ndarray, np.ndarray]:
    """Apply the Bellman operator and return new arrays.

    Args:
        jv (JvWorker): The model.
        V (np.ndarray): 1d array of shape (grid_size,) with the current guess of
            the value function on ``jv.x_grid``.
        ret_policies (bool): If True, return the policies instead of the values.

    Returns:
        np.ndarray | tuple: The updated value function, or the tuple
            (s_policy, phi_policy) if ``ret_policies`` is True.

    """
    V = np.asarray(V, dtype=float)

    if ret_policies:
        out = (np.empty_like(V), np.empty_like(V))
        bellman_operator_policies(jv, V, out)
        return out

    new_V = np.empty_like(V)
    bellman_operator_value(jv, V, new_V)
    return new_V


def bellman_operator_value(jv: JvWorker, V, new_V: np.ndarray) -> None:
    """Apply the Bellman operator and write the value function into ``new_V``.

    Args:
        jv (JvWorker): The model.
        V (np.ndarray): 1d array of shape (grid_size,) with the current guess of
            the value function.
        new_V (np.ndarray): 1d array of shape (grid_size,). Updated in place.

    """
    _check_output_buffer(new_V, jv.x_grid, "new_V")

    max_values, _, _ = solve_on_search_grid(jv, V)
    new_V[:] = max_values


def bellman_operator_policies(
    jv: JvWorker, V, out: Tuple[np.ndarray, np.ndarray]
) -> None:
    """Apply the Bellman operator and write the policies into ``out``.

    Args:
        jv (JvWorker): The model.
        V (np.ndarray): 1d array of shape (grid_size,) with the current guess of
            the value function.
        out (tuple): Tuple (s_policy, phi_policy) of two 1d arrays of shape
            (grid_size,). Updated in place with the optimal search effort and
            investment.

    """
    if len(out) != 2:
        raise ValueError(
            f"out must be a tuple of two arrays (s_policy, phi_policy). Got {len(out)}."
        )
    s_policy, phi_policy = out
    _check_output_buffer(s_policy, jv.x_grid, "s_policy")
    _check_output_buffer(phi_policy, jv.x_grid, "phi_policy")

    _, max_s, max_phi = solve_on_search_grid(jv, V)
    s_policy[:] = max_s
    phi_policy[:] = max_phi


def solve_on_search_grid(
    jv: JvWorker, V
) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
    """Check inputs and maximize the objective at every grid point.

    Returns:
        tuple:

        - max_values (np.ndarray): Maximal value per grid point.
        - max_s (np.ndarray): Maximizing search effort per grid point.
        - max_phi (np.ndarray): Maximizing investment per grid point.

    """
    # Update to float64
    jax.config.update("jax_enable_x64", True)

    x_grid = np.asarray(jv.x_grid, dtype=float)
    V = np.asarray(V, dtype=float)
    _check_grid_and_value(x_grid, V)

    quad_nodes = np.asarray(jv.quad_nodes, dtype=float)
    quad_weights = np.asarray(jv.quad_weights, dtype=float)
    if quad_nodes.shape != quad_weights.shape:
        raise ValueError(
            f"Quadrature nodes and weights must have the same shape. Got "
            f"{quad_nodes.shape} and {quad_weights.shape}."
        )
    offer_weights = quad_weights * jv.F.pdf(quad_nodes)

    max_values, max_s, max_phi = maximize_on_search_grid(
        x_grid=x_grid,
        value=V,
        search_grid=create_search_grid(jv.epsilon),
        quad_nodes=quad_nodes,
        offer_weights=offer_weights,
        beta=jv.beta,
        transition_func=jv.G,
        offer_prob_func=jv.pi_func,
    )
    max_values = np.asarray(max_values)

    if not np.all(np.isfinite(max_values)):
        raise FloatingPointError(
            "The Bellman operator produced non-finite values at human capital "
            f"levels {x_grid[~np.isfinite(max_values)]}."
        )

    return max_values, np.asarray(max_s), np.asarray(max_phi)


@partial(jax.jit, static_argnames=("transition_func", "offer_prob_func"))
def maximize_on_search_grid(
    x_grid: jnp.ndarray,
    value: jnp.ndarray,
    search_grid: jnp.ndarray,
    quad_nodes: jnp.ndarray,
    offer_weights: jnp.ndarray,
    beta: float,
    transition_func: Callable,
    offer_prob_func: Callable,
) -> Tuple[jnp.ndarray, jnp.ndarray, jnp.ndarray]:
    """Brute force maximization of the objective for all levels of human capital.

    Args:
        x_grid (jnp.ndarray): 1d array of shape (n_grid,) with the human capital
            grid.
        value (jnp.ndarray): 1d array of shape (n_grid,) with the current value
            function on the grid.
        search_grid (jnp.ndarray): 1d array of shape (n_search,) with the grid for
            both controls.
        quad_nodes (jnp.ndarray): 1d array of shape (n_quad,) of offer draws.
        offer_weights (jnp.ndarray): 1d array of shape (n_quad,) with the
            quadrature weights times the offer density at the nodes.
        beta (float): Discount factor.
        transition_func (callable): Human capital transition G(x, phi).
        offer_prob_func (callable): Offer probability pi(s).

    Returns:
        tuple: Arrays of shape (n_grid,) with the maximal value, the maximizing
            search effort and the maximizing investment.

    """
    value_interp = LinInterp(grid=x_grid, values=value)

    # s varies in the outer, phi in the inner loop
    s_mesh, phi_mesh = jnp.meshgrid(search_grid, search_grid, indexing="ij")
    s_flat = s_mesh.ravel()
    phi_flat = phi_mesh.ravel()

    return vmap(
        partial(
            _maximize_at_state,
            transition_func=transition_func,
            offer_prob_func=offer_prob_func,
        ),
        in_axes=(0, None, None, None, None, None, None),
    )(x_grid, value_interp, s_flat, phi_flat, quad_nodes, offer_weights, beta)


def _maximize_at_state(
    x,
    value_interp,
    s_flat,
    phi_flat,
    quad_nodes,
    offer_weights,
    beta,
    transition_func,
    offer_prob_func,
):
    objective = ControlObjective(
        x=x,
        value_interp=value_interp,
        quad_nodes=quad_nodes,
        offer_weights=offer_weights,
        beta=beta,
        transition_func=transition_func,
        offer_prob_func=offer_prob_func,
    )
    values = vmap(objective.evaluate)(s_flat, phi_flat)

    feasible = s_flat + phi_flat <= 1.0
    values = jnp.where(feasible, values, -jnp.inf)

    # argmax returns the first occurrence of the maximum
    ind_max = jnp.argmax(values)

    return values[ind_max], s_flat[ind_max], phi_flat[ind_max]


def _check_grid_and_value(x_grid, V):
    if x_grid.ndim != 1 or x_grid.shape[0] < 2:
        raise ValueError("x_grid must be a one-dimensional grid of at least 2 points.")
    if not np.all(np.diff(x_grid) > 0):
        raise ValueError("x_grid must be strictly increasing.")
    if not x_grid[0] > 0:
        raise ValueError(f"x_grid must be strictly positive. Got minimum {x_grid[0]}.")
    if V.shape != x_grid.shape:
        raise ValueError(
            f"V must have the same shape as x_grid. Got {V.shape} and {x_grid.shape}."
        )
    if not np.all(np.isfinite(V)):
        raise ValueError("V must only contain finite values.")


def _check_output_buffer(buffer, x_grid, name):
    if not isinstance(buffer, np.ndarray) or not buffer.flags.writeable:
        raise ValueError(f"{name} must be a writeable numpy array.")
    if not np.issubdtype(buffer.dtype, np.floating):
        raise ValueError(
            f"{name} must have a floating point dtype. Got {buffer.dtype}."
        )
    if buffer.shape != np.shape(x_grid):
        raise ValueError(
            f"{name} must have the same shape as x_grid. Got {buffer.shape} and "
            f"{np.shape(x_grid)}."
        )
