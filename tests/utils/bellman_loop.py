import numpy as np
from scipy.interpolate import interp1d


def objective_loop(jv, value_interp, x, s, phi):
    """Objective w(x, s, phi) evaluated node by node."""
    x_retained = jv.G(x, phi)

    integral = 0.0
    for node, weight in zip(jv.quad_nodes, jv.quad_weights):
        integral += (
            weight * value_interp(max(x_retained, node)) * jv.F.pdf(node)
        )

    prob_offer = float(jv.pi_func(s))
    continuation = prob_offer * integral + (1 - prob_offer) * value_interp(
        x_retained
    )

    return x * (1 - phi - s) + jv.beta * continuation


def bellman_operator_loop(jv, V):
    """Bellman operator with explicit loops over states and controls.

    The controls are searched with s in the outer and phi in the inner loop. A pair
    only replaces the current maximum if it is strictly better.

    """
    value_interp = interp1d(jv.x_grid, V, fill_value="extrapolate")
    search_grid = np.linspace(jv.epsilon, 1.0, 15)

    n_grid = len(jv.x_grid)
    new_V = np.empty(n_grid)
    s_policy = np.empty(n_grid)
    phi_policy = np.empty(n_grid)

    for i, x in enumerate(jv.x_grid):
        max_val, max_s, max_phi = -np.inf, np.nan, np.nan
        for s in search_grid:
            for phi in search_grid:
                if s + phi > 1.0:
                    continue
                cur_val = objective_loop(jv, value_interp, x, s, phi)
                if cur_val > max_val:
                    max_val, max_s, max_phi = cur_val, s, phi

        new_V[i], s_policy[i], phi_policy[i] = max_val, max_s, max_phi

    return new_V, s_policy, phi_policy
