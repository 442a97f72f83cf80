"""Discrete optimal growth example with a finite state and action space.

The state s in {0, ..., B + M} is the stock of goods, the action a in
{0, ..., M} the amount stored for next period. Consumption is s - a and next
period's stock is a plus a uniform draw from {0, ..., B}.

"""

from typing import NamedTuple

import numpy as np

from jvsearch.pre_processing.check_params import check_simple_og_params


class SimpleOG(NamedTuple):
    B: int
    M: int
    alpha: float
    beta: float
    R: np.ndarray
    Q: np.ndarray


def create_simple_og(B=10, M=5, alpha=0.5, beta=0.9) -> SimpleOG:
    """Create the reward array and the transition probabilities.

    Args:
        B (int): Upper bound of the random replenishment.
        M (int): Maximal amount that can be stored.
        alpha (float): Curvature of the utility function u(c) = c ** alpha.
        beta (float): Discount factor.

    Returns:
        SimpleOG: The model with the reward array R of shape (n, m) and the
            transition array Q of shape (n, m, n), where n = B + M + 1 and
            m = M + 1.

    """
    check_simple_og_params(B=B, M=M, alpha=alpha, beta=beta)

    n_states = B + M + 1
    n_actions = M + 1

    states = np.arange(n_states)[:, None]
    actions = np.arange(n_actions)[None, :]
    consumption = np.broadcast_to(states - actions, (n_states, n_actions))
    feasible = consumption >= 0

    R = np.full((n_states, n_actions), -np.inf)
    R[feasible] = consumption[feasible] ** alpha

    Q = np.zeros((n_states, n_actions, n_states))
    for a in range(n_actions):
        Q[:, a, a : a + B + 1] = 1 / (B + 1)

    check_transition_probabilities(Q)

    return SimpleOG(B=B, M=M, alpha=alpha, beta=beta, R=R, Q=Q)


def check_transition_probabilities(Q):
    """Check that Q[s, a, :] is a probability distribution for every s and a.

    Args:
        Q (np.ndarray): 3d array of shape (n_states, n_actions, n_states).

    Returns:
        bool: True if all checks pass; otherwise, a ValueError is raised.

    """
    Q = np.asarray(Q)

    if Q.ndim != 3 or Q.shape[0] != Q.shape[2]:
        raise ValueError(
            f"Q must have shape (n_states, n_actions, n_states). Got {Q.shape}."
        )

    if not (Q >= 0).all():
        raise ValueError("Q contains negative transition probabilities.")

    summed_transitions = Q.sum(axis=2)
    if not np.allclose(summed_transitions, 1):
        state, action = np.argwhere(~np.isclose(summed_transitions, 1))[0]
        raise ValueError(
            f"Transition probabilities do not sum to 1. For state {state} and "
            f"action {action} they sum to {summed_transitions[state, action]}."
        )

    return True
