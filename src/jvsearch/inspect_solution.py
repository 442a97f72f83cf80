import numpy as np
import pandas as pd

from jvsearch.bellman import solve_on_search_grid
from jvsearch.jv_worker import JvWorker
from jvsearch.toy_models.simple_og import SimpleOG


def create_solution_df(jv: JvWorker, V) -> pd.DataFrame:
    """Apply the Bellman operator once and collect the result in a DataFrame.

    Args:
        jv (JvWorker): The model.
        V (np.ndarray): 1d array of shape (grid_size,) with the current guess of
            the value function.

    Returns:
        pd.DataFrame: DataFrame indexed by human capital with the columns
            value, search_effort, investment and offer_probability.

    """
    max_values, max_s, max_phi = solve_on_search_grid(jv, V)

    return pd.DataFrame(
        {
            "value": max_values,
            "search_effort": max_s,
            "investment": max_phi,
            "offer_probability": np.asarray(jv.pi_func(max_s)),
        },
        index=pd.Index(np.asarray(jv.x_grid), name="human_capital"),
    )


def create_reward_df(og: SimpleOG) -> pd.DataFrame:
    """Return the reward array of the discrete example with labelled axes."""
    n_states, n_actions = og.R.shape

    return pd.DataFrame(
        og.R,
        index=pd.Index(np.arange(n_states), name="state"),
        columns=pd.Index(np.arange(n_actions), name="action"),
    )
