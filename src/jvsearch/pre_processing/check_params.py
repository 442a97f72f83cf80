from typing import Dict

import numpy as np
import pandas as pd

JV_WORKER_PARAMS = {
    "A": float,
    "alpha": float,
    "beta": float,
    "grid_size": int,
    "epsilon": float,
    "n_quad_points": int,
}


def process_params(params) -> Dict[str, float]:
    """Transforms params into a dictionary of jv worker options.

    Args:
        params (dict or pandas.Series or pandas.DataFrame): Model parameters. A
            DataFrame must hold the parameters in a column named ``value``.

    Returns:
        dict: Dictionary of model parameters.

    """
    if isinstance(params, pd.DataFrame):
        if "value" not in params.columns:
            raise ValueError("params DataFrame must contain a 'value' column.")
        params = params["value"]

    if isinstance(params, pd.Series):
        params = params.to_dict()

    if not isinstance(params, dict):
        raise ValueError(
            "params must be a dictionary, a pandas Series or a pandas DataFrame."
        )

    unknown = set(params) - set(JV_WORKER_PARAMS)
    if unknown:
        raise ValueError(
            f"params contains unknown parameters: {sorted(unknown)}. Allowed are "
            f"{list(JV_WORKER_PARAMS)}."
        )

    processed_params = {}
    for name, value in params.items():
        cast = JV_WORKER_PARAMS[name]
        if not np.isfinite(value):
            raise ValueError(f"{name} must be finite. Got {value}.")
        if cast is int and float(value) != int(value):
            raise ValueError(f"{name} must be an integer. Got {value}.")
        processed_params[name] = cast(value)

    return processed_params


def check_jv_worker_params(A, alpha, beta, grid_size, epsilon, n_quad_points):
    """Check the scalar options of the job search model."""

    if not A > 0:
        raise ValueError(f"A must be positive. Got {A}.")

    _check_open_unit_interval("alpha", alpha)
    _check_open_unit_interval("beta", beta)

    if not _is_integer(grid_size):
        raise ValueError(f"grid_size must be an integer. Got {grid_size}.")
    if grid_size < 2:
        raise ValueError(f"grid_size must be at least 2. Got {grid_size}.")

    # Both controls start at epsilon, so (epsilon, epsilon) has to be feasible.
    if not 0 < epsilon < 0.5:
        raise ValueError(f"epsilon must lie in (0, 0.5). Got {epsilon}.")

    if not _is_integer(n_quad_points):
        raise ValueError(f"n_quad_points must be an integer. Got {n_quad_points}.")
    if n_quad_points < 1:
        raise ValueError(f"n_quad_points must be at least 1. Got {n_quad_points}.")


def check_simple_og_params(B, M, alpha, beta):
    """Check the options of the discrete optimal growth example."""

    for name, value in (("B", B), ("M", M)):
        if not _is_integer(value):
            raise ValueError(f"{name} must be an integer. Got {value}.")
        if value < 0:
            raise ValueError(f"{name} must be non-negative. Got {value}.")

    _check_open_unit_interval("alpha", alpha)
    _check_open_unit_interval("beta", beta)


def _check_open_unit_interval(name, value):
    if not 0 < value < 1:
        raise ValueError(f"{name} must lie in (0, 1). Got {value}.")


def _is_integer(value):
    return isinstance(value, (int, np.integer)) and not isinstance(value, bool)
