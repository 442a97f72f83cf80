from jvsearch.bellman import (
    bellman_operator,
    bellman_operator_policies,
    bellman_operator_value,
)
from jvsearch.inspect_solution import create_reward_df, create_solution_df
from jvsearch.interpolation import LinInterp, create_lin_interp
from jvsearch.jv_worker import (
    JvWorker,
    create_jv_worker,
    create_jv_worker_from_params,
)
from jvsearch.numerical_integration import do_quad, quadrature_legendre
from jvsearch.toy_models.simple_og import SimpleOG, create_simple_og
