from jvsearch.toy_models.simple_og import (
    SimpleOG,
    check_transition_probabilities,
    create_simple_og,
)
