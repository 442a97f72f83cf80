import os
import sys
from pathlib import Path

import jax
import pytest
import yaml

# Obtain the test directory of the package
TEST_DIR = Path(__file__).parent

# Directory with additional resources for the testing harness
TEST_RESOURCES_DIR = TEST_DIR / "resources"

# Add the utils directory to the path so that we can import helper functions.
sys.path.append(os.path.join(os.path.dirname(__file__), "utils"))


def pytest_sessionstart(session):  # noqa: ARG001
    jax.config.update("jax_enable_x64", val=True)


@pytest.fixture(scope="session")
def load_params():
    def load_model_params(model_name):
        """Return the parameters of an example model."""
        return yaml.safe_load(
            (TEST_RESOURCES_DIR / f"{model_name}" / "params.yaml").read_text()
        )

    return load_model_params
