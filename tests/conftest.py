"""Pytest configuration and shared fixtures."""

import pytest
import random
import sys
import numpy as np
from pathlib import Path

# Add the source directory to the Python path
src_dir = Path(__file__).parent.parent / "src"
sys.path.insert(0, str(src_dir))


@pytest.fixture(autouse=True)
def set_random_seeds():
    """Seed both random number generators so that every test is reproducible."""
    random.seed(42)
    np.random.seed(42)

    yield

    random.seed(None)
    np.random.seed(None)


@pytest.fixture
def mutate_params():
    """Mutation parameters shared by most randomly generated objects."""
    return {
        'weight_mutate_chance': 0.5,
        'weight_mutate_amount': 0.2,
        'offset_mutate_chance': 0.5,
        'offset_mutate_amount': 0.1,
    }


@pytest.fixture
def small_network(mutate_params):
    """A random network with two hidden layers, generated serially."""
    from evopredict.phenotype.network import Network
    return Network.new_random([4, 3], 5, 2,
                              activation_thresh=0.0,
                              trait_swap_chance=0.5,
                              num_jobs=1,
                              **mutate_params)
