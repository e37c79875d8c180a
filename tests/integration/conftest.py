"""
Shared fixtures for integration tests.
"""

import pytest

from evopredict.bits import pack_bits


@pytest.fixture
def parity_cases():
    """All 4-bit observations, with their parity as the expected decision."""
    cases = []
    for value in range(16):
        bits = [(value >> (3 - i)) & 1 for i in range(4)]
        cases.append((pack_bits(bits), sum(bits) % 2))
    return cases


@pytest.fixture
def evaluate_fitness(parity_cases):
    """
    Fitness function: number of observations for which
    the network's first output bit is the expected decision.
    """
    def evaluate(network):
        fitness = 0
        for observation, expected in parity_cases:
            decision = network.result(observation)[0] >> 7
            fitness += int(decision == expected)
        return fitness
    return evaluate
