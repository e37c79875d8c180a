"""
Phenotype Package

Modules:
    network: Network class (forward pass, mutation, crossover, model files)
"""

from evopredict.phenotype.network import Network

__all__ = ['Network']
