"""
Genotype Package

This package implements the evolvable building blocks of a network.
Neurons have no representation of their own; a network is fully described
by the connections feeding each neuron.

Modules:
    connection:     Connection class
    connection_set: ConnectionSet class
    connection_map: ConnectionMap class and layer_shapes()

Exported Classes:
    Connection:    Weighted, offset edge carrying its own mutation parameters
    ConnectionSet: All connections feeding one neuron, plus its threshold
    ConnectionMap: All neurons of one layer
"""

from evopredict.genotype.connection     import Connection
from evopredict.genotype.connection_map import ConnectionMap, layer_shapes
from evopredict.genotype.connection_set import ConnectionSet

__all__ = ['Connection',
           'ConnectionMap',
           'ConnectionSet',
           'layer_shapes']
