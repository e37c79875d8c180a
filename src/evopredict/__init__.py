"""
evopredict - A minimal neuro-evolutionary predictor.

This package provides layered networks of boolean neurons whose connection
weights are evolved by random mutation and pairwise trait swapping (crossover)
rather than by gradient descent. Networks read bit-packed observations and
produce bit-packed decisions; the fitness evaluation and selection loop are
left to the embedding application.

Main components:
- genotype:  Connections, connection sets (neurons) and connection maps (layers)
- phenotype: The Network, with forward pass, mutation and crossover
- storage:   The binary model file format
- run:       Configuration
- bits:      Packing of booleans into MSB-first bytes
- errors:    Error types

Example:
    >>> from evopredict import Config, Network, pack_bits
    >>> config  = Config("config.ini")
    >>> network = Network.from_config(config)
    >>> decision = network.result(pack_bits(observation))
    >>> network.mutate()
    >>> network.save_model("best.model")
"""

__version__ = "0.1.0"

from evopredict.bits                    import pack_bits, unpack_bits
from evopredict.errors                  import (EvopredictError, ModelIOError, MalformedHeaderError,
                                                SizeMismatchError, ConstructionError)
from evopredict.genotype.connection     import Connection
from evopredict.genotype.connection_map import ConnectionMap
from evopredict.genotype.connection_set import ConnectionSet
from evopredict.phenotype.network       import Network
from evopredict.run.config              import Config

__all__ = [
    "Config",
    "Connection",
    "ConnectionSet",
    "ConnectionMap",
    "Network",
    "pack_bits",
    "unpack_bits",
    "EvopredictError",
    "ModelIOError",
    "MalformedHeaderError",
    "SizeMismatchError",
    "ConstructionError",
]
