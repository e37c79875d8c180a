"""
Network Module

This module implements the Network class: a strictly feed-forward stack of
ConnectionMaps turning packed input bits into packed output bits.

Networks are meant to be driven by an external harness (for example a game),
which feeds observations to result(), scores the decisions, and evolves a
population by calling mutate() and random_trade() and keeping the survivors.

Classes:
    Network: A layered network of boolean neurons, evolved by mutation and crossover
"""

import logging
import numbers
from joblib  import Parallel, delayed
from pathlib import Path
from typing  import TYPE_CHECKING

from evopredict.bits                    import num_bytes
from evopredict.errors                  import ConstructionError
from evopredict.genotype.connection_map import ConnectionMap, layer_shapes
from evopredict.storage.model_file      import read_model, write_model
if TYPE_CHECKING:
    from evopredict.run.config import Config

logger = logging.getLogger(__name__)

class Network:
    """
    A feed-forward network of boolean neurons.

    Map 0 connects the inputs to the first hidden layer, map 'i' connects hidden
    layer 'i-1' to hidden layer 'i', and the last map connects the last hidden
    layer to the outputs. With no hidden layers, a single map connects the
    inputs directly to the outputs.

    Public Attributes:
        maps:        Connection maps, in layer order
        layer_sizes: Widths of the hidden layers
        num_inputs:  Number of input bits
        num_outputs: Number of output bits

    Public Properties:
        shapes:           (out_size, in_size) of each map
        num_input_bytes:  Length of the packed input
        num_output_bytes: Length of the packed output

    Public Methods:
        new_random(...):      Create a network with random connections
        from_config(config):  Create a random network from configuration values
        from_file(path):      Load a network from a model file
        save_model(path):     Save the network to a model file
        result(bits):         Forward pass
        mutate():             Mutate every connection
        random_trade(other):  Crossover with another network
        copy():               Independent copy of the network

    Parallelization of map generation in new_random():
        num_jobs=1:  Serial generation
        num_jobs>1:  Use specified number of parallel processes
        num_jobs=-1: Use all available CPU cores
    """

    def __init__(self,
                 maps       : list[ConnectionMap],
                 layer_sizes: list[int],
                 num_inputs : int,
                 num_outputs: int):
        self.maps       : list[ConnectionMap] = maps
        self.layer_sizes: list[int]           = list(layer_sizes)
        self.num_inputs : int                 = num_inputs
        self.num_outputs: int                 = num_outputs

    @classmethod
    def new_random(cls,
                   layer_sizes         : list[int],
                   num_inputs          : int,
                   num_outputs         : int,
                   activation_thresh   : float,
                   trait_swap_chance   : float,
                   weight_mutate_chance: float,
                   weight_mutate_amount: float,
                   offset_mutate_chance: float,
                   offset_mutate_amount: float,
                   num_jobs            : int = -1) -> 'Network':
        """
        Create a network with random connections.

        Every map is generated by an independent task; the maps are then put
        together in layer order (not in the order the tasks complete).

        Parameters:
            layer_sizes:          Widths of the hidden layers (may be empty)
            num_inputs:           Number of input bits
            num_outputs:          Number of output bits
            activation_thresh:    Activation threshold of every neuron
            trait_swap_chance:    Per-connection swap probability of every neuron
            weight_mutate_chance: Probability that a mutation re-draws a weight
            weight_mutate_amount: Half-width of the weight re-draw interval
            offset_mutate_chance: Probability that a mutation re-draws an offset
            offset_mutate_amount: Half-width of the offset re-draw interval
            num_jobs:             Number of parallel processes used to generate maps

        Raises:
            ValueError:        If a size or a mutation parameter is out of range
            ConstructionError: If generating any of the maps fails
        """
        for name, size in [('num_inputs', num_inputs), ('num_outputs', num_outputs),
                           *(('layer_sizes', size) for size in layer_sizes)]:
            if not isinstance(size, numbers.Integral):
                raise ValueError(f"'{name}' must be an integer, got {size!r}")
            if size <= 0:
                raise ValueError(f"'{name}' must be positive, got {size}")

        for name, chance in [('trait_swap_chance', trait_swap_chance),
                             ('weight_mutate_chance', weight_mutate_chance),
                             ('offset_mutate_chance', offset_mutate_chance)]:
            if not 0.0 <= chance <= 1.0:
                raise ValueError(f"'{name}' must be between 0 and 1, got {chance}")

        for name, amount in [('weight_mutate_amount', weight_mutate_amount),
                             ('offset_mutate_amount', offset_mutate_amount)]:
            if amount < 0.0:
                raise ValueError(f"'{name}' cannot be negative, got {amount}")

        shapes = layer_shapes(layer_sizes, num_inputs, num_outputs)
        try:
            maps = Parallel(num_jobs)(
                delayed(ConnectionMap.new_random)(out_size, in_size,
                                                  activation_thresh, trait_swap_chance,
                                                  weight_mutate_chance, weight_mutate_amount,
                                                  offset_mutate_chance, offset_mutate_amount)
                for out_size, in_size in shapes
            )
        except Exception as e:
            raise ConstructionError(f"Failed to generate network with map shapes {shapes}") from e

        logger.debug("Generated random network with map shapes %s", shapes)
        return cls(maps, layer_sizes, num_inputs, num_outputs)

    @classmethod
    def from_config(cls, config: 'Config', num_jobs: int | None = None) -> 'Network':
        """
        Create a random network using the values stored in a configuration.

        Parameters:
            config:   Configuration parameters
            num_jobs: Overrides 'config.num_jobs' if not None
        """
        return cls.new_random(config.layer_sizes,
                              config.num_inputs,
                              config.num_outputs,
                              config.activation_thresh,
                              config.trait_swap_chance,
                              config.weight_mutate_chance,
                              config.weight_mutate_amount,
                              config.offset_mutate_chance,
                              config.offset_mutate_amount,
                              config.num_jobs if num_jobs is None else num_jobs)

    @classmethod
    def from_file(cls, path: str | Path) -> 'Network':
        """
        Load a network from a model file.

        Raises:
            ModelIOError:         If the file cannot be read
            MalformedHeaderError: If the header is corrupt
            SizeMismatchError:    If the body does not match the header
        """
        num_inputs, num_outputs, layer_sizes, maps = read_model(path)
        network = cls(maps, layer_sizes, num_inputs, num_outputs)
        logger.debug("Loaded network with map shapes %s from '%s'", network.shapes, path)
        return network

    def save_model(self, path: str | Path) -> None:
        """
        Save the network to a model file, replacing any existing file.

        Raises:
            ModelIOError: If the file cannot be written
            ValueError:   If a layer size cannot be stored in the model format
        """
        write_model(path, self.num_inputs, self.num_outputs, self.layer_sizes, self.maps)

    @property
    def shapes(self) -> list[tuple[int, int]]:
        return [m.shape for m in self.maps]

    @property
    def num_input_bytes(self) -> int:
        """
        Length of the packed input expected by result().
        """
        return num_bytes(self.num_inputs)

    @property
    def num_output_bytes(self) -> int:
        """
        Length of the packed output returned by result().
        """
        return num_bytes(self.num_outputs)

    def result(self, input_bits) -> bytes:
        """
        Forward pass. Each map's packed output is the next map's input.

        Parameters:
            input_bits: Packed input, at least 'ceil(num_inputs / 8)' bytes

        Returns:
            Packed output, 'ceil(num_outputs / 8)' bytes
        """
        bits = bytes(input_bits)
        for m in self.maps:
            bits = m.layer_activations(bits)
        return bits

    def random_trade(self, other: 'Network') -> None:
        """
        Crossover with another network, map by map.

        Corresponding connections of the two networks are swapped at random
        (see ConnectionSet.trade_with()); both networks are modified in place.

        Raises:
            ValueError: If 'other' is this very network, or has a different shape
        """
        if other is self:
            raise ValueError("A network cannot trade with itself")
        if other.shapes != self.shapes:
            raise ValueError(f"Cannot trade between networks of shapes {self.shapes} and {other.shapes}")

        for m, other_m in zip(self.maps, other.maps):
            m.trade_with(other_m)

    def mutate(self) -> None:
        for m in self.maps:
            m.mutate_all()

    def copy(self) -> 'Network':
        return Network([m.copy() for m in self.maps], self.layer_sizes, self.num_inputs, self.num_outputs)

    def __eq__(self, other):
        if not isinstance(other, Network):
            return NotImplemented
        return (self.num_inputs  == other.num_inputs  and
                self.num_outputs == other.num_outputs and
                self.layer_sizes == other.layer_sizes and
                self.maps        == other.maps)

    def __repr__(self):
        return (f"Network(layer_sizes={self.layer_sizes}, num_inputs={self.num_inputs}, "
                f"num_outputs={self.num_outputs})")

    def __str__(self):
        widths = [self.num_inputs, *self.layer_sizes, self.num_outputs]
        return "Network[" + " => ".join(str(w) for w in widths) + "]"
