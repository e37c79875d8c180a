"""
Connection Map Module

This module implements the ConnectionMap class: the full transform from one layer
of the network to the next, expressed as one ConnectionSet per output neuron.

Classes:
    ConnectionMap: The connections between two consecutive layers

Functions:
    layer_shapes(...): Shapes of the maps connecting a sequence of layers
"""

from evopredict.bits                    import pack_bits
from evopredict.genotype.connection_set import ConnectionSet

class ConnectionMap:
    """
    The mapping from one layer to the next.

    Holds one ConnectionSet per neuron of the output layer; every set has one
    connection per neuron of the input layer.

    Public Attributes:
        sets: Connection sets, one per output neuron (order matters)

    Public Properties:
        in_size:  Width of the input layer
        out_size: Width of the output layer
        shape:    (out_size, in_size)

    Public Methods:
        new_random(...):          Create a map with random connections
        layer_activations(bits):  Packed activations of the output layer
        trade_with(other):        Crossover with the corresponding map of another network
        mutate_all():             Mutate every connection
        copy():                   Independent copy of the map
    """

    def __init__(self, sets: list[ConnectionSet]):
        self.sets: list[ConnectionSet] = sets

    @classmethod
    def new_random(cls,
                   out_size            : int,
                   in_size             : int,
                   activation_thresh   : float,
                   trait_swap_chance   : float,
                   weight_mutate_chance: float,
                   weight_mutate_amount: float,
                   offset_mutate_chance: float,
                   offset_mutate_amount: float) -> 'ConnectionMap':
        """
        Create a map of 'out_size' neurons, each with 'in_size' random connections.
        Neurons are generated sequentially.
        """
        sets = [ConnectionSet.new_random(in_size,
                                         activation_thresh, trait_swap_chance,
                                         weight_mutate_chance, weight_mutate_amount,
                                         offset_mutate_chance, offset_mutate_amount)
                for _ in range(out_size)]
        return cls(sets)

    @property
    def out_size(self) -> int:
        return len(self.sets)

    @property
    def in_size(self) -> int:
        return len(self.sets[0]) if self.sets else 0

    @property
    def shape(self) -> tuple[int, int]:
        return self.out_size, self.in_size

    def layer_activations(self, input_bits) -> bytes:
        """
        Compute the activations of the output layer.

        Activations are packed MSB first, in neuron order. If the number of
        neurons is not a multiple of 8, the last byte is padded with zero bits,
        so the result is always 'ceil(out_size / 8)' bytes long.

        Parameters:
            input_bits: Packed activations of the input layer

        Returns:
            Packed activations of the output layer
        """
        return pack_bits([neuron.activated(input_bits) for neuron in self.sets])

    def trade_with(self, other: 'ConnectionMap') -> None:
        """
        Crossover, neuron by neuron, with the map at the same depth of another network.
        Both maps are expected to have the same shape.
        """
        for neuron, other_neuron in zip(self.sets, other.sets):
            neuron.trade_with(other_neuron)

    def mutate_all(self) -> None:
        for neuron in self.sets:
            neuron.mutate_all()

    def copy(self) -> 'ConnectionMap':
        return ConnectionMap([neuron.copy() for neuron in self.sets])

    def __eq__(self, other):
        if not isinstance(other, ConnectionMap):
            return NotImplemented
        return self.sets == other.sets

    def __repr__(self):
        return f"ConnectionMap(out_size={self.out_size}, in_size={self.in_size})"

def layer_shapes(layer_sizes: list[int], num_inputs: int, num_outputs: int) -> list[tuple[int, int]]:
    """
    The (out_size, in_size) shape of each map of a network with the given layers.

    Map 'i' reads from the inputs (i == 0) or from hidden layer 'i-1', and writes
    to hidden layer 'i' or, for the last map, to the outputs.
    """
    widths = [num_inputs] + list(layer_sizes) + [num_outputs]
    return [(widths[i + 1], widths[i]) for i in range(len(widths) - 1)]
