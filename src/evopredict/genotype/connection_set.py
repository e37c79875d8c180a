"""
Connection Set Module

This module implements the ConnectionSet class: every connection feeding one
output neuron, together with that neuron's activation threshold.

Classes:
    ConnectionSet: The inputs, threshold and trait-swap probability of one neuron
"""

import random

from evopredict.bits                import unpack_bits
from evopredict.genotype.connection import Connection

class ConnectionSet:
    """
    One neuron, described by the connections leading into it.

    The neuron fires when the sum of 'weight * input_bit + offset' over all its
    connections exceeds 'activation_thresh'. The neuron has no state of its own
    beyond what is computed on each call.

    Public Attributes:
        conns:             Connections, one per input of the layer (order matters)
        activation_thresh: Threshold the weighted sum must exceed for the neuron to fire
        trait_swap_chance: Per-connection probability of a swap during crossover

    Public Methods:
        new_random(...):     Create a neuron with 'size' random connections
        activated(bits):     Whether the neuron fires for the given packed input
        trade_with(other):   Crossover with the corresponding neuron of another network
        mutate_all():        Mutate every connection
        copy():              Independent copy of the neuron
    """

    def __init__(self,
                 conns            : list[Connection],
                 activation_thresh: float,
                 trait_swap_chance: float):
        self.conns            : list[Connection] = conns
        self.activation_thresh: float            = activation_thresh
        self.trait_swap_chance: float            = trait_swap_chance

    @classmethod
    def new_random(cls,
                   size                : int,
                   activation_thresh   : float,
                   trait_swap_chance   : float,
                   weight_mutate_chance: float,
                   weight_mutate_amount: float,
                   offset_mutate_chance: float,
                   offset_mutate_amount: float) -> 'ConnectionSet':
        """
        Create a neuron with 'size' independently randomized connections.

        Connections are generated one after another; spawning a task per
        connection costs more than generating it.
        """
        conns = [Connection.new_random(weight_mutate_chance, weight_mutate_amount,
                                       offset_mutate_chance, offset_mutate_amount)
                 for _ in range(size)]
        return cls(conns, activation_thresh, trait_swap_chance)

    def activated(self, input_bits) -> bool:
        """
        Whether the neuron fires for the given input.

        Parameters:
            input_bits: Packed input (MSB first); must hold at least one bit per connection

        Returns:
            True if the weighted sum exceeds the activation threshold

        Raises:
            IndexError: If 'input_bits' is too short
        """
        bits = unpack_bits(input_bits, len(self.conns)).tolist()

        # The offset is added for every connection, not only the active ones
        total = 0.0
        for conn, bit in zip(self.conns, bits):
            total += conn.weight * bit + conn.offset
        return total > self.activation_thresh

    def trade_with(self, other: 'ConnectionSet') -> None:
        """
        Swap connections with the corresponding neuron of another network.

        Each pair of connections at the same position is swapped wholesale
        (weight, offset and mutation parameters) with probability equal to this
        neuron's 'trait_swap_chance'; the other neuron's chance is not used.
        """
        for i in range(min(len(self.conns), len(other.conns))):
            if random.random() < self.trait_swap_chance:
                self.conns[i], other.conns[i] = other.conns[i], self.conns[i]

    def mutate_all(self) -> None:
        for conn in self.conns:
            conn.mutate()

    def copy(self) -> 'ConnectionSet':
        return ConnectionSet([conn.copy() for conn in self.conns],
                             self.activation_thresh,
                             self.trait_swap_chance)

    def __len__(self):
        return len(self.conns)

    def __eq__(self, other):
        if not isinstance(other, ConnectionSet):
            return NotImplemented
        return (self.activation_thresh == other.activation_thresh and
                self.trait_swap_chance == other.trait_swap_chance and
                self.conns             == other.conns)

    def __repr__(self):
        return (f"ConnectionSet(size={len(self.conns)}, activation_thresh={self.activation_thresh!r}, "
                f"trait_swap_chance={self.trait_swap_chance!r})")

    def __str__(self):
        return f"<thr={self.activation_thresh:+.02f}|" + ",".join(str(c) for c in self.conns) + ">"
