"""
Connection Module

This module implements the Connection class, the smallest evolvable unit of a
network: a single weighted, offset edge between an input and a neuron.

Classes:
    Connection: Weighted edge carrying its own mutation parameters
"""

import random

class Connection:
    """
    A weighted edge feeding one neuron.

    Neurons do not exist as objects; only the connections leading into them do.
    Each connection contributes 'weight * input_bit + offset' to the weighted sum
    of the neuron it feeds, and carries its own mutation parameters so that they
    travel with it when connections are swapped between networks.

    Public Attributes:
        weight:               Multiplier applied to the input bit
        offset:               Value added to the neuron's sum (whether or not the input is set)
        weight_mutate_chance: Probability that mutate() re-draws the weight
        weight_mutate_amount: Half-width of the interval the new weight is drawn from
        offset_mutate_chance: Probability that mutate() re-draws the offset
        offset_mutate_amount: Half-width of the interval the new offset is drawn from

    Public Methods:
        new_random(...):    Create a connection with random weight and offset
        mutate():           Stochastically mutate weight and offset
        to_values():        The six fields, in model file order
        from_values(...):   Inverse of to_values()
        copy():             Independent copy of the connection
    """

    # Ranges of the initial (random) weight and offset
    WEIGHT_INIT_RANGE = (-1.0, 1.0)
    OFFSET_INIT_RANGE = (-0.5, 0.5)

    def __init__(self,
                 weight              : float,
                 offset              : float,
                 weight_mutate_chance: float,
                 weight_mutate_amount: float,
                 offset_mutate_chance: float,
                 offset_mutate_amount: float):
        self.weight              : float = weight
        self.offset              : float = offset
        self.weight_mutate_chance: float = weight_mutate_chance
        self.weight_mutate_amount: float = weight_mutate_amount
        self.offset_mutate_chance: float = offset_mutate_chance
        self.offset_mutate_amount: float = offset_mutate_amount

    @classmethod
    def new_random(cls,
                   weight_mutate_chance: float,
                   weight_mutate_amount: float,
                   offset_mutate_chance: float,
                   offset_mutate_amount: float) -> 'Connection':
        """
        Create a connection with a random weight and offset.

        The weight is drawn uniformly from WEIGHT_INIT_RANGE and the offset
        from OFFSET_INIT_RANGE; the mutation parameters are stored as given.
        """
        return cls(random.uniform(*cls.WEIGHT_INIT_RANGE),
                   random.uniform(*cls.OFFSET_INIT_RANGE),
                   weight_mutate_chance,
                   weight_mutate_amount,
                   offset_mutate_chance,
                   offset_mutate_amount)

    def mutate(self) -> None:
        """
        Stochastically mutate the connection.

        Weight and offset are considered independently. With probability
        'weight_mutate_chance' the weight is replaced by a value drawn uniformly
        from [weight - weight_mutate_amount, weight + weight_mutate_amount];
        the offset is treated the same way using its own chance and amount.
        No clipping is applied, so values may drift without bound over many
        generations.
        """
        if random.random() < self.weight_mutate_chance:
            self.weight = random.uniform(self.weight - self.weight_mutate_amount,
                                         self.weight + self.weight_mutate_amount)

        if random.random() < self.offset_mutate_chance:
            self.offset = random.uniform(self.offset - self.offset_mutate_amount,
                                         self.offset + self.offset_mutate_amount)

    def to_values(self) -> tuple[float, float, float, float, float, float]:
        """
        Return the six fields of the connection, in the order they are stored in a model file.
        """
        return (self.weight,
                self.offset,
                self.weight_mutate_chance,
                self.weight_mutate_amount,
                self.offset_mutate_chance,
                self.offset_mutate_amount)

    @classmethod
    def from_values(cls, values) -> 'Connection':
        """
        Build a connection from six values ordered as in to_values().
        """
        weight, offset, w_chance, w_amount, o_chance, o_amount = (float(v) for v in values)
        return cls(weight, offset, w_chance, w_amount, o_chance, o_amount)

    def copy(self) -> 'Connection':
        return Connection(*self.to_values())

    def __eq__(self, other):
        if not isinstance(other, Connection):
            return NotImplemented
        return self.to_values() == other.to_values()

    def __repr__(self):
        return (f"Connection(weight={self.weight!r}, offset={self.offset!r}, "
                f"weight_mutate_chance={self.weight_mutate_chance!r}, "
                f"weight_mutate_amount={self.weight_mutate_amount!r}, "
                f"offset_mutate_chance={self.offset_mutate_chance!r}, "
                f"offset_mutate_amount={self.offset_mutate_amount!r})")

    def __str__(self):
        return f"[w={self.weight:+.02f},o={self.offset:+.02f}]"
