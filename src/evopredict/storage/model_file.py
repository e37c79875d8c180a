"""
Model File Module

Binary (de)serialization of networks. The layout is fixed and big-endian throughout:

Header:
    num_inputs, num_outputs, then zero or more hidden layer sizes, then a
    sentinel word with all bits set. Every header field is an 8-byte unsigned word.
    A layer of size 0xFFFFFFFFFFFFFFFF therefore cannot be stored.

Body:
    For each map, for each neuron, for each connection, six 8-byte IEEE-754 doubles:
        weight, offset, weight_mutate_chance, weight_mutate_amount,
        offset_mutate_chance, offset_mutate_amount
    followed, after the last connection of each neuron, by two more doubles:
        activation_thresh, trait_swap_chance

The body must be exactly as long as the header implies; anything else is an error.

Functions:
    encode_model(...):       Serialize network data into bytes
    decode_model(data):      Parse bytes into network data
    body_size(shapes):       Body length (in bytes) for maps of the given shapes
    read_model(path):        Read and decode a model file
    write_model(path, ...):  Encode and write a model file
"""

import logging
import numpy as np
from pathlib import Path

from evopredict.errors                  import MalformedHeaderError, ModelIOError, SizeMismatchError
from evopredict.genotype.connection     import Connection
from evopredict.genotype.connection_map import ConnectionMap, layer_shapes
from evopredict.genotype.connection_set import ConnectionSet

logger = logging.getLogger(__name__)

WORD_SIZE  = 8                   # bytes per header word
FLOAT_SIZE = 8                   # bytes per body value
SENTINEL   = 0xFFFFFFFFFFFFFFFF  # terminates the list of layer sizes

VALUES_PER_CONNECTION = 6
VALUES_PER_NEURON     = 2

_WORD_DTYPE  = np.dtype('>u8')
_FLOAT_DTYPE = np.dtype('>f8')

def body_size(shapes: list[tuple[int, int]]) -> int:
    """
    Number of body bytes needed to store maps with the given (out_size, in_size) shapes.
    """
    num_connections = sum(out_size * in_size for out_size, in_size in shapes)
    num_neurons     = sum(out_size for out_size, _ in shapes)
    return FLOAT_SIZE * (VALUES_PER_CONNECTION * num_connections + VALUES_PER_NEURON * num_neurons)

def encode_model(num_inputs : int,
                 num_outputs: int,
                 layer_sizes: list[int],
                 maps       : list[ConnectionMap]) -> bytes:
    """
    Serialize a network into the binary model format.

    Raises:
        ValueError: If a size cannot be stored in a header word (zero, negative,
                    or not below the sentinel), or if the maps do not have the
                    shapes implied by the layer sizes
    """
    for size in [num_inputs, num_outputs, *layer_sizes]:
        if not 0 < size < SENTINEL:
            raise ValueError(f"Layer size {size} cannot be stored in a model file")

    expected_shapes = layer_shapes(layer_sizes, num_inputs, num_outputs)
    actual_shapes   = [m.shape for m in maps]
    if expected_shapes != actual_shapes:
        raise ValueError(f"Maps have shapes {actual_shapes}, but the layer sizes require {expected_shapes}")

    header = np.array([num_inputs, num_outputs, *layer_sizes, SENTINEL], dtype=_WORD_DTYPE)

    values = []
    for m in maps:
        for neuron in m.sets:
            for conn in neuron.conns:
                values.extend(conn.to_values())
            values.append(neuron.activation_thresh)
            values.append(neuron.trait_swap_chance)
    body = np.array(values, dtype=_FLOAT_DTYPE)

    return header.tobytes() + body.tobytes()

def _decode_header(data: bytes) -> tuple[int, int, list[int], int]:
    """
    Parse the header. Returns (num_inputs, num_outputs, layer_sizes, header_length).
    """
    if len(data) < 2 * WORD_SIZE:
        raise MalformedHeaderError(f"Model is {len(data)} bytes long, too short to hold a header")

    # A view over the whole file; words are converted one at a time, up to the sentinel
    num_words = len(data) // WORD_SIZE
    words     = np.frombuffer(data, dtype=_WORD_DTYPE, count=num_words)

    num_inputs, num_outputs = int(words[0]), int(words[1])
    layer_sizes = []
    for word in words[2:]:
        word = int(word)
        if word == SENTINEL:
            break
        layer_sizes.append(word)
    else:
        raise MalformedHeaderError("Model header has no end-of-layers sentinel")

    if num_inputs == 0 or num_outputs == 0 or 0 in layer_sizes:
        raise MalformedHeaderError(f"Model header declares an empty layer "
                                   f"(inputs={num_inputs}, outputs={num_outputs}, layers={layer_sizes})")

    header_length = WORD_SIZE * (len(layer_sizes) + 3)
    return num_inputs, num_outputs, layer_sizes, header_length

def decode_model(data: bytes) -> tuple[int, int, list[int], list[ConnectionMap]]:
    """
    Parse a binary model.

    Parameters:
        data: Contents of a model file

    Returns:
        (num_inputs, num_outputs, layer_sizes, maps)

    Raises:
        MalformedHeaderError: If the header is truncated, lacks its sentinel or declares an empty layer
        SizeMismatchError:    If the body is not exactly as long as the header implies
    """
    num_inputs, num_outputs, layer_sizes, header_length = _decode_header(data)

    shapes   = layer_shapes(layer_sizes, num_inputs, num_outputs)
    expected = body_size(shapes)
    actual   = len(data) - header_length
    if expected != actual:
        raise SizeMismatchError(expected, actual)

    values = np.frombuffer(data, dtype=_FLOAT_DTYPE, offset=header_length).tolist()

    x = 0
    maps = []
    for out_size, in_size in shapes:
        sets = []
        for _ in range(out_size):
            conns = []
            for _ in range(in_size):
                conns.append(Connection.from_values(values[x:x + VALUES_PER_CONNECTION]))
                x += VALUES_PER_CONNECTION
            activation_thresh, trait_swap_chance = values[x], values[x + 1]
            x += VALUES_PER_NEURON
            sets.append(ConnectionSet(conns, activation_thresh, trait_swap_chance))
        maps.append(ConnectionMap(sets))

    return num_inputs, num_outputs, layer_sizes, maps

def read_model(path: str | Path) -> tuple[int, int, list[int], list[ConnectionMap]]:
    """
    Read and decode a model file. See decode_model() for the return value.

    Raises:
        ModelIOError: If the file cannot be read
        (and any error raised by decode_model)
    """
    try:
        data = Path(path).read_bytes()
    except OSError as e:
        raise ModelIOError(f"Failed to read model file '{path}'") from e

    logger.debug("Read %d bytes from model file '%s'", len(data), path)
    return decode_model(data)

def write_model(path       : str | Path,
                num_inputs : int,
                num_outputs: int,
                layer_sizes: list[int],
                maps       : list[ConnectionMap]) -> None:
    """
    Encode a network and write it to 'path', replacing any existing file.

    Raises:
        ModelIOError: If the file cannot be written
        ValueError:   If the network cannot be encoded (see encode_model())
    """
    data = encode_model(num_inputs, num_outputs, layer_sizes, maps)
    try:
        Path(path).write_bytes(data)
    except OSError as e:
        raise ModelIOError(f"Failed to write model file '{path}'") from e

    logger.debug("Wrote %d bytes to model file '%s'", len(data), path)
