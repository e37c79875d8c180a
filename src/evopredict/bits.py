"""
Bit Packing Module

Networks exchange data with the outside world as bit-packed byte strings:
one boolean per input (or neuron), most-significant bit first. Logical bit 'i'
lives in byte 'i // 8', at bit position '7 - i % 8'. When the number of bits
is not a multiple of 8, the unused low bits of the last byte are zero.

Functions:
    pack_bits(bits):           Pack a sequence of booleans into bytes
    unpack_bits(data, count):  Unpack bytes into an array of 0/1 values
    num_bytes(num_bits):       Number of bytes needed to hold 'num_bits' bits
"""

import numpy as np

def num_bytes(num_bits: int) -> int:
    return (num_bits + 7) // 8

def pack_bits(bits) -> bytes:
    """
    Pack a sequence of booleans (or 0/1 integers) into bytes, MSB first.

    Parameters:
        bits: Sequence of truthy/falsy values

    Returns:
        'num_bytes(len(bits))' bytes; trailing padding bits are zero
    """
    bits = np.asarray(bits, dtype=bool)
    return np.packbits(bits, bitorder='big').tobytes()

def unpack_bits(data, count: int | None = None) -> np.ndarray:
    """
    Unpack MSB-first packed bytes into an array of 0/1 values (dtype uint8).

    Parameters:
        data:  bytes, bytearray or sequence of ints in [0, 255]
        count: Number of logical bits to return; if None, all 8 * len(data) bits

    Returns:
        Array holding the first 'count' bits

    Raises:
        IndexError: If 'data' holds fewer than 'count' bits
    """
    bits = np.unpackbits(np.frombuffer(bytes(data), dtype=np.uint8), bitorder='big')
    if count is None:
        return bits
    if count > bits.size:
        raise IndexError(f"Need {count} input bits, but only {bits.size} were supplied")
    return bits[:count]
