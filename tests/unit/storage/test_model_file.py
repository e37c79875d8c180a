"""
Unit tests for the binary model file format.

Tests cover the exact byte layout, round trips, and rejection of malformed files.
"""

import pytest
import struct
from unittest.mock import patch

from evopredict.errors                  import MalformedHeaderError, ModelIOError, SizeMismatchError
from evopredict.genotype.connection     import Connection
from evopredict.genotype.connection_map import ConnectionMap
from evopredict.genotype.connection_set import ConnectionSet
from evopredict.storage.model_file      import (SENTINEL, body_size, decode_model, encode_model,
                                                read_model, write_model)


# ============================================================================
# Test Fixtures
# ============================================================================

@pytest.fixture
def tiny_maps():
    """One input, one output, no hidden layers: a single map with one neuron."""
    conn   = Connection(0.5, -0.25, 0.1, 0.2, 0.3, 0.4)
    neuron = ConnectionSet([conn], 0.75, 0.6)
    return [ConnectionMap([neuron])]


@pytest.fixture
def tiny_model_bytes():
    """The expected encoding of 'tiny_maps'."""
    header = struct.pack('>QQQ', 1, 1, SENTINEL)
    body   = struct.pack('>8d', 0.5, -0.25, 0.1, 0.2, 0.3, 0.4, 0.75, 0.6)
    return header + body


@pytest.fixture
def random_maps(mutate_params):
    """Maps for a network with 5 inputs, hidden layers [4, 3] and 2 outputs."""
    return [ConnectionMap.new_random(out_size, in_size, 0.1, 0.5, **mutate_params)
            for out_size, in_size in [(4, 5), (3, 4), (2, 3)]]


# ============================================================================
# Test: Layout
# ============================================================================

class TestModelLayout:
    """Test the exact byte layout."""

    def test_encode_tiny(self, tiny_maps, tiny_model_bytes):
        assert encode_model(1, 1, [], tiny_maps) == tiny_model_bytes

    def test_decode_tiny(self, tiny_maps, tiny_model_bytes):
        num_inputs, num_outputs, layer_sizes, maps = decode_model(tiny_model_bytes)

        assert num_inputs  == 1
        assert num_outputs == 1
        assert layer_sizes == []
        assert maps == tiny_maps

    def test_header_words(self, random_maps):
        data = encode_model(5, 2, [4, 3], random_maps)
        assert struct.unpack('>5Q', data[:40]) == (5, 2, 4, 3, SENTINEL)

    def test_body_order(self, random_maps):
        """Test that connections are written map by map, neuron by neuron."""
        data   = encode_model(5, 2, [4, 3], random_maps)
        values = struct.unpack(f'>{(len(data) - 40) // 8}d', data[40:])

        first_neuron = random_maps[0].sets[0]
        expected = []
        for conn in first_neuron.conns:
            expected.extend(conn.to_values())
        expected.extend([first_neuron.activation_thresh, first_neuron.trait_swap_chance])
        assert list(values[:32]) == expected

        last_neuron = random_maps[2].sets[1]
        assert values[-2:] == (last_neuron.activation_thresh, last_neuron.trait_swap_chance)
        assert values[-8:-2] == last_neuron.conns[2].to_values()

    def test_total_size(self, random_maps):
        data = encode_model(5, 2, [4, 3], random_maps)
        assert len(data) == 40 + body_size([(4, 5), (3, 4), (2, 3)])

    def test_body_size_formula(self):
        # 8 * (6 * (20 + 12 + 6) + 2 * (4 + 3 + 2))
        assert body_size([(4, 5), (3, 4), (2, 3)]) == 8 * (6 * 38 + 2 * 9)


# ============================================================================
# Test: Round Trip
# ============================================================================

class TestModelRoundTrip:

    def test_round_trip_exact(self, random_maps):
        decoded = decode_model(encode_model(5, 2, [4, 3], random_maps))
        assert decoded == (5, 2, [4, 3], random_maps)

    def test_special_float_values(self):
        """Test that extreme doubles survive bit-exactly."""
        values = [1e308, -1e-308, 5e-324, float('inf'), -0.0, 0.1]
        neuron = ConnectionSet([Connection(*values)], float('-inf'), 1.0)
        maps   = [ConnectionMap([neuron])]

        _, _, _, decoded = decode_model(encode_model(1, 1, [], maps))
        conn = decoded[0].sets[0].conns[0]

        assert struct.pack('>6d', *conn.to_values()) == struct.pack('>6d', *values)
        assert decoded[0].sets[0].activation_thresh == float('-inf')

    def test_file_round_trip(self, tmp_path, random_maps):
        path = tmp_path / "model.bin"
        write_model(path, 5, 2, [4, 3], random_maps)
        assert read_model(path) == (5, 2, [4, 3], random_maps)

    def test_write_overwrites(self, tmp_path, tiny_maps, random_maps, tiny_model_bytes):
        path = tmp_path / "model.bin"
        write_model(path, 5, 2, [4, 3], random_maps)
        write_model(str(path), 1, 1, [], tiny_maps)
        assert path.read_bytes() == tiny_model_bytes


# ============================================================================
# Test: Encoding Errors
# ============================================================================

class TestEncodeErrors:

    def test_sentinel_layer_size_rejected(self, tiny_maps):
        with pytest.raises(ValueError, match="cannot be stored"):
            encode_model(1, 1, [SENTINEL], tiny_maps)

    def test_zero_size_rejected(self, tiny_maps):
        with pytest.raises(ValueError):
            encode_model(0, 1, [], tiny_maps)

    def test_shape_mismatch_rejected(self, random_maps):
        with pytest.raises(ValueError, match="shapes"):
            encode_model(5, 2, [4, 4], random_maps)


# ============================================================================
# Test: Malformed Files
# ============================================================================

class TestDecodeErrors:

    def test_empty_file(self):
        with pytest.raises(MalformedHeaderError):
            decode_model(b"")

    def test_header_too_short(self):
        with pytest.raises(MalformedHeaderError):
            decode_model(struct.pack('>Q', 1))

    def test_missing_sentinel(self):
        with pytest.raises(MalformedHeaderError, match="sentinel"):
            decode_model(struct.pack('>QQQQ', 5, 2, 4, 3))

    def test_truncated_sentinel(self):
        data = struct.pack('>QQ', 1, 1) + b"\xff" * 7
        with pytest.raises(MalformedHeaderError):
            decode_model(data)

    def test_zero_layer_size(self):
        with pytest.raises(MalformedHeaderError, match="empty layer"):
            decode_model(struct.pack('>QQQQ', 1, 1, 0, SENTINEL))

    def test_zero_inputs(self):
        with pytest.raises(MalformedHeaderError):
            decode_model(struct.pack('>QQQ', 0, 1, SENTINEL))

    def test_body_too_short(self, tiny_model_bytes):
        with pytest.raises(SizeMismatchError) as exc_info:
            decode_model(tiny_model_bytes[:-1])
        assert exc_info.value.expected == 64
        assert exc_info.value.actual   == 63

    def test_body_too_long(self, tiny_model_bytes):
        """Test that trailing data is rejected rather than ignored."""
        with pytest.raises(SizeMismatchError) as exc_info:
            decode_model(tiny_model_bytes + b"\x00" * 8)
        assert exc_info.value.expected == 64
        assert exc_info.value.actual   == 72

    def test_header_declares_more_layers(self, tiny_model_bytes):
        """Test a body that is valid for another header."""
        data = struct.pack('>QQQQ', 1, 1, 1, SENTINEL) + tiny_model_bytes[24:]
        with pytest.raises(SizeMismatchError):
            decode_model(data)

    def test_sentinel_like_body_ignored(self):
        """Test that only the words before the first sentinel form the header."""
        data = struct.pack('>QQQQ', 1, 1, 1, SENTINEL) + b"\xff" * 128
        num_inputs, num_outputs, layer_sizes, maps = decode_model(data)
        assert layer_sizes == [1]
        assert all(type(size) is int for size in [num_inputs, num_outputs, *layer_sizes])
        assert [m.shape for m in maps] == [(1, 1), (1, 1)]

    def test_huge_declared_size(self):
        """Test that an absurd header fails with a size mismatch, not a memory error."""
        data = struct.pack('>QQQ', 2**40, 2**40, SENTINEL) + b"\x00" * 64
        with pytest.raises(SizeMismatchError):
            decode_model(data)


# ============================================================================
# Test: I/O Errors
# ============================================================================

class TestModelIOErrors:

    def test_missing_file(self, tmp_path):
        with pytest.raises(ModelIOError) as exc_info:
            read_model(tmp_path / "missing.bin")
        assert isinstance(exc_info.value.__cause__, FileNotFoundError)

    def test_unwritable_path(self, tmp_path, tiny_maps):
        with pytest.raises(ModelIOError):
            write_model(tmp_path / "no_such_dir" / "model.bin", 1, 1, [], tiny_maps)

    def test_read_error_wrapped(self, tmp_path):
        path = tmp_path / "model.bin"
        path.write_bytes(b"")
        with patch('pathlib.Path.read_bytes', side_effect=PermissionError("denied")):
            with pytest.raises(ModelIOError, match="Failed to read"):
                read_model(path)

    def test_invalid_model_not_written(self, tmp_path, tiny_maps):
        path = tmp_path / "model.bin"
        with pytest.raises(ValueError):
            write_model(path, 1, 1, [SENTINEL], tiny_maps)
        assert not path.exists()
