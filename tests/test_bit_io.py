"""Tests for the bitarray-backed token field reader and writer."""

import pytest
from bitarray import bitarray

from lz77_trie.trie_utils.bit_reader import BitReader
from lz77_trie.trie_utils.bit_writer import BitWriter


class TestBitWriter:
    """MSB-first field packing."""

    def test_fields_are_msb_first(self):
        """A reference token packs as flag, distance, length."""
        writer = BitWriter()
        writer.write_bit(1)
        writer.write_bits_msb(5, 12)
        writer.write_bits_msb(3, 4)
        assert writer.get_bitarray().to01() == "1" + "000000000101" + "0011"

    def test_to_bytes_pads_with_zeros(self):
        """Output is padded up to a whole byte."""
        writer = BitWriter()
        writer.write_bits_msb(0b101, 3)
        assert writer.to_bytes() == b"\xa0"
        assert len(writer.get_bitarray()) == 8

    def test_value_must_fit(self):
        """Values wider than the field are rejected."""
        writer = BitWriter()
        with pytest.raises(ValueError, match="does not fit"):
            writer.write_bits_msb(16, 4)
        with pytest.raises(ValueError, match="negative"):
            writer.write_bits_msb(0, -1)


class TestBitReader:
    """Reading fields back."""

    def test_reads_what_writer_wrote(self):
        """Fields come back in order from bytes or a bitarray."""
        writer = BitWriter()
        writer.write_bit(0)
        writer.write_bits_msb(ord("z"), 8)
        writer.write_bits_msb(4095, 12)
        data = writer.to_bytes()

        for source in (data, writer.get_bitarray()):
            reader = BitReader(source)
            assert reader.read_bit() == 0
            assert reader.read_bits_msb(8) == ord("z")
            assert reader.read_bits_msb(12) == 4095
            assert reader.remaining() == 3

    def test_reading_past_end(self):
        """Running out of bits raises EOFError."""
        reader = BitReader(bitarray("101"))
        assert reader.read_bits_msb(2) == 0b10
        with pytest.raises(EOFError):
            reader.read_bits_msb(2)
        reader.read_bit()
        with pytest.raises(EOFError):
            reader.read_bit()

