from typing import Union

from bitarray import bitarray


class BitReader:
    """
    A class for reading LZ77 token fields from a bit stream.
    Multi-bit values are read MSB first, matching BitWriter.
    """

    def __init__(self, data: Union[bitarray, bytes]) -> None:
        """
        Args:
            data: The bit stream, either as a bitarray or as raw bytes
        """
        if isinstance(data, bitarray):
            self.bits = data
        else:
            self.bits = bitarray(endian="big")
            self.bits.frombytes(bytes(data))
        self.pos = 0

    def read_bit(self) -> int:
        """
        Read one bit from the stream.

        Raises:
            EOFError: If the bit stream is exhausted
        """
        if self.pos >= len(self.bits):
            raise EOFError("Bit stream length exceeded")
        val = self.bits[self.pos]
        self.pos += 1
        return val

    def read_bits_msb(self, n: int) -> int:
        """
        Read n bits in MSB-first order and return as an integer.

        Raises:
            EOFError: If there are not enough bits to read
        """
        if self.pos + n > len(self.bits):
            raise EOFError("Not enough bits to read (MSB)")
        val = 0
        for _ in range(n):
            val = (val << 1) | self.read_bit()
        return val

    def remaining(self) -> int:
        return len(self.bits) - self.pos
