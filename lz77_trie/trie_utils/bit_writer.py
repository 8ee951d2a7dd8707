from bitarray import bitarray


class BitWriter:
    """
    A class for writing LZ77 token fields to a bitarray stream.
    Fields are written MSB first; the stream can be padded to a byte boundary.
    """

    def __init__(self) -> None:
        """Initialize a new BitWriter instance with an empty bitarray."""
        self.bits = bitarray(endian="big")

    def write_bit(self, bit: int) -> None:
        self.bits.append(1 if bit else 0)

    def write_bits_msb(self, value: int, length: int) -> None:
        """
        Write bits in MSB-first order (most significant bit first).

        Args:
            value: Integer value to write
            length: Number of bits to write

        Raises:
            ValueError: If length is negative or value does not fit in length bits
        """
        if length < 0:
            raise ValueError("Length cannot be negative")
        if value < 0 or value >> length:
            raise ValueError(f"Value {value} does not fit in {length} bits")
        for i in range(length - 1, -1, -1):
            self.bits.append((value >> i) & 1)

    def byte_align(self) -> None:
        """Add padding bits to achieve byte alignment."""
        while len(self.bits) % 8 != 0:
            self.bits.append(0)

    def get_bitarray(self) -> bitarray:
        """
        Get the current state of the bit array without alignment.

        Returns:
            The current bit array
        """
        return self.bits

    def to_bytes(self) -> bytes:
        """Pad to a byte boundary and return the stream as bytes."""
        self.byte_align()
        return self.bits.tobytes()
