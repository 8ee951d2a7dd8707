"""
This class implements the LZ77 compression algorithm on top of a suffix trie.
Matches are found by walking the trie of window suffixes instead of
scanning the window, and long runs are captured by self-overlapping matches.
"""

import logging
from typing import BinaryIO, Iterable, Optional

from bitarray import bitarray

from lz77_trie.compressor_ABC import Compressor
from lz77_trie.errors import InvalidConfiguration
from lz77_trie.suffix_trie import SuffixTrie
from lz77_trie.trie_utils.bit_reader import BitReader
from lz77_trie.trie_utils.bit_writer import BitWriter
from lz77_trie.trie_utils.fifo_queue import FIFOQueue
from lz77_trie.trie_utils.ring_buffer import RingBuffer

logger = logging.getLogger(__name__)

# (distance, length, literal); literal is None when the input ended on a match
Token = tuple[int, int, Optional[int]]


class LZ77(Compressor):
    """
    LZ77 compressor driven by a SuffixTrie match finder.

    Each step emits a back-reference (distance, length) followed by one
    literal byte. Encoded, a reference takes a flag bit plus DISTANCE_BITS and
    LENGTH_BITS; a literal takes a flag bit plus 8 bits.
    """

    DEFAULT_WINDOW_SIZE = 256  # the trie grows with window_size ** 2
    DEFAULT_MAX_MATCH_LENGTH = 16
    MIN_MATCH = 2  # shorter matches are cheaper as literals
    DISTANCE_BITS = 12
    LENGTH_BITS = 4
    LITERAL_TOKEN_BITS = 9

    def __init__(
        self,
        window_size: Optional[int] = None,
        max_match_length: Optional[int] = None,
        verbose: bool = False,
    ):
        if window_size is None:
            window_size = self.DEFAULT_WINDOW_SIZE
        if max_match_length is None:
            max_match_length = self.DEFAULT_MAX_MATCH_LENGTH

        max_distance = (1 << self.DISTANCE_BITS) - 1
        max_length = (1 << self.LENGTH_BITS) - 1
        if window_size > max_distance:
            raise InvalidConfiguration(
                f"Window size {window_size} exceeds the maximum encodable distance ({max_distance})."
            )
        # one slot of the match is always the trailing literal
        if max_match_length - 1 > max_length:
            raise InvalidConfiguration(
                f"Max match length {max_match_length} exceeds the maximum encodable length ({max_length + 1})."
            )

        self.window_size = window_size
        self.max_match_length = max_match_length
        self.verbose = verbose
        self.trie = SuffixTrie(window_size, max_match_length)

    def tokenize(self, data: bytes) -> list[Token]:
        """
        Split data into (distance, length, literal) tokens.
        """
        self.trie.clear()
        buffer = FIFOQueue(data)
        tokens = []
        position = 0

        while buffer.has_work():
            matched = self.trie.start_new_match(buffer)
            length = len(self.trie.get_match())

            if matched > 0:
                # a complete match is the suffix ending right at the window end
                distance = matched
                length += self.trie.extend_match(buffer)
            elif length > 0:
                distance = length + self.trie.get_distance_to_leaf()
            else:
                distance = 0

            literal = None
            if buffer.has_work():
                literal = buffer.next()
                self.trie.add_to_match(literal)

            if self.verbose:
                print(
                    f"Token at position {position}: distance={distance}, length={length}, literal={literal}"
                )

            self.trie.advance()
            tokens.append((distance, length, literal))
            position += length + (literal is not None)

        logger.debug("Tokenized %d bytes into %d tokens", len(data), len(tokens))
        return tokens

    def detokenize(self, tokens: Iterable[Token]) -> bytes:
        """
        Rebuild the data from tokens, copying from a window of the same size.
        """
        window: RingBuffer[int] = RingBuffer(self.window_size)
        output_buffer = bytearray()

        def emit(byte: int) -> None:
            if window.is_full():
                window.next()
            window.add(byte)
            output_buffer.append(byte)

        for distance, length, literal in tokens:
            if length > 0:
                if not 0 < distance <= len(window):
                    raise ValueError(
                        f"Distance {distance} is outside the window of {len(window)} bytes."
                    )
                # byte by byte, so a copy may overlap its own output
                for _ in range(length):
                    emit(window.peek(len(window) - distance))
            if literal is not None:
                emit(literal)

        return bytes(output_buffer)

    def encode(self, data: bytes) -> bitarray:
        """
        Compress data into a byte-aligned bit stream.
        """
        writer = self._write_tokens(data)
        writer.byte_align()
        return writer.get_bitarray()

    def _write_tokens(self, data: bytes) -> BitWriter:
        writer = BitWriter()
        i = 0

        for distance, length, literal in self.tokenize(data):
            if length >= self.MIN_MATCH:
                writer.write_bit(1)
                writer.write_bits_msb(distance, self.DISTANCE_BITS)
                writer.write_bits_msb(length, self.LENGTH_BITS)
            else:
                for byte in data[i : i + length]:
                    self._write_literal(writer, byte)
            i += length

            if literal is not None:
                self._write_literal(writer, literal)
                i += 1

        return writer

    def decode(self, data) -> bytes:
        """
        Decompress a bit stream produced by encode().
        """
        reader = BitReader(data)
        tokens = []

        # fewer bits than a literal token can only be padding
        while reader.remaining() >= self.LITERAL_TOKEN_BITS:
            if reader.read_bit():
                distance = reader.read_bits_msb(self.DISTANCE_BITS)
                length = reader.read_bits_msb(self.LENGTH_BITS)
                tokens.append((distance, length, None))
            else:
                tokens.append((0, 0, reader.read_bits_msb(8)))

        return self.detokenize(tokens)

    def compress(self, input_stream: BinaryIO, output_stream: BinaryIO) -> str:
        data = input_stream.read()
        encoded = self._write_tokens(data).to_bytes()
        output_stream.write(encoded)

        ratio = (1 - len(encoded) / len(data)) * 100 if data else 0.0
        log_info = (
            f"LZ77 compressed {len(data)} bytes into {len(encoded)} bytes "
            f"({ratio:.2f}% saved)"
        )
        logger.info(log_info)
        return log_info

    def decompress(self, input_stream: BinaryIO, output_stream: BinaryIO) -> str:
        data = input_stream.read()
        decoded = self.decode(data)
        output_stream.write(decoded)

        log_info = f"LZ77 decompressed {len(data)} bytes into {len(decoded)} bytes"
        logger.info(log_info)
        return log_info

    def _write_literal(self, writer: BitWriter, byte: int) -> None:
        writer.write_bit(0)
        writer.write_bits_msb(byte, 8)
