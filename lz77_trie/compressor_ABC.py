from abc import ABC, abstractmethod
import io
from typing import BinaryIO, Tuple


class Compressor(ABC):
    """
    Interface for stream compressors.
    Subclasses implement compress/decompress over binary streams; the class
    helpers wrap files and in-memory bytes around them.
    """

    @abstractmethod
    def compress(self, input_stream: BinaryIO, output_stream: BinaryIO) -> str:
        """
        Read all bytes from the input stream, compress them and write the
        result to the output stream.

        Args:
            input_stream: Stream with the data to compress
            output_stream: Stream receiving the compressed data

        Returns:
            One-line summary for logging
        """

    @abstractmethod
    def decompress(self, input_stream: BinaryIO, output_stream: BinaryIO) -> str:
        """
        Read compressed bytes from the input stream and write the restored
        data to the output stream.

        Returns:
            One-line summary for logging
        """

    @classmethod
    def compress_file(cls, input_file: str, output_file: str, **options) -> str:
        """
        Compress a file.

        Args:
            input_file: Path to the file to compress
            output_file: Path to the compressed output file
            **options: Constructor arguments for the compressor
        """
        compressor = cls(**options)
        with open(input_file, 'rb') as in_file, open(output_file, 'wb') as out_file:
            return compressor.compress(in_file, out_file)

    @classmethod
    def decompress_file(cls, input_file: str, output_file: str, **options) -> str:
        """Decompress a file produced by compress_file()."""
        compressor = cls(**options)
        with open(input_file, 'rb') as in_file, open(output_file, 'wb') as out_file:
            return compressor.decompress(in_file, out_file)

    @classmethod
    def compress_bytes(cls, data: bytes, **options) -> Tuple[bytes, str]:
        """
        Compress in-memory bytes.

        Returns:
            Tuple (compressed data, summary)
        """
        compressor = cls(**options)
        in_buffer = io.BytesIO(data)
        out_buffer = io.BytesIO()
        log_info = compressor.compress(in_buffer, out_buffer)
        return out_buffer.getvalue(), log_info

    @classmethod
    def decompress_bytes(cls, data: bytes, **options) -> Tuple[bytes, str]:
        """
        Decompress in-memory bytes.

        Returns:
            Tuple (restored data, summary)
        """
        compressor = cls(**options)
        in_buffer = io.BytesIO(data)
        out_buffer = io.BytesIO()
        log_info = compressor.decompress(in_buffer, out_buffer)
        return out_buffer.getvalue(), log_info
