"""
Command-line front end for the suffix-trie LZ77 compressor
"""
import argparse
import logging
import sys

from lz77_trie.errors import InvalidConfiguration
from lz77_trie.LZ77 import LZ77


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description='Suffix-trie LZ77 encoder/decoder')
    parser.add_argument("mode", type=str, choices=["encode", "decode"],
                        help="set mode, encode for encoding, decode for decoding")
    parser.add_argument("input", type=str,
                        help="path to input file")
    parser.add_argument("output", type=str,
                        help="path to output file")
    parser.add_argument("--window-size", type=int, default=LZ77.DEFAULT_WINDOW_SIZE,
                        help="sliding window size in bytes, at most 4095 (default: %(default)s); "
                             "every input byte costs O(window) trie updates and the trie "
                             "holds up to window*(window+1)/2 nodes, so large windows are "
                             "slow and memory hungry")
    parser.add_argument("--max-match-length", type=int, default=LZ77.DEFAULT_MAX_MATCH_LENGTH,
                        help="match buffer size, including the trailing literal "
                             "(default: %(default)s)")
    parser.add_argument("-v", "--verbose", action="store_true",
                        help="enable debug logging")
    return parser


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    options = {
        "window_size": args.window_size,
        "max_match_length": args.max_match_length,
    }
    try:
        if args.mode == 'encode':
            log_info = LZ77.compress_file(args.input, args.output, **options)
        else:
            log_info = LZ77.decompress_file(args.input, args.output, **options)
    except InvalidConfiguration as e:
        parser.error(str(e))

    print(log_info)
    return 0


if __name__ == "__main__":
    sys.exit(main())
