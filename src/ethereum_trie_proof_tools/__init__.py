"""
Defines the trie proof tool.
"""

import argparse
import sys
from typing import Optional, Sequence, Text, TextIO

from ethereum_trie_proof import __version__

from .decode import DecodeNode, decode_arguments
from .utils import get_stream_logger
from .verify import VerifyProof, verify_arguments

DESCRIPTION = """
This is the trie proof tool. It checks Merkle Patricia Trie proofs,
such as the account and storage proofs returned by eth_getProof,
against a trusted root.

You can use this to run the following tools:
    1. verify: Check that a proof justifies a key/value claim.
    2. decode: Print the content of a single RLP encoded trie node.
"""

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


def create_parser() -> argparse.ArgumentParser:
    """
    Create a command-line argument parser for the trie proof tool.
    """
    new_parser = argparse.ArgumentParser(
        description=DESCRIPTION,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    new_parser.add_argument(
        "-v",
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
        help="Show the version of the tool.",
    )
    new_parser.add_argument(
        "--log-level",
        dest="log_level",
        choices=LOG_LEVELS,
        default="WARNING",
        help="Verbosity of the messages written to stderr.",
    )

    subparsers = new_parser.add_subparsers(dest="trie_tool")

    verify_arguments(subparsers)
    decode_arguments(subparsers)

    return new_parser


def main(
    args: Optional[Sequence[Text]] = None,
    out_file: Optional[TextIO] = None,
    in_file: Optional[TextIO] = None,
) -> int:
    """Run the tools based on the given options."""
    parser = create_parser()

    options = parser.parse_args(args)

    if out_file is None:
        out_file = sys.stdout

    if in_file is None:
        in_file = sys.stdin

    get_stream_logger("trie-proof", options.log_level)
    get_stream_logger("ethereum_trie_proof", options.log_level)

    if options.trie_tool == "verify":
        verify_tool = VerifyProof(options, out_file, in_file)
        return verify_tool.run()
    elif options.trie_tool == "decode":
        decode_tool = DecodeNode(options, out_file)
        return decode_tool.run()
    else:
        parser.print_help(file=out_file)
        return 0
