"""
Decode a single trie node and print what it contains.
"""

import argparse
import logging
from typing import Any, TextIO

from ethereum_trie_proof.exceptions import NodeDecodingError
from ethereum_trie_proof.node import decode_node_data, render_node_data
from ethereum_trie_proof.utils.hexadecimal import hex_to_bytes


def decode_arguments(subparsers: argparse._SubParsersAction) -> None:
    """
    Adds the arguments for the decode tool subparser.
    """
    decode_parser = subparsers.add_parser(
        "decode", help="Decode an RLP encoded trie node."
    )
    decode_parser.add_argument(
        "node", help="Hex encoded node, as found in a proof."
    )


class DecodeNode:
    """
    Print the content of an RLP encoded trie node.
    """

    def __init__(self, options: Any, out_file: TextIO) -> None:
        self.node = options.node
        self.out_file = out_file
        self.logger = logging.getLogger("trie-proof")

    def run(self) -> int:
        """
        Decode the node given on the command line.
        """
        try:
            raw = hex_to_bytes(self.node)
        except ValueError as e:
            self.logger.error("node is not valid hex: %s", e)
            return 2

        try:
            data = decode_node_data(raw)
        except NodeDecodingError as e:
            self.out_file.write(f"error: {type(e).__name__}: {e}\n")
            return 1

        self.out_file.write(render_node_data(data) + "\n")
        return 0
