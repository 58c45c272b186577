"""
Check a Merkle Patricia Trie proof from the command line.
"""

import argparse
import json
import logging
from dataclasses import dataclass
from typing import Any, List, Optional, TextIO

from ethereum_types.bytes import Bytes

from ethereum_trie_proof.crypto.hash import Hash32
from ethereum_trie_proof.exceptions import TrieProofException
from ethereum_trie_proof.proof import verify_proof
from ethereum_trie_proof.utils.hexadecimal import hex_to_bytes, hex_to_hash


def verify_arguments(subparsers: argparse._SubParsersAction) -> None:
    """
    Adds the arguments for the verify tool subparser.
    """
    verify_parser = subparsers.add_parser(
        "verify",
        help="Verify a proof against a trusted root.",
    )

    verify_parser.add_argument(
        "proof",
        nargs="*",
        default=[],
        help="Hex encoded proof entries, starting with the root node.",
    )
    verify_parser.add_argument(
        "--root", dest="root", type=str, default=None, help="Trusted root."
    )
    verify_parser.add_argument(
        "--key", dest="key", type=str, default=None, help="Claimed key."
    )
    verify_parser.add_argument(
        "--value", dest="value", type=str, default=None, help="Claimed value."
    )
    verify_parser.add_argument(
        "--proof-file",
        dest="proof_file",
        type=str,
        default=None,
        help=(
            "JSON file holding a list of proof entries, or an object with a "
            '"proof" list and optionally "root", "key" and "value". '
            'Use "stdin" to read from the standard input.'
        ),
    )
    verify_parser.add_argument(
        "--hash-key",
        dest="hash_key",
        action="store_true",
        default=False,
        help="Hash the key with keccak256 before looking it up.",
    )
    verify_parser.add_argument(
        "--raw-keys",
        dest="raw_keys",
        action="store_true",
        default=False,
        help="The trie stores keys verbatim (no keccak256 hashing).",
    )
    verify_parser.add_argument(
        "--show",
        dest="show",
        action="store_true",
        default=False,
        help="Print the nodes learned from a valid proof.",
    )


@dataclass
class Claim:
    """
    Everything needed to check one proof.
    """

    root: Hash32
    key: Bytes
    value: Bytes
    proof: List[Bytes]


class VerifyProof:
    """
    Verify a proof given on the command line or in a JSON file.
    """

    def __init__(
        self, options: Any, out_file: TextIO, in_file: TextIO
    ) -> None:
        self.options = options
        self.out_file = out_file
        self.in_file = in_file
        self.logger = logging.getLogger("trie-proof")

    def read_proof_file(self) -> Any:
        """
        Load the JSON document named by `--proof-file`.
        """
        if self.options.proof_file == "stdin":
            return json.load(self.in_file)
        with open(self.options.proof_file) as f:
            return json.load(f)

    def load_claim(self) -> Claim:
        """
        Combine the command line options and the proof file into a `Claim`.
        Command line options take precedence over the file.
        """
        document: Any = {}
        if self.options.proof_file is not None:
            document = self.read_proof_file()
            if isinstance(document, list):
                document = {"proof": document}
            if not isinstance(document, dict):
                raise ValueError("proof file must hold a list or an object")

        def pick(name: str) -> str:
            given: Optional[Any] = getattr(self.options, name)
            if given is None:
                given = document.get(name)
            if given is None:
                raise ValueError(f"no {name} given")
            if not isinstance(given, str):
                raise ValueError(f"{name} must be a hex string")
            return given

        entries = list(self.options.proof) or document.get("proof", [])
        if not isinstance(entries, list):
            raise ValueError("proof must be a list of hex strings")
        for index, entry in enumerate(entries):
            if not isinstance(entry, str):
                raise ValueError(f"proof entry {index} must be a hex string")

        return Claim(
            root=hex_to_hash(pick("root")),
            key=hex_to_bytes(pick("key")),
            value=hex_to_bytes(pick("value")),
            proof=[hex_to_bytes(entry) for entry in entries],
        )

    def run(self) -> int:
        """
        Verify the proof and report the outcome.
        """
        try:
            claim = self.load_claim()
        except (OSError, ValueError) as e:
            self.logger.error("cannot load proof: %s", e)
            return 2

        self.logger.info(
            "verifying %d proof entries against 0x%s",
            len(claim.proof),
            claim.root.hex(),
        )

        try:
            root_node = verify_proof(
                claim.root,
                claim.key,
                claim.value,
                claim.proof,
                should_hash_keys=not self.options.raw_keys,
                hash_key=self.options.hash_key,
            )
        except TrieProofException as e:
            self.out_file.write(f"invalid: {type(e).__name__}: {e}\n")
            return 1

        self.out_file.write("valid\n")
        if self.options.show:
            self.out_file.write(f"{root_node!r}\n")
        return 0
