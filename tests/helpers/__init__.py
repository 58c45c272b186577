import json
import os
from typing import Any, Dict, List

from ethereum_rlp import rlp
from ethereum_types.bytes import Bytes

from ethereum_trie_proof.crypto.hash import Hash32, keccak256
from ethereum_trie_proof.key import (
    bytes_to_nibble_list,
    nibble_list_to_compact,
)
from ethereum_trie_proof.utils.hexadecimal import hex_to_bytes, hex_to_hash

FIXTURE_PATH = os.path.join(
    os.path.dirname(os.path.dirname(os.path.abspath(__file__))), "fixtures"
)


def load_proof_test(name: str) -> Dict[str, Any]:
    """
    Load one entry of `proof_tests.json`, with every hex string converted
    to bytes.
    """
    with open(os.path.join(FIXTURE_PATH, "proof_tests.json")) as f:
        test = json.load(f)[name]

    return {
        "root": hex_to_hash(test["root"]),
        "key": hex_to_bytes(test["key"]),
        "value": hex_to_bytes(test["value"]),
        "proof": [hex_to_bytes(entry) for entry in test["proof"]],
    }


def encode_leaf(nibbles: Bytes, value: Bytes) -> Bytes:
    return rlp.encode([nibble_list_to_compact(nibbles, True), value])


def encode_extension(nibbles: Bytes, child: Bytes) -> Bytes:
    return rlp.encode(
        [nibble_list_to_compact(nibbles, False), keccak256(child)]
    )


def encode_branch(children: Dict[int, Bytes]) -> Bytes:
    items: List[Bytes] = [b""] * 17
    for index, child in children.items():
        items[index] = keccak256(child)
    return rlp.encode(items)


#
# A small unsecured trie holding two keys that share the nibbles `1 2 3`:
#
#   extension(1 2 3) -> branch -> slot 4: leaf(a a ... a)
#                              -> slot 5: leaf(b b ... b)
#
KEY_A = bytes([0x12, 0x34]) + b"\xaa" * 30
KEY_B = bytes([0x12, 0x35]) + b"\xbb" * 30
VALUE_A = b"apple"
VALUE_B = b"banana"

LEAF_A = encode_leaf(bytes_to_nibble_list(KEY_A)[4:], VALUE_A)
LEAF_B = encode_leaf(bytes_to_nibble_list(KEY_B)[4:], VALUE_B)
BRANCH = encode_branch({4: LEAF_A, 5: LEAF_B})
EXTENSION = encode_extension(bytes([1, 2, 3]), BRANCH)
ROOT: Hash32 = keccak256(EXTENSION)

# keys as stored in the leaves: the 60 nibbles left after the branch
LEAF_KEY_A = b"\xaa" * 30
LEAF_KEY_B = b"\xbb" * 30
