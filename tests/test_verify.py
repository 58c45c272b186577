from typing import List

import pytest
from ethereum_rlp import rlp
from ethereum_types.bytes import Bytes

from ethereum_trie_proof.crypto.hash import keccak256
from ethereum_trie_proof.exceptions import (
    HashMismatch,
    InternalError,
    InvalidHashLength,
    InvalidProof,
    KeyMismatch,
    MissingProof,
    TrieProofException,
    UnknownShape,
    ValueMismatch,
)
from ethereum_trie_proof.node import (
    EMPTY_TRIE_ROOT,
    EMPTY_VALUE,
    BranchNode,
    ExtensionNode,
    LeafNode,
    Node,
    UnknownNode,
    decode_node_data,
)
from ethereum_trie_proof.proof import is_valid_proof, verify_proof
from tests.helpers import (
    BRANCH,
    EXTENSION,
    LEAF_A,
    LEAF_B,
    LEAF_KEY_A,
    LEAF_KEY_B,
    ROOT,
    VALUE_A,
    VALUE_B,
    encode_branch,
    encode_extension,
    encode_leaf,
    load_proof_test,
)


def flip_byte(data: Bytes, index: int) -> Bytes:
    tampered = bytearray(data)
    tampered[index] ^= 0x01
    return Bytes(tampered)


#
# Empty trie
#


def test_empty_root_with_empty_proof() -> None:
    test = load_proof_test("empty_trie")
    node = Node(test["root"])
    node.verify(test["key"], test["value"], test["proof"])
    assert node.hash == EMPTY_TRIE_ROOT
    assert node.data == UnknownNode()


@pytest.mark.parametrize("value", [b"", b"\x01", b"\x00\x00", b"\x08"])
def test_empty_root_rejects_other_values(value: Bytes) -> None:
    with pytest.raises(ValueMismatch):
        Node(EMPTY_TRIE_ROOT).verify(b"\x01" * 32, value, [])


def test_non_empty_root_requires_proof() -> None:
    test = load_proof_test("single_leaf")
    with pytest.raises(MissingProof):
        Node(test["root"]).verify(test["key"], EMPTY_VALUE, [])


#
# Literal vectors
#


def test_single_leaf_proof() -> None:
    test = load_proof_test("single_leaf")
    node = Node(test["root"])
    node.verify(test["key"], test["value"], test["proof"])

    assert node.hash == test["root"]
    assert node.data == LeafNode(test["key"], b"\x08")


def test_branch_then_leaf_proof() -> None:
    test = load_proof_test("branch_then_leaf")
    node = Node(test["root"])
    node.verify(test["key"], test["value"], test["proof"])

    assert isinstance(node.data, BranchNode)
    slot_0 = node.data.children[0]
    slot_12 = node.data.children[12]
    assert slot_0 is not None and slot_12 is not None

    # the leaf is the preimage of slot 0, slot 12 is never visited
    assert slot_0.hash == keccak256(test["proof"][1])
    assert slot_0.data == LeafNode(test["key"], b"\x09")
    assert slot_12.data == UnknownNode()


def test_branch_descent_matches_verifying_the_child_alone() -> None:
    test = load_proof_test("branch_then_leaf")
    branch = decode_node_data(test["proof"][0])
    assert isinstance(branch, BranchNode)
    child = branch.children[0]
    assert child is not None

    child.verify(test["key"], test["value"], test["proof"][1:])

    node = Node(test["root"])
    node.verify(test["key"], test["value"], test["proof"])
    assert isinstance(node.data, BranchNode)
    assert node.data.children[0] == child


@pytest.mark.parametrize("name", ["single_leaf", "branch_then_leaf"])
def test_tampered_entries_fail_the_hash_chain(name: str) -> None:
    test = load_proof_test(name)
    proof: List[Bytes] = test["proof"]

    for entry_index, entry in enumerate(proof):
        for byte_index in (0, len(entry) // 2, len(entry) - 1):
            tampered = list(proof)
            tampered[entry_index] = flip_byte(entry, byte_index)
            with pytest.raises(HashMismatch):
                Node(test["root"]).verify(
                    test["key"], test["value"], tampered
                )


def test_wrong_root_is_hash_mismatch() -> None:
    test = load_proof_test("single_leaf")
    with pytest.raises(HashMismatch):
        Node(keccak256(b"another root")).verify(
            test["key"], test["value"], test["proof"]
        )


def test_misordered_proof_is_hash_mismatch() -> None:
    test = load_proof_test("branch_then_leaf")
    with pytest.raises(HashMismatch):
        Node(test["root"]).verify(
            test["key"], test["value"], list(reversed(test["proof"]))
        )


@pytest.mark.parametrize("name", ["single_leaf", "branch_then_leaf"])
def test_leaf_key_must_match(name: str) -> None:
    test = load_proof_test(name)
    for byte_index in (0, len(test["key"]) - 1):
        with pytest.raises(KeyMismatch):
            Node(test["root"]).verify(
                flip_byte(test["key"], byte_index),
                test["value"],
                test["proof"],
            )


@pytest.mark.parametrize("name", ["single_leaf", "branch_then_leaf"])
def test_leaf_value_must_match(name: str) -> None:
    test = load_proof_test(name)
    with pytest.raises(ValueMismatch):
        Node(test["root"]).verify(
            test["key"], flip_byte(test["value"], 0), test["proof"]
        )
    with pytest.raises(ValueMismatch):
        Node(test["root"]).verify(
            test["key"], test["value"] + b"\x00", test["proof"]
        )


def test_first_entry_only_checks_the_top_node() -> None:
    test = load_proof_test("branch_then_leaf")
    node = Node(test["root"])
    node.verify(b"any key", b"any value", test["proof"][:1])
    assert isinstance(node.data, BranchNode)


def test_proof_cannot_continue_past_a_leaf() -> None:
    test = load_proof_test("single_leaf")
    with pytest.raises(InternalError):
        Node(test["root"]).verify(
            test["key"], test["value"], test["proof"] + [b"\xc0"]
        )


def test_branch_without_matching_child() -> None:
    test = load_proof_test("branch_then_leaf")
    unrelated = encode_leaf(bytes([1] * 63), b"\x09")
    with pytest.raises(HashMismatch):
        Node(test["root"]).verify(
            test["key"], test["value"], [test["proof"][0], unrelated]
        )


@pytest.mark.parametrize(
    "child, error",
    [
        (rlp.encode([b"\x01" * 40, b"\x02", b"\x03"]), UnknownShape),
        (rlp.encode([b"\x00\x12", b"\x11" * 40]), InvalidHashLength),
    ],
)
def test_decode_errors_below_the_root_are_preserved(
    child: Bytes, error: type
) -> None:
    branch = encode_branch({3: child})
    node = Node(keccak256(branch), False)
    with pytest.raises(error):
        node.verify(b"any key", b"any value", [branch, child])

    extension = encode_extension(bytes([7]), branch)
    node = Node(keccak256(extension), False)
    with pytest.raises(error):
        node.verify(b"any key", b"any value", [extension, branch, child])


#
# Synthetic trie with an extension node
#


def test_extension_branch_leaf_proof() -> None:
    node = Node(ROOT, False)
    node.verify(LEAF_KEY_A, VALUE_A, [EXTENSION, BRANCH, LEAF_A])

    assert isinstance(node.data, ExtensionNode)
    assert node.data.key == b"\x01\x23"
    branch = node.data.child
    assert branch.hash == keccak256(BRANCH)
    assert isinstance(branch.data, BranchNode)

    slot_4 = branch.data.children[4]
    slot_5 = branch.data.children[5]
    assert slot_4 is not None and slot_5 is not None
    assert slot_4.data == LeafNode(LEAF_KEY_A, VALUE_A)
    assert slot_5.data == UnknownNode()


def test_proofs_accumulate_on_the_same_root() -> None:
    node = Node(ROOT, False)
    node.verify(LEAF_KEY_A, VALUE_A, [EXTENSION, BRANCH, LEAF_A])
    node.verify(LEAF_KEY_B, VALUE_B, [EXTENSION, BRANCH, LEAF_B])

    assert isinstance(node.data, ExtensionNode)
    branch = node.data.child.data
    assert isinstance(branch, BranchNode)
    slot_4 = branch.children[4]
    slot_5 = branch.children[5]
    assert slot_4 is not None and slot_5 is not None
    assert slot_4.data == LeafNode(LEAF_KEY_A, VALUE_A)
    assert slot_5.data == LeafNode(LEAF_KEY_B, VALUE_B)


def test_extension_proof_with_wrong_value() -> None:
    with pytest.raises(ValueMismatch):
        Node(ROOT, False).verify(
            LEAF_KEY_A, VALUE_B, [EXTENSION, BRANCH, LEAF_A]
        )


def test_extension_proof_with_sibling_key() -> None:
    with pytest.raises(KeyMismatch):
        Node(ROOT, False).verify(
            LEAF_KEY_B, VALUE_A, [EXTENSION, BRANCH, LEAF_A]
        )


def test_extension_proof_skipping_the_branch() -> None:
    with pytest.raises(HashMismatch):
        Node(ROOT, False).verify(LEAF_KEY_A, VALUE_A, [EXTENSION, LEAF_A])


def test_extension_proof_with_tampered_branch() -> None:
    with pytest.raises(HashMismatch):
        Node(ROOT, False).verify(
            LEAF_KEY_A,
            VALUE_A,
            [EXTENSION, flip_byte(BRANCH, len(BRANCH) - 1), LEAF_A],
        )


def test_failed_verification_keeps_root_hash() -> None:
    node = Node(ROOT, False)
    with pytest.raises(TrieProofException):
        node.verify(LEAF_KEY_A, VALUE_B, [EXTENSION, BRANCH, LEAF_A])
    assert node.hash == ROOT


#
# Convenience entry points
#


def test_verify_proof_returns_the_populated_root() -> None:
    test = load_proof_test("single_leaf")
    node = verify_proof(
        test["root"], test["key"], test["value"], test["proof"]
    )
    assert node.data == LeafNode(test["key"], test["value"])


def test_verify_proof_hashes_the_key_on_request() -> None:
    preimage = b"\x00" * 32
    # keccak256 of the zero storage slot
    assert keccak256(preimage) == load_proof_test("single_leaf")["key"]

    test = load_proof_test("single_leaf")
    verify_proof(
        test["root"], preimage, test["value"], test["proof"], hash_key=True
    )
    with pytest.raises(KeyMismatch):
        verify_proof(
            test["root"],
            preimage,
            test["value"],
            test["proof"],
            should_hash_keys=False,
            hash_key=True,
        )


def test_is_valid_proof() -> None:
    test = load_proof_test("branch_then_leaf")
    assert is_valid_proof(
        test["root"], test["key"], test["value"], test["proof"]
    )
    assert not is_valid_proof(
        test["root"], test["key"], b"\x0a", test["proof"]
    )
    assert not is_valid_proof(test["root"], test["key"], test["value"], [])
    assert is_valid_proof(
        ROOT,
        LEAF_KEY_B,
        VALUE_B,
        [EXTENSION, BRANCH, LEAF_B],
        should_hash_keys=False,
    )


def test_invalid_proof_errors_share_a_base_class() -> None:
    for error in (HashMismatch, KeyMismatch, ValueMismatch, MissingProof):
        assert issubclass(error, InvalidProof)
    assert not issubclass(InternalError, InvalidProof)
