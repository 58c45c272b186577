"""
Trie Nodes
^^^^^^^^^^

.. contents:: Table of Contents
    :backlinks: none
    :local:

Introduction
------------

A proof is the list of RLP encoded nodes found on the path from the root of a
Merkle Patricia Trie down to a leaf. Each node is identified by the keccak256
hash of its encoding, so a proof can be checked against a trusted root by
walking it top-down and making sure every entry is the preimage of the hash
its parent refers to.

`Node` holds such a hash together with whatever has been learned about the
node's content so far. Content starts out as `UnknownNode` and is filled in,
exactly once, when a matching proof entry is consumed by `Node.verify`.

Only hash references are followed: children whose encoding is shorter than
32 bytes and that are therefore stored inline are rejected as malformed.
"""

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple, Union

from ethereum_rlp import Simple, rlp
from ethereum_rlp.exceptions import RLPException
from ethereum_types.bytes import Bytes
from ethereum_types.frozen import slotted_freezable

from .crypto.hash import Hash32, keccak256
from .exceptions import (
    HashMismatch,
    InternalError,
    InvalidHashLength,
    KeyMismatch,
    MalformedEncoding,
    MissingProof,
    UnknownShape,
    ValueMismatch,
)
from .key import Key
from .utils.ensure import ensure
from .utils.hexadecimal import bytes_to_hex, hex_to_hash

logger = logging.getLogger(__name__)

# note: an empty trie (regardless of whether it is secured) has root:
#
#   keccak256(RLP(b''))
#       ==
#   56e81f171bcc55a6ff8345e692c0f86e5b48e01b996cadc001622fb5e363b421 # noqa: E501,SC10
#
EMPTY_TRIE_ROOT = hex_to_hash(
    "56e81f171bcc55a6ff8345e692c0f86e5b48e01b996cadc001622fb5e363b421"
)

# value that must be claimed for any key of the empty trie
EMPTY_VALUE = Bytes(b"\x00")

LEAF_OR_EXTENSION_ITEM_COUNT = 2
BRANCH_ITEM_COUNT = 17


@dataclass
class UnknownNode:
    """Node whose hash is known but whose content has not been seen yet."""


@slotted_freezable
@dataclass
class LeafNode:
    """Leaf node in the Merkle Trie"""

    key: Bytes
    value: Bytes


@slotted_freezable
@dataclass
class ExtensionNode:
    """Extension node in the Merkle Trie"""

    key: Bytes
    child: "Node"


@slotted_freezable
@dataclass
class BranchNode:
    """
    Branch node in the Merkle Trie. Slots `0` to `15` are indexed by the next
    nibble of the path, slot `16` is the value slot.
    """

    children: Tuple[Optional["Node"], ...]


NodeData = Union[UnknownNode, LeafNode, ExtensionNode, BranchNode]


def _expect_bytes(item: Simple, description: str) -> Bytes:
    if not isinstance(item, bytes):
        raise MalformedEncoding(f"{description} is a list, expected bytes")
    return item


def _child_node(reference: Bytes, should_hash_keys: bool) -> "Node":
    ensure(
        len(reference) == 32,
        InvalidHashLength(
            f"child reference is {len(reference)} bytes, expected 32"
        ),
    )
    return Node(Hash32(reference), should_hash_keys)


def decode_node_data(raw: Bytes, should_hash_keys: bool = True) -> NodeData:
    """
    Decodes a proof entry into a leaf, extension or branch node.

    Children of extension and branch nodes are returned as fresh `Node`
    objects holding only the referenced hash.

    Parameters
    ----------
    raw :
        RLP encoding of the node.
    should_hash_keys :
        Key hashing mode given to the child nodes.

    Returns
    -------
    node_data : `NodeData`
        The decoded node. Never `UnknownNode`.
    """
    try:
        decoded = rlp.decode(raw)
    except RLPException as e:
        raise MalformedEncoding("node is not valid RLP") from e

    if isinstance(decoded, bytes):
        raise MalformedEncoding("node is an RLP string, expected a list")

    if len(decoded) == LEAF_OR_EXTENSION_ITEM_COUNT:
        path = Key.from_bytes_with_prefix(
            _expect_bytes(decoded[0], "node path")
        )
        second = _expect_bytes(decoded[1], "second item")
        if path.is_leaf:
            return LeafNode(path.without_prefix(), second)
        return ExtensionNode(
            path.without_prefix(), _child_node(second, should_hash_keys)
        )

    if len(decoded) == BRANCH_ITEM_COUNT:
        children: List[Optional[Node]] = []
        for index, item in enumerate(decoded):
            reference = _expect_bytes(item, f"branch slot {index}")
            if len(reference) == 0:
                children.append(None)
            else:
                children.append(_child_node(reference, should_hash_keys))
        return BranchNode(tuple(children))

    raise UnknownShape(f"node has {len(decoded)} items, expected 2 or 17")


def render_node_data(data: NodeData) -> str:
    """
    Human readable rendering of a node's content, with byte fields in hex.
    """
    if isinstance(data, LeafNode):
        return (
            f"LeafNode(key={bytes_to_hex(data.key)}, "
            f"value={bytes_to_hex(data.value)})"
        )
    elif isinstance(data, ExtensionNode):
        return (
            f"ExtensionNode(key={bytes_to_hex(data.key)}, "
            f"child={data.child!r})"
        )
    elif isinstance(data, BranchNode):
        slots = ", ".join(
            "None" if child is None else repr(child) for child in data.children
        )
        return f"BranchNode([{slots}])"
    else:
        return "UnknownNode"


@dataclass(repr=False)
class Node:
    """
    A trie node anchored at a trusted hash.

    `should_hash_keys` is set for the state and storage tries, where the key
    of an entry is the keccak256 hash of the account address or storage slot.
    """

    hash: Hash32
    should_hash_keys: bool = True
    data: NodeData = field(default_factory=UnknownNode)

    def __post_init__(self) -> None:
        object.__setattr__(self, "hash", Hash32(self.hash))

    def __setattr__(self, name: str, value: object) -> None:
        if name == "hash" and "hash" in self.__dict__:
            raise AttributeError("the hash of a node cannot change")
        object.__setattr__(self, name, value)

    def __repr__(self) -> str:
        return (
            f"Node(hash={bytes_to_hex(self.hash)}, "
            f"data={render_node_data(self.data)})"
        )

    def translate_key(self, raw_key: Bytes) -> Bytes:
        """
        Maps a caller supplied key to the key stored in the trie.

        Parameters
        ----------
        raw_key :
            Key as known to the caller, e.g. an address or a storage slot.

        Returns
        -------
        trie_key : `Bytes`
            `keccak256(raw_key)` if `should_hash_keys` is set, otherwise
            `raw_key` itself.
        """
        if self.should_hash_keys:
            return keccak256(raw_key)
        return raw_key

    def verify(self, key: Bytes, value: Bytes, proof: Sequence[Bytes]) -> None:
        """
        Checks that `proof` shows `key` mapping to `value` below this node.

        The first proof entry must hash to `self.hash`. It is decoded, stored
        in `self.data` if nothing was known about this node yet, and, when it
        is a leaf, compared against `key` and `value`. Remaining entries are
        verified against the child the decoded node commits to. Children are
        verified in place, so after a successful call every node on the path
        has its content filled in while untouched siblings stay
        `UnknownNode`.

        An empty proof is only accepted for the empty trie, where `value`
        must be `EMPTY_VALUE`.

        Parameters
        ----------
        key :
            Key claimed to be in the trie, compared with the path stored in
            the final leaf.
        value :
            Value claimed to be stored under `key`.
        proof :
            RLP encoded nodes, starting with the node for `self.hash`.

        Raises
        ------
        InvalidProof
            The proof does not justify the claim.
        NodeDecodingError
            A proof entry is not a valid trie node.
        InternalError
            The proof continues past a leaf.
        """
        if len(proof) == 0:
            ensure(
                self.hash == EMPTY_TRIE_ROOT,
                MissingProof(
                    f"root {bytes_to_hex(self.hash)} is not empty, "
                    "a proof is required"
                ),
            )
            ensure(
                value == EMPTY_VALUE,
                ValueMismatch(
                    f"value {bytes_to_hex(value)} claimed against the empty "
                    "root"
                ),
            )
            return

        entry = proof[0]
        entry_hash = keccak256(entry)
        ensure(
            entry_hash == self.hash,
            HashMismatch(
                f"proof entry hashes to {bytes_to_hex(entry_hash)}, "
                f"expected {bytes_to_hex(self.hash)}"
            ),
        )

        decoded = decode_node_data(entry, self.should_hash_keys)
        if isinstance(self.data, UnknownNode):
            self.data = decoded

        if isinstance(decoded, LeafNode):
            ensure(
                decoded.key == key,
                KeyMismatch(
                    f"leaf key {bytes_to_hex(decoded.key)} does not match "
                    f"{bytes_to_hex(key)}"
                ),
            )
            ensure(
                decoded.value == value,
                ValueMismatch(
                    f"leaf value {bytes_to_hex(decoded.value)} does not "
                    f"match {bytes_to_hex(value)}"
                ),
            )

        if len(proof) == 1:
            return

        remaining = proof[1:]
        data = self.data
        if isinstance(data, ExtensionNode):
            logger.debug(
                "descending from extension %s", bytes_to_hex(self.hash)
            )
            data.child.verify(key, value, remaining)
        elif isinstance(data, BranchNode):
            next_hash = keccak256(remaining[0])
            matched = False
            for index, child in enumerate(data.children):
                if child is not None and child.hash == next_hash:
                    logger.debug(
                        "descending from branch %s into slot %d",
                        bytes_to_hex(self.hash),
                        index,
                    )
                    matched = True
                    child.verify(key, value, remaining)
            ensure(
                matched,
                HashMismatch(
                    f"branch {bytes_to_hex(self.hash)} has no child "
                    f"{bytes_to_hex(next_hash)}"
                ),
            )
        else:
            raise InternalError(
                f"proof continues past {type(data).__name__} "
                f"{bytes_to_hex(self.hash)}"
            )
