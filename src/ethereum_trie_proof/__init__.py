"""
Ethereum Trie Proofs
^^^^^^^^^^^^^^^^^^^^
Ethereum commits to its accounts, contract storage, transactions and receipts
through the root hash of a Merkle Patricia Trie. Because each node of the
trie is named by the hash of its encoding, the nodes found on the path to an
entry are enough to convince someone who only knows the root that the entry
is (or is not) part of the trie.

This package checks such proofs: it decodes the RLP encoded nodes of a proof
and follows the chain of hashes from the trusted root down to the leaf that
holds the claimed value.
"""

from .exceptions import (  # noqa: F401
    HashMismatch,
    InternalError,
    InvalidHashLength,
    InvalidProof,
    KeyMismatch,
    MalformedEncoding,
    MissingProof,
    NodeDecodingError,
    TrieProofException,
    UnknownShape,
    ValueMismatch,
)
from .node import (  # noqa: F401
    EMPTY_TRIE_ROOT,
    EMPTY_VALUE,
    BranchNode,
    ExtensionNode,
    LeafNode,
    Node,
    NodeData,
    UnknownNode,
    decode_node_data,
)
from .proof import is_valid_proof, verify_proof  # noqa: F401

__version__ = "0.1.0"
