"""
Error types raised while decoding trie nodes and verifying proofs.

Failures fall into three families so that callers can tell a malformed input
(`NodeDecodingError`) apart from a well-formed proof that does not attest to
the claim (`InvalidProof`) and from a broken invariant (`InternalError`).
"""


class TrieProofException(Exception):
    """
    Base class for all exceptions _expected_ to be thrown while checking a
    proof.
    """


class NodeDecodingError(TrieProofException):
    """
    Thrown when a proof entry cannot be decoded into a trie node.
    """


class MalformedEncoding(NodeDecodingError):
    """
    Thrown when a proof entry is not valid RLP, is not an RLP list, or
    carries an invalid hex-prefix key.
    """


class UnknownShape(NodeDecodingError):
    """
    Thrown when a node's RLP list has neither 2 nor 17 items.
    """


class InvalidHashLength(NodeDecodingError):
    """
    Thrown when a child reference in an extension or branch node is not
    exactly 32 bytes long.
    """


class InvalidProof(TrieProofException):
    """
    Thrown when a proof is well formed but does not justify the claimed
    key and value under the root.
    """


class HashMismatch(InvalidProof):
    """
    Thrown when the digest of a proof entry is not the hash its parent (or
    the trusted root) commits to.
    """


class KeyMismatch(InvalidProof):
    """
    Thrown when the leaf reached by the proof stores a different key.
    """


class ValueMismatch(InvalidProof):
    """
    Thrown when the leaf reached by the proof stores a different value, or
    when a value other than the empty sentinel is claimed against the empty
    trie.
    """


class MissingProof(InvalidProof):
    """
    Thrown when a non-empty root is checked without any proof entries.
    """


class InternalError(TrieProofException):
    """
    Thrown when the descent reaches a state that a valid trie cannot
    produce, such as a proof continuing past a leaf.
    """
