"""
Cryptographic Hash Functions
^^^^^^^^^^^^^^^^^^^^^^^^^^^^

.. contents:: Table of Contents
    :backlinks: none
    :local:

Introduction
------------

Hashing used to link trie nodes to the digests their parents commit to.
"""

from Crypto.Hash import keccak
from ethereum_types.bytes import Bytes, Bytes32

Hash32 = Bytes32


def keccak256(buffer: Bytes) -> Hash32:
    """
    Computes the keccak256 hash of the input `buffer`.

    Every trie node is identified by the keccak256 digest of its RLP
    encoding, so this is the function that ties a proof entry to the hash
    stored by its parent.

    Parameters
    ----------
    buffer :
        A raw proof entry, or a key of a secured trie.

    Returns
    -------
    hash : `Hash32`
        Node identifier (or trie key) compared against the stored hashes.
    """
    k = keccak.new(digest_bits=256)
    return Hash32(k.update(buffer).digest())
