"""
Proof Verification
^^^^^^^^^^^^^^^^^^

.. contents:: Table of Contents
    :backlinks: none
    :local:

Introduction
------------

Entry points that check a single proof against a trusted root. Each call
builds its own root `Node`, so independent proofs can be checked from
different threads without sharing state.
"""

import logging
from typing import Sequence

from ethereum_types.bytes import Bytes

from .crypto.hash import Hash32
from .exceptions import TrieProofException
from .node import Node

logger = logging.getLogger(__name__)


def verify_proof(
    root: Bytes,
    key: Bytes,
    value: Bytes,
    proof: Sequence[Bytes],
    *,
    should_hash_keys: bool = True,
    hash_key: bool = False,
) -> Node:
    """
    Verifies `proof` against `root` and returns the root node, with the
    nodes on the proven path filled in.

    Parameters
    ----------
    root :
        Trusted 32 byte root hash.
    key :
        Claimed key.
    value :
        Claimed value.
    proof :
        RLP encoded nodes from the root downwards.
    should_hash_keys :
        Key hashing mode of the trie.
    hash_key :
        Pass `key` through `Node.translate_key` before verifying.

    Returns
    -------
    root_node : `Node`
        The verified root.
    """
    root_node = Node(Hash32(root), should_hash_keys)
    if hash_key:
        key = root_node.translate_key(key)
    root_node.verify(key, value, proof)
    return root_node


def is_valid_proof(
    root: Bytes,
    key: Bytes,
    value: Bytes,
    proof: Sequence[Bytes],
    *,
    should_hash_keys: bool = True,
    hash_key: bool = False,
) -> bool:
    """
    Like `verify_proof`, but reports the outcome as a boolean.
    """
    try:
        verify_proof(
            root,
            key,
            value,
            proof,
            should_hash_keys=should_hash_keys,
            hash_key=hash_key,
        )
    except TrieProofException as e:
        logger.debug("proof rejected: %s: %s", type(e).__name__, e)
        return False
    return True
