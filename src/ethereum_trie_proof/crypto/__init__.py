"""
Cryptographic primitives used when checking trie proofs.
"""
