"""
hashtree - Generic Merkle Tree

Builds a binary hash tree over an ordered sequence of values and exposes the
root digest as a tamper-evident summary of the whole sequence.

    from hashtree import Sha256Hasher, build

    tree = build(["tea", "coffee", "lemonade", "wine"], Sha256Hasher())
    tree.root_hash
"""

from hashtree.crypto import (
    AsBytes,
    EmptyInputError,
    EmptyTreeError,
    HashAlgorithm,
    Hasher,
    HashlibHasher,
    MerkleTree,
    MerkleTreeError,
    Node,
    Sha256Hasher,
    build,
    create_hasher,
)

__version__ = "0.1.0"

__all__ = [
    "AsBytes",
    "EmptyInputError",
    "EmptyTreeError",
    "HashAlgorithm",
    "Hasher",
    "HashlibHasher",
    "MerkleTree",
    "MerkleTreeError",
    "Node",
    "Sha256Hasher",
    "build",
    "create_hasher",
]
