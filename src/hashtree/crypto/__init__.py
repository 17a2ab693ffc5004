"""
hashtree - Cryptographic Core

Provides hash engines, tree value conversion and Merkle tree construction.
"""

from hashtree.crypto.hashers import (
    HashAlgorithm,
    Hasher,
    HasherError,
    HashlibHasher,
    Sha256Hasher,
    UnsupportedHashAlgorithmError,
    create_hasher,
)
from hashtree.crypto.merkle import (
    EmptyInputError,
    EmptyTreeError,
    MerkleTree,
    MerkleTreeError,
    Node,
    build,
    internal_node,
    leaf_node,
    next_power_of_two,
    pad_values,
)
from hashtree.crypto.values import (
    AsBytes,
    UnsupportedValueError,
    duplicate,
    freeze,
    to_bytes,
)

__all__ = [
    "AsBytes",
    "EmptyInputError",
    "EmptyTreeError",
    "HashAlgorithm",
    "Hasher",
    "HasherError",
    "HashlibHasher",
    "MerkleTree",
    "MerkleTreeError",
    "Node",
    "Sha256Hasher",
    "UnsupportedHashAlgorithmError",
    "UnsupportedValueError",
    "build",
    "create_hasher",
    "duplicate",
    "freeze",
    "internal_node",
    "leaf_node",
    "next_power_of_two",
    "pad_values",
    "to_bytes",
]
