"""
hashtree - Hash Algorithm Names
"""

from enum import Enum


class HashAlgorithm(str, Enum):
    """Fixed-length hashlib algorithms usable as tree hash functions."""

    SHA224 = "sha224"
    SHA256 = "sha256"
    SHA384 = "sha384"
    SHA512 = "sha512"
    SHA3_256 = "sha3_256"
    SHA3_512 = "sha3_512"
    BLAKE2B = "blake2b"
    BLAKE2S = "blake2s"
