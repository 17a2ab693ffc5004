"""
hashtree - Hash Engines

Defines the capability contract every hash engine must satisfy and a
hashlib-backed implementation covering the common digest families.

A hash engine is stateful: reset() clears it, absorb() feeds bytes (any
number of times) and finalize_hex() returns the lowercase hex digest and
leaves the engine ready for the next message.
"""

import hashlib
from typing import Protocol, runtime_checkable

import structlog

from hashtree.core.algorithms import HashAlgorithm
from hashtree.core.config import settings

logger = structlog.get_logger(__name__)


class HasherError(Exception):
    """Base exception for hash engine errors."""

    pass


class UnsupportedHashAlgorithmError(HasherError, ValueError):
    """Requested algorithm is not a supported fixed-length digest."""

    pass


@runtime_checkable
class Hasher(Protocol):
    """Capability contract for hash engines used by the tree builder."""

    def reset(self) -> None:
        ...

    def absorb(self, data: bytes) -> None:
        ...

    def finalize_hex(self) -> str:
        ...


class HashlibHasher:
    """
    Hash engine backed by a hashlib constructor.

    Example:
        >>> hasher = HashlibHasher("sha256")
        >>> hasher.absorb(b"tea")
        >>> hasher.finalize_hex()[:16]
        'a9f74d1ec36ebdeb'
    """

    def __init__(self, algorithm: HashAlgorithm | str = HashAlgorithm.SHA256) -> None:
        try:
            self._algorithm = HashAlgorithm(algorithm)
        except ValueError:
            raise UnsupportedHashAlgorithmError(
                f"Unsupported hash algorithm: {algorithm!r}"
            ) from None

        self._state = hashlib.new(self._algorithm.value)

    @property
    def algorithm(self) -> HashAlgorithm:
        return self._algorithm

    @property
    def name(self) -> str:
        """hashlib name of the algorithm."""
        return self._algorithm.value

    @property
    def digest_size(self) -> int:
        """Digest size in bytes."""
        return self._state.digest_size

    @property
    def hex_length(self) -> int:
        """Number of hex characters produced by finalize_hex()."""
        return self.digest_size * 2

    def reset(self) -> None:
        self._state = hashlib.new(self._algorithm.value)

    def absorb(self, data: bytes) -> None:
        self._state.update(data)

    def finalize_hex(self) -> str:
        digest = self._state.hexdigest()
        self.reset()
        return digest

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.name!r})"


class Sha256Hasher(HashlibHasher):
    """SHA-256 engine, 64 hex characters per digest."""

    def __init__(self) -> None:
        super().__init__(HashAlgorithm.SHA256)


def create_hasher(algorithm: HashAlgorithm | str | None = None) -> HashlibHasher:
    """
    Create a hash engine.

    Args:
        algorithm: Algorithm name, defaults to settings.HASH_ALGORITHM

    Returns:
        Fresh HashlibHasher

    Raises:
        UnsupportedHashAlgorithmError: If the algorithm is not supported
    """
    if algorithm is None:
        algorithm = settings.HASH_ALGORITHM

    hasher = HashlibHasher(algorithm)
    logger.debug("Created hash engine", algorithm=hasher.name)
    return hasher
