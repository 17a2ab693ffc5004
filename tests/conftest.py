"""
Pytest configuration and shared fixtures for hashtree tests.
"""

from collections.abc import Generator

import pytest
from prometheus_client import CollectorRegistry

from hashtree.crypto.hashers import Sha256Hasher
from hashtree.metrics.tree_metrics import TreeMetrics


class RecordingHasher:
    """Hash engine wrapping SHA-256 that records every call made on it."""

    def __init__(self) -> None:
        self.calls: list[tuple] = []
        self._inner = Sha256Hasher()

    def reset(self) -> None:
        self.calls.append(("reset",))
        self._inner.reset()

    def absorb(self, data: bytes) -> None:
        self.calls.append(("absorb", data))
        self._inner.absorb(data)

    def finalize_hex(self) -> str:
        digest = self._inner.finalize_hex()
        self.calls.append(("finalize", digest))
        return digest


@pytest.fixture
def sha256_hasher() -> Sha256Hasher:
    """Create a SHA-256 hash engine."""
    return Sha256Hasher()


@pytest.fixture
def recording_hasher() -> RecordingHasher:
    """Create a SHA-256 engine that records calls."""
    return RecordingHasher()


@pytest.fixture
def drinks() -> list[str]:
    """Four values, already a power of two."""
    return ["tea", "coffee", "lemonade", "wine"]


@pytest.fixture
def more_drinks() -> list[str]:
    """Six values, padded to eight."""
    return ["tea", "coffee", "lemonade", "wine", "pepsi", "cola"]


@pytest.fixture
def tree_metrics(monkeypatch: pytest.MonkeyPatch) -> Generator[TreeMetrics, None, None]:
    """Route build metrics to an isolated registry."""
    metrics = TreeMetrics(registry=CollectorRegistry())
    monkeypatch.setattr("hashtree.crypto.merkle.get_tree_metrics", lambda: metrics)
    yield metrics
