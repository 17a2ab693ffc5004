"""
hashtree - Tree Build Metrics

Prometheus metrics for Merkle tree construction.

Metrics Categories:
- Build outcomes
- Build latency
- Input sizes and padding
"""

from prometheus_client import REGISTRY, CollectorRegistry, Counter, Histogram, Info

import structlog

from hashtree.core.algorithms import HashAlgorithm
from hashtree.core.config import settings

logger = structlog.get_logger(__name__)


class TreeMetrics:
    """
    Centralized metrics for tree construction.

    Provides visibility into:
    - Successful and rejected builds
    - Time spent hashing
    - How much padding inputs need
    """

    def __init__(self, registry: CollectorRegistry = REGISTRY) -> None:
        """Initialize all tree metrics on the given registry."""
        self.registry = registry
        self._init_build_metrics()
        self._init_size_metrics()
        self._init_info_metrics()

    def _init_build_metrics(self) -> None:
        """Initialize build outcome metrics."""
        self.builds_total = Counter(
            "hashtree_builds_total",
            "Total Merkle tree builds",
            ["result"],
            registry=self.registry,
        )

        self.build_duration = Histogram(
            "hashtree_build_duration_seconds",
            "Merkle tree build time",
            buckets=[0.0001, 0.001, 0.005, 0.01, 0.05, 0.1, 0.5, 1.0, 5.0],
            registry=self.registry,
        )

    def _init_size_metrics(self) -> None:
        """Initialize input size metrics."""
        self.tree_leaves = Histogram(
            "hashtree_leaves",
            "Number of input values per tree, before padding",
            buckets=[1, 2, 4, 16, 64, 256, 1024, 4096, 16384, 65536],
            registry=self.registry,
        )

        self.padded_leaves = Counter(
            "hashtree_padded_leaves_total",
            "Leaves added by duplicating the last value",
            registry=self.registry,
        )

    def _init_info_metrics(self) -> None:
        """Initialize info metrics."""
        self.library_info = Info(
            "hashtree",
            "hashtree library information",
            registry=self.registry,
        )

    # Convenience methods

    def record_build(
        self,
        duration: float,
        leaf_count: int,
        padded: int,
    ) -> None:
        """Record a successful tree build."""
        self.builds_total.labels(result="success").inc()
        self.build_duration.observe(duration)
        self.tree_leaves.observe(leaf_count)
        if padded > 0:
            self.padded_leaves.inc(padded)

    def record_rejected(self, reason: str) -> None:
        """Record a build rejected before any hashing."""
        self.builds_total.labels(result=reason).inc()

    def set_library_info(
        self,
        version: str,
        hash_algorithm: str,
    ) -> None:
        """Set library info labels."""
        self.library_info.info({
            "version": version,
            "hash_algorithm": hash_algorithm,
        })


# Singleton instance
_tree_metrics: TreeMetrics | None = None


def get_tree_metrics() -> TreeMetrics:
    """Get global tree metrics instance."""
    global _tree_metrics
    if _tree_metrics is None:
        _tree_metrics = TreeMetrics()
        _tree_metrics.set_library_info(
            version=settings.VERSION,
            hash_algorithm=HashAlgorithm(settings.HASH_ALGORITHM).value,
        )
        logger.debug("Tree metrics registered")
    return _tree_metrics
