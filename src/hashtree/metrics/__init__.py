"""
hashtree - Metrics Module

Prometheus metrics for Merkle tree construction.
"""

from hashtree.metrics.tree_metrics import (
    TreeMetrics,
    get_tree_metrics,
)

__all__ = [
    "TreeMetrics",
    "get_tree_metrics",
]
