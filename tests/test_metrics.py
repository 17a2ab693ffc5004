"""
Unit tests for tree build metrics.
"""

import pytest
from prometheus_client import CollectorRegistry

from hashtree.core.config import settings
from hashtree.crypto.hashers import Sha256Hasher
from hashtree.crypto.merkle import EmptyInputError, build
from hashtree.metrics.tree_metrics import TreeMetrics, get_tree_metrics


def sample(metrics: TreeMetrics, name: str, labels: dict | None = None) -> float | None:
    return metrics.registry.get_sample_value(name, labels or {})


class TestTreeMetrics:
    """Tests for the metrics container."""

    def test_record_build(self) -> None:
        """Test a recorded build updates every series."""
        metrics = TreeMetrics(registry=CollectorRegistry())
        metrics.record_build(duration=0.002, leaf_count=6, padded=2)

        assert sample(metrics, "hashtree_builds_total", {"result": "success"}) == 1.0
        assert sample(metrics, "hashtree_build_duration_seconds_count") == 1.0
        assert sample(metrics, "hashtree_leaves_sum") == 6.0
        assert sample(metrics, "hashtree_padded_leaves_total") == 2.0

    def test_record_build_without_padding(self) -> None:
        metrics = TreeMetrics(registry=CollectorRegistry())
        metrics.record_build(duration=0.001, leaf_count=4, padded=0)

        assert sample(metrics, "hashtree_padded_leaves_total") == 0.0

    def test_record_rejected(self) -> None:
        metrics = TreeMetrics(registry=CollectorRegistry())
        metrics.record_rejected("empty_input")

        assert sample(metrics, "hashtree_builds_total", {"result": "empty_input"}) == 1.0

    def test_library_info(self) -> None:
        metrics = TreeMetrics(registry=CollectorRegistry())
        metrics.set_library_info(version="0.1.0", hash_algorithm="sha256")

        labels = {"version": "0.1.0", "hash_algorithm": "sha256"}
        assert sample(metrics, "hashtree_info", labels) == 1.0

    def test_singleton(self) -> None:
        """Test the global instance is created once."""
        assert get_tree_metrics() is get_tree_metrics()


class TestBuildMetrics:
    """Tests that builds report to metrics."""

    def test_successful_build(self, tree_metrics: TreeMetrics) -> None:
        """Test a padded build is recorded."""
        build(["tea", "coffee", "lemonade", "wine", "pepsi", "cola"], Sha256Hasher())

        assert sample(tree_metrics, "hashtree_builds_total", {"result": "success"}) == 1.0
        assert sample(tree_metrics, "hashtree_leaves_sum") == 6.0
        assert sample(tree_metrics, "hashtree_padded_leaves_total") == 2.0

    def test_rejected_build(self, tree_metrics: TreeMetrics) -> None:
        """Test an empty build is recorded as rejected."""
        with pytest.raises(EmptyInputError):
            build([], Sha256Hasher())

        assert sample(tree_metrics, "hashtree_builds_total", {"result": "empty_input"}) == 1.0
        assert sample(tree_metrics, "hashtree_builds_total", {"result": "success"}) is None

    def test_metrics_disabled(
        self,
        tree_metrics: TreeMetrics,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        """Test nothing is recorded when metrics are disabled."""
        monkeypatch.setattr(settings, "METRICS_ENABLED", False)

        build(["tea", "coffee"], Sha256Hasher())

        assert sample(tree_metrics, "hashtree_builds_total", {"result": "success"}) is None
        assert sample(tree_metrics, "hashtree_leaves_count") == 0.0
