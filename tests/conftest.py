"""Shared fixtures for the cluster matching tests."""

import math

import pytest

from cluster_match.models import Cluster, ClusterMatchConfig


def make_cluster(
    cluster_id: str,
    size: int,
    centroid=None,
    topics=None,
) -> Cluster:
    """Build a Cluster with synthetic members; only what matching looks at matters."""
    return Cluster(
        id=cluster_id,
        centroid=centroid if centroid is not None else [1.0, 0.0],
        members=[f"{cluster_id}-m{i}" for i in range(size)],
        size=size,
        density=size / (math.pi * 0.3 ** 2),
        topics=topics or [],
    )


@pytest.fixture
def cluster_factory():
    return make_cluster


@pytest.fixture
def config():
    return ClusterMatchConfig()


@pytest.fixture
def popularity_clusters():
    """Three clusters of sizes 500, 300, 100 in discovery order."""
    return [
        make_cluster("dbscan-1", 500),
        make_cluster("dbscan-2", 300),
        make_cluster("dbscan-3", 100),
    ]


@pytest.fixture
def line_points():
    """Two tight groups of five points far apart, plus one isolated point."""
    embeddings = [
        [0.0, 0.0], [0.05, 0.05], [0.1, 0.1], [0.15, 0.15], [0.2, 0.2],
        [5.0, 5.0], [5.05, 5.05], [5.1, 5.1], [5.15, 5.15], [5.2, 5.2],
        [10.0, 10.0],
    ]
    ids = [f"point-{i}" for i in range(len(embeddings))]
    return embeddings, ids
