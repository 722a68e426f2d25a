"""Kubernetes client integration for clusterdeployer."""

from clusterdeployer.k8s.client import ClusterClient, ClusterClientError

__all__ = ["ClusterClient", "ClusterClientError"]
