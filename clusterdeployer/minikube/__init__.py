"""Minikube cluster lifecycle for clusterdeployer."""

from clusterdeployer.minikube.deployer import Minikube, ProxyParseError
from clusterdeployer.minikube.executor import (
    MinikubeError,
    MinikubeExecutor,
    SubprocessExecutor,
    run_minikube,
)

__all__ = [
    "Minikube",
    "MinikubeError",
    "MinikubeExecutor",
    "ProxyParseError",
    "SubprocessExecutor",
    "run_minikube",
]
