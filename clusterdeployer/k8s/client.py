"""Kubernetes client bound to a minikube-generated kubeconfig."""

import logging
from pathlib import Path
from typing import Optional, Union

from kubernetes import client, config
from kubernetes.client.rest import ApiException

logger = logging.getLogger(__name__)


class ClusterClientError(Exception):
    """Raised when the cluster cannot be reached through the kubeconfig."""

    pass


class ClusterClient:
    """Talks to the cluster described by a kubeconfig file."""

    def __init__(self, kubeconfig_path: Union[str, Path], context: Optional[str] = None):
        """
        Initialize the client.

        Args:
            kubeconfig_path: Kubeconfig written by 'minikube start'
            context: Optional context name; defaults to the file's current-context
        """
        self.kubeconfig_path = str(kubeconfig_path)
        self.context = context
        self._api_client: Optional[client.ApiClient] = None
        self._core_v1_api: Optional[client.CoreV1Api] = None
        self._initialize()

    def _initialize(self) -> None:
        """Load the kubeconfig into a dedicated API client."""
        try:
            logger.info(f"Loading Kubernetes configuration from {self.kubeconfig_path}")
            # A private Configuration keeps the process-wide default untouched
            configuration = client.Configuration()
            config.load_kube_config(
                config_file=self.kubeconfig_path,
                context=self.context,
                client_configuration=configuration,
            )
            self._api_client = client.ApiClient(configuration)
            self._core_v1_api = client.CoreV1Api(self._api_client)
        except Exception as e:
            raise ClusterClientError(
                f"Failed to load kubeconfig {self.kubeconfig_path}: {e}"
            ) from e

    @property
    def core_v1(self) -> client.CoreV1Api:
        """Get CoreV1Api client."""
        if self._core_v1_api is None:
            raise ClusterClientError("CoreV1Api not initialized")
        return self._core_v1_api

    def test_connection(self) -> bool:
        """
        Check that the API server answers.

        Returns:
            True if a namespace could be listed, False otherwise
        """
        try:
            self.core_v1.list_namespace(limit=1)
            logger.info("Kubernetes API connection test successful")
            return True
        except ApiException as e:
            logger.error(f"Kubernetes API connection test failed: {e}")
            return False
        except Exception as e:
            logger.error(f"Unexpected error during connection test: {e}")
            return False
