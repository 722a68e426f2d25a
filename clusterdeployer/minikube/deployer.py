"""Lifecycle adapter for a local minikube cluster."""

import logging
import os
from pathlib import Path
from typing import Optional, Union
from urllib.parse import urlparse

from clusterdeployer.config.models import DeployerConfig
from clusterdeployer.minikube.executor import (
    MinikubeError,
    MinikubeExecutor,
    SubprocessExecutor,
)
from clusterdeployer.utils.state import CommandHistory

logger = logging.getLogger(__name__)

KUBECONFIG_ENV_VAR = "KUBECONFIG"
# Arbitrary file name, relative to the working directory
DEFAULT_KUBECONFIG_PATH = "minikube.kubeconfig"
BOOTSTRAPPER = "kubeadm"
# Node addresses handed out by the VM drivers
PRIVATE_SUBNET = "192.168.0.0/16"


class ProxyParseError(MinikubeError):
    """Raised when the configured proxy is not a parseable URL."""

    pass


class Minikube:
    """Create, delete and fetch credentials for a minikube cluster."""

    def __init__(
        self,
        vm_driver: str = "",
        proxy: str = "",
        kubeconfig_path: Union[str, Path] = DEFAULT_KUBECONFIG_PATH,
        executor: Optional[MinikubeExecutor] = None,
    ):
        """
        Initialize the adapter.

        Args:
            vm_driver: Value for --vm-driver; empty lets minikube choose
            proxy: HTTP proxy URL forwarded to the docker daemon; empty for none
            kubeconfig_path: Where minikube writes the cluster kubeconfig
            executor: Callable used to run minikube (defaults to a subprocess)
        """
        self.vm_driver = vm_driver or ""
        self.proxy = proxy or ""
        self.kubeconfig_path = str(kubeconfig_path)
        self.executor: MinikubeExecutor = executor or SubprocessExecutor()
        self.history = CommandHistory()

    @classmethod
    def from_config(
        cls, config: DeployerConfig, executor: Optional[MinikubeExecutor] = None
    ) -> "Minikube":
        """
        Build an adapter from a loaded DeployerConfig.

        Args:
            config: Validated deployer configuration
            executor: Optional executor override; otherwise one is built for spec.executable

        Returns:
            Configured Minikube instance
        """
        spec = config.spec
        return cls(
            vm_driver=spec.vm_driver,
            proxy=spec.proxy,
            kubeconfig_path=spec.kubeconfig_path,
            executor=executor or SubprocessExecutor(spec.executable),
        )

    def start_args(self) -> list[str]:
        """
        Build the argument list for 'minikube start'.

        Returns:
            Arguments for the start command

        Raises:
            ProxyParseError: If the proxy cannot be parsed as a URL
        """
        args = ["start", f"--bootstrapper={BOOTSTRAPPER}"]
        if self.vm_driver:
            args.append(f"--vm-driver={self.vm_driver}")

        if self.proxy:
            try:
                parsed = urlparse(self.proxy)
                host = parsed.hostname
            except ValueError as e:
                raise ProxyParseError(
                    f"error parsing proxy '{self.proxy} {' '.join(args)}': {e}",
                    args=args,
                ) from e

            if not host:
                logger.error('could not parse proxy. did you forget "http://"?')
                host = ""

            args += [
                "--docker-env",
                f"http_proxy={self.proxy}",
                "--docker-env",
                f"https_proxy={self.proxy.replace('http://', 'https://', 1)}",
                "--docker-env",
                f"no_proxy={host},{PRIVATE_SUBNET}",
            ]

        return args

    def create(self) -> None:
        """
        Start the cluster and point the kubeconfig at it.

        Raises:
            ProxyParseError: If the proxy is malformed (nothing is executed)
            MinikubeError: If 'start' or 'update-context' fails
        """
        self._exec(*self.start_args())
        self._exec("update-context")
        logger.info(f"Cluster created, kubeconfig written to {self.kubeconfig_path}")

    def delete(self) -> None:
        """
        Delete the cluster and remove the local kubeconfig.

        The kubeconfig is removed even when 'minikube delete' fails. Removal
        errors are discarded: the file may never have been written.

        Raises:
            MinikubeError: If 'minikube delete' fails
        """
        try:
            self._exec("delete")
        finally:
            self._remove_kubeconfig()
        logger.info("Cluster deleted")

    def get_kubeconfig(self) -> str:
        """
        Read the kubeconfig produced by 'create'.

        Returns:
            Raw file contents

        Raises:
            OSError: If the file cannot be read
        """
        with open(self.kubeconfig_path, "r", encoding="utf-8") as f:
            return f.read()

    def _remove_kubeconfig(self) -> bool:
        """Best-effort removal of the kubeconfig file; returns True if it was removed."""
        try:
            os.remove(self.kubeconfig_path)
        except OSError as e:
            logger.debug(f"Ignoring kubeconfig removal failure for {self.kubeconfig_path}: {e}")
            return False
        return True

    def _environ(self) -> dict[str, str]:
        env = dict(os.environ)
        # Overrides any inherited value so minikube writes to our file
        env[KUBECONFIG_ENV_VAR] = self.kubeconfig_path
        return env

    def _exec(self, *args: str) -> str:
        """Run minikube with KUBECONFIG pointed at this adapter's file."""
        try:
            output = self.executor(self._environ(), *args)
        except Exception as e:
            self.history.record(list(args), success=False, error=str(e))
            raise
        self.history.record(list(args), success=True)
        return output

    def __repr__(self) -> str:
        return (
            f"Minikube(vm_driver={self.vm_driver!r}, proxy={self.proxy!r}, "
            f"kubeconfig_path={self.kubeconfig_path!r})"
        )
