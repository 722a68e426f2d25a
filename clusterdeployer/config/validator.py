"""Configuration validator for clusterdeployer."""

import logging
from pathlib import Path
from typing import Optional
from urllib.parse import urlparse

from clusterdeployer.config.models import DeployerConfig

logger = logging.getLogger(__name__)

# Drivers accepted by minikube's --vm-driver/--driver flag across releases
KNOWN_VM_DRIVERS = frozenset(
    {
        "docker",
        "hyperkit",
        "hyperv",
        "kvm",
        "kvm2",
        "none",
        "parallels",
        "podman",
        "qemu2",
        "ssh",
        "vfkit",
        "virtualbox",
        "vmware",
        "vmwarefusion",
        "xhyve",
    }
)


class ValidationResult:
    """Result of configuration validation."""

    def __init__(self, valid: bool, errors: Optional[list[str]] = None, warnings: Optional[list[str]] = None):
        self.valid = valid
        self.errors = errors or []
        self.warnings = warnings or []

    def __bool__(self) -> bool:
        return self.valid

    def __str__(self) -> str:
        lines = ["✓ Configuration is valid" if self.valid else "✗ Configuration is invalid"]

        if self.errors:
            lines.append("\nErrors:")
            lines.extend(f"  - {error}" for error in self.errors)

        if self.warnings:
            lines.append("\nWarnings:")
            lines.extend(f"  - {warning}" for warning in self.warnings)

        return "\n".join(lines)


class ConfigValidator:
    """Semantic checks that the pydantic schema cannot express."""

    @staticmethod
    def validate(config: DeployerConfig) -> ValidationResult:
        """
        Validate a DeployerConfig.

        A proxy without a scheme or host is only a warning: minikube is still
        started with the proxy forwarded verbatim.

        Args:
            config: The DeployerConfig to validate

        Returns:
            ValidationResult with any errors or warnings
        """
        errors: list[str] = []
        warnings: list[str] = []
        spec = config.spec

        if spec.proxy:
            try:
                parsed = urlparse(spec.proxy)
                host = parsed.hostname
            except ValueError as e:
                errors.append(f"Proxy '{spec.proxy}' is not a valid URL: {e}")
            else:
                if parsed.scheme not in ("http", "https"):
                    warnings.append(
                        f"Proxy '{spec.proxy}' has no http:// or https:// scheme. "
                        "Did you forget \"http://\"?"
                    )
                if not host:
                    warnings.append(
                        f"Could not determine a host for proxy '{spec.proxy}'; "
                        "no_proxy will only exclude the private subnet."
                    )

        if spec.vm_driver and spec.vm_driver not in KNOWN_VM_DRIVERS:
            warnings.append(
                f"Unknown VM driver '{spec.vm_driver}'. "
                f"Known drivers: {', '.join(sorted(KNOWN_VM_DRIVERS))}"
            )

        parent = Path(spec.kubeconfig_path).expanduser().parent
        if not parent.is_dir():
            warnings.append(
                f"Directory for kubeconfig '{spec.kubeconfig_path}' does not exist: {parent}"
            )

        return ValidationResult(valid=not errors, errors=errors, warnings=warnings)

