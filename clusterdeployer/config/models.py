"""Pydantic models for clusterdeployer configuration."""

from typing import Literal, Optional

from pydantic import BaseModel, Field, field_validator


class Metadata(BaseModel):
    """Metadata for a cluster definition."""

    name: str = Field(description="Name of the local cluster definition")
    labels: Optional[dict[str, str]] = Field(
        default=None,
        description="Optional labels for organization"
    )

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        """Validate cluster name."""
        if not v:
            raise ValueError("Cluster name cannot be empty")
        if len(v) > 253:
            raise ValueError("Cluster name cannot exceed 253 characters")
        return v


class MinikubeSpec(BaseModel):
    """How minikube should be invoked."""

    vm_driver: str = Field(
        default="",
        alias="vmDriver",
        description="Virtualization backend passed as --vm-driver (empty for minikube's default)"
    )
    proxy: str = Field(
        default="",
        description="HTTP proxy URL forwarded to the cluster's docker daemon"
    )
    kubeconfig_path: str = Field(
        default="minikube.kubeconfig",
        alias="kubeconfigPath",
        description="File minikube writes the cluster kubeconfig to"
    )
    executable: str = Field(
        default="minikube",
        description="Name or path of the minikube binary"
    )

    @field_validator("vm_driver", "proxy")
    @classmethod
    def strip_whitespace(cls, v: str) -> str:
        """Trim surrounding whitespace so blank values mean 'unset'."""
        return v.strip()

    @field_validator("kubeconfig_path", "executable")
    @classmethod
    def validate_not_empty(cls, v: str) -> str:
        """Validate required strings are present."""
        if not v.strip():
            raise ValueError("Value cannot be empty")
        return v

    model_config = {"populate_by_name": True}


class DeployerConfig(BaseModel):
    """Root model for a clusterdeployer cluster definition."""

    api_version: str = Field(
        default="clusterdeployer.io/v1",
        alias="apiVersion",
        description="API version"
    )
    kind: Literal["MinikubeCluster"] = Field(
        default="MinikubeCluster",
        description="Kind of resource"
    )
    metadata: Metadata = Field(
        default_factory=lambda: Metadata(name="minikube"),
        description="Cluster metadata"
    )
    spec: MinikubeSpec = Field(
        default_factory=MinikubeSpec,
        description="Minikube invocation settings"
    )

    model_config = {"populate_by_name": True}
