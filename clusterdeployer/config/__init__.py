"""Configuration management for clusterdeployer."""

from clusterdeployer.config.loader import ConfigLoadError, ConfigLoader
from clusterdeployer.config.models import DeployerConfig, Metadata, MinikubeSpec
from clusterdeployer.config.validator import ConfigValidator, ValidationResult

__all__ = [
    "ConfigLoadError",
    "ConfigLoader",
    "ConfigValidator",
    "DeployerConfig",
    "Metadata",
    "MinikubeSpec",
    "ValidationResult",
]
