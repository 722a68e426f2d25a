"""Configuration loader for clusterdeployer."""

import logging
import sys
from pathlib import Path
from typing import Any, Optional, Union

import yaml
from pydantic import ValidationError

from clusterdeployer.config.models import DeployerConfig

logger = logging.getLogger(__name__)

STDIN_PATH = "-"


class ConfigLoadError(Exception):
    """Raised when configuration loading fails."""

    pass


class ConfigLoader:
    """Load and parse clusterdeployer configuration files."""

    @staticmethod
    def load_from_file(file_path: Union[str, Path]) -> DeployerConfig:
        """
        Load a DeployerConfig from a YAML file.

        Args:
            file_path: Path to the YAML configuration file

        Returns:
            Validated DeployerConfig instance

        Raises:
            ConfigLoadError: If file cannot be read or parsed
            ValidationError: If configuration is invalid
        """
        path = Path(file_path)

        if not path.exists():
            raise ConfigLoadError(f"Configuration file not found: {path}")

        if not path.is_file():
            raise ConfigLoadError(f"Path is not a file: {path}")

        try:
            with open(path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigLoadError(f"Failed to parse YAML file {path}: {e}") from e
        except OSError as e:
            raise ConfigLoadError(f"Failed to read file {path}: {e}") from e

        if not isinstance(data, dict):
            raise ConfigLoadError(f"Configuration file must contain a YAML object, got {type(data).__name__}")

        try:
            config = DeployerConfig.model_validate(data)
        except ValidationError as e:
            logger.error(f"Validation error in {path}: {e}")
            raise

        logger.debug(f"Loaded cluster definition '{config.metadata.name}' from {path}")
        return config

    @staticmethod
    def load_from_yaml_string(yaml_str: str) -> DeployerConfig:
        """
        Load a DeployerConfig from a YAML string.

        Args:
            yaml_str: YAML configuration as string

        Returns:
            Validated DeployerConfig instance

        Raises:
            ConfigLoadError: If YAML cannot be parsed
            ValidationError: If configuration is invalid
        """
        try:
            data = yaml.safe_load(yaml_str)
        except yaml.YAMLError as e:
            raise ConfigLoadError(f"Failed to parse YAML string: {e}") from e

        if not isinstance(data, dict):
            raise ConfigLoadError(f"Configuration must be a YAML object, got {type(data).__name__}")

        return DeployerConfig.model_validate(data)

    @staticmethod
    def resolve(
        file_path: Optional[Union[str, Path]] = None,
        overrides: Optional[dict[str, Any]] = None,
    ) -> DeployerConfig:
        """
        Build the effective configuration from an optional file plus overrides.

        Override keys are spec field names (vm_driver, proxy, kubeconfig_path,
        executable); None values are ignored so unset command-line flags keep
        the file's value.

        Args:
            file_path: Optional YAML file to start from; "-" reads standard input
            overrides: Spec values that take precedence over the file

        Returns:
            Validated DeployerConfig instance

        Raises:
            ConfigLoadError: If the file cannot be read or parsed
            ValidationError: If the merged configuration is invalid
        """
        if not file_path:
            config = DeployerConfig()
        elif str(file_path) == STDIN_PATH:
            config = ConfigLoader.load_from_yaml_string(sys.stdin.read())
        else:
            config = ConfigLoader.load_from_file(file_path)

        updates = {k: v for k, v in (overrides or {}).items() if v is not None}
        if not updates:
            return config

        spec = config.spec.model_dump()
        spec.update(updates)
        merged = config.model_dump()
        merged["spec"] = spec
        return DeployerConfig.model_validate(merged)
