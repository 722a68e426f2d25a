"""Utilities for clusterdeployer."""

from clusterdeployer.utils.logger import level_from_verbosity, setup_logging
from clusterdeployer.utils.state import CommandHistory, CommandRecord

__all__ = [
    "setup_logging",
    "level_from_verbosity",
    "CommandHistory",
    "CommandRecord",
]
