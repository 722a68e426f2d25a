"""Logging configuration for clusterdeployer."""

import logging
import sys
from typing import Optional, TextIO

TEXT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
JSON_FORMAT = '{"time":"%(asctime)s","level":"%(levelname)s","name":"%(name)s","message":"%(message)s"}'


def setup_logging(
    level: str = "INFO",
    format_json: bool = False,
    stream: Optional[TextIO] = None,
) -> None:
    """
    Setup logging configuration.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        format_json: If True, emit one JSON object per line
        stream: Output stream for the handler (defaults to stdout)
    """
    log_level = getattr(logging, level.upper(), logging.INFO)

    logging.basicConfig(
        level=log_level,
        format=JSON_FORMAT if format_json else TEXT_FORMAT,
        handlers=[logging.StreamHandler(stream or sys.stdout)],
        force=True,
    )

    # Only the status check talks to the API server; keep its client quiet
    logging.getLogger("kubernetes").setLevel(logging.WARNING)
    logging.getLogger("urllib3").setLevel(logging.WARNING)


def level_from_verbosity(verbosity: int, default: str = "INFO") -> str:
    """
    Map a repeated -v count onto a logging level name.

    A single -v is enough to see every minikube command line and its output.
    """
    if verbosity >= 1:
        return "DEBUG"
    return default
