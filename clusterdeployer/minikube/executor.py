"""Subprocess execution hook for the minikube binary."""

import logging
import subprocess
from typing import Optional, Protocol

logger = logging.getLogger(__name__)

DEFAULT_EXECUTABLE = "minikube"


class MinikubeError(Exception):
    """Raised when a minikube command fails."""

    def __init__(self, message: str, output: str = "", args: Optional[list[str]] = None):
        super().__init__(message)
        self.output = output
        self.command_args = list(args or [])


class MinikubeExecutor(Protocol):
    """Callable that runs minikube with the given environment and arguments."""

    def __call__(self, env: dict[str, str], *args: str) -> str:
        """Return the combined stdout/stderr, raise MinikubeError on failure."""


def run_minikube(
    env: dict[str, str],
    *args: str,
    executable: str = DEFAULT_EXECUTABLE,
) -> str:
    """
    Run the minikube binary and capture its combined output.

    Blocks until the process exits; no timeout is applied.

    Args:
        env: Complete environment for the child process
        *args: Arguments passed to minikube
        executable: Name or path of the minikube binary

    Returns:
        Combined stdout and stderr of the command

    Raises:
        MinikubeError: If the binary cannot be started or exits non-zero
    """
    command = " ".join([executable, *args])
    logger.debug(f"Running: {executable} {list(args)}")

    try:
        result = subprocess.run(
            [executable, *args],
            env=env,
            stdout=subprocess.PIPE,
            stderr=subprocess.STDOUT,
            encoding="utf-8",
            errors="replace",
            check=False,
        )
    except OSError as e:
        raise MinikubeError(
            f"error running command '{command}': {e}", args=list(args)
        ) from e

    output = result.stdout or ""
    logger.debug(f"Ran: {executable} {list(args)} Output: {output}")

    if result.returncode != 0:
        raise MinikubeError(
            f"error running command '{command}': exit status {result.returncode}",
            output=output,
            args=list(args),
        )

    return output


class SubprocessExecutor:
    """Default executor, bound to a particular minikube binary."""

    def __init__(self, executable: str = DEFAULT_EXECUTABLE):
        self.executable = executable

    def __call__(self, env: dict[str, str], *args: str) -> str:
        return run_minikube(env, *args, executable=self.executable)

    def __repr__(self) -> str:
        return f"SubprocessExecutor(executable={self.executable!r})"
