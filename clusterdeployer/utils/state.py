"""In-memory record of the minikube commands a deployer has run."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

import pytz


@dataclass
class CommandRecord:
    """Record of a single minikube invocation."""

    timestamp: datetime
    args: list[str] = field(default_factory=list)
    success: bool = True
    error: Optional[str] = None

    @property
    def subcommand(self) -> Optional[str]:
        """First positional argument, e.g. 'start' or 'delete'."""
        return self.args[0] if self.args else None


class CommandHistory:
    """Keeps the commands issued by one deployer, in the order they ran."""

    def __init__(self):
        self._records: list[CommandRecord] = []

    def __len__(self) -> int:
        return len(self._records)

    def record(
        self,
        args: list[str],
        success: bool,
        error: Optional[str] = None,
        timestamp: Optional[datetime] = None,
    ) -> CommandRecord:
        """
        Append a command to the history.

        Args:
            args: Arguments passed to the minikube binary
            success: Whether the command exited cleanly
            error: Error message if the command failed
            timestamp: Time of the command (defaults to now, UTC)

        Returns:
            The stored CommandRecord
        """
        entry = CommandRecord(
            timestamp=timestamp or datetime.now(pytz.UTC),
            args=list(args),
            success=success,
            error=error,
        )
        self._records.append(entry)
        return entry

    def get_history(
        self,
        subcommand: Optional[str] = None,
        limit: Optional[int] = None,
    ) -> list[CommandRecord]:
        """
        Get recorded commands.

        Args:
            subcommand: Only return commands whose first argument matches
            limit: Maximum number of records to return

        Returns:
            List of command records, most recently issued first
        """
        filtered = self._records
        if subcommand is not None:
            filtered = [r for r in filtered if r.subcommand == subcommand]

        # Records are appended in call order; timestamps can tie on a coarse clock
        filtered = list(reversed(filtered))

        if limit is not None:
            filtered = filtered[:limit]

        return filtered

    def last(self) -> Optional[CommandRecord]:
        """Most recently recorded command, if any."""
        return self._records[-1] if self._records else None

    def clear(self) -> None:
        """Forget every recorded command."""
        self._records.clear()
