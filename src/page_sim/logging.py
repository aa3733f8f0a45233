"""Simulation event log.

Every run, comparison and rejected request leaves a structured record,
so a front end can show *what* was simulated as well as the result:

- **LogLevel** — severity levels ordered for filtering (DEBUG < ERROR).
- **LogEntry** — a single record (level, message, source, policy).
- **Logger** — an append-only in-memory log with filtering and clearing.

Design choices:
    - **IntEnum for levels** so they compare naturally with ``<``.
    - **Frozen dataclass for entries** — records are never edited.
    - **Filter returns a list** — the log is small and callers usually
      iterate more than once.
"""

from dataclasses import dataclass
from enum import IntEnum


class LogLevel(IntEnum):
    """Severity levels for log entries."""

    DEBUG = 0
    INFO = 1
    WARNING = 2
    ERROR = 3


@dataclass(frozen=True)
class LogEntry:
    """A single structured log record.

    Attributes:
        level: The severity of this event.
        message: A human-readable description of what happened.
        source: The component that produced it (e.g. "simulator", "web").
        policy: Name of the replacement policy involved, if any.

    """

    level: LogLevel
    message: str
    source: str
    policy: str | None = None

    def __str__(self) -> str:
        """Format as ``[LEVEL] source: message`` (with the policy, if set)."""
        origin = f"{self.source}/{self.policy}" if self.policy else self.source
        return f"[{self.level.name}] {origin}: {self.message}"


class Logger:
    """Append-only log buffer with filtering."""

    def __init__(self) -> None:
        """Create an empty logger."""
        self._entries: list[LogEntry] = []

    @property
    def entries(self) -> list[LogEntry]:
        """Return all log entries in chronological order."""
        return list(self._entries)

    def log(
        self,
        level: LogLevel,
        message: str,
        *,
        source: str,
        policy: str | None = None,
    ) -> None:
        """Append a new entry to the log.

        Args:
            level: Severity of the event.
            message: Human-readable event description.
            source: Component that generated the event.
            policy: Replacement policy the event concerns.

        """
        self._entries.append(LogEntry(level=level, message=message, source=source, policy=policy))

    def filter(
        self,
        *,
        min_level: LogLevel | None = None,
        source: str | None = None,
    ) -> list[LogEntry]:
        """Return entries at or above *min_level* and/or from *source*."""
        result = self._entries
        if min_level is not None:
            result = [e for e in result if e.level >= min_level]
        if source is not None:
            result = [e for e in result if e.source == source]
        return list(result)

    def clear(self) -> None:
        """Remove all log entries."""
        self._entries.clear()

    def __len__(self) -> int:
        """Return the number of entries."""
        return len(self._entries)
