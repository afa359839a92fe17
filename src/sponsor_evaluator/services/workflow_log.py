"""Append-only workflow log.

Entries are appended in order and never removed.  The one permitted
mutation is a ``pending`` entry moving to ``success`` or ``error``, and it
is addressed by entry id rather than by position.
"""

from __future__ import annotations

import logging
from typing import Any

from sponsor_evaluator.domain.entities import WorkflowLogEntry
from sponsor_evaluator.domain.enums import LogStatus

logger = logging.getLogger(__name__)


class WorkflowLog:
    """Ordered log of one controller run.

    Not shared between runs; each run creates its own instance.
    """

    def __init__(self) -> None:
        self._entries: list[WorkflowLogEntry] = []
        self._by_id: dict[str, WorkflowLogEntry] = {}

    def append(self, message: str, status: LogStatus = LogStatus.SUCCESS) -> WorkflowLogEntry:
        """Append a new entry and return it."""
        entry = WorkflowLogEntry(message=message, status=status)
        while entry.id in self._by_id:
            entry = WorkflowLogEntry(message=message, status=status)
        self._entries.append(entry)
        self._by_id[entry.id] = entry
        logger.debug("[%s] %s", status.value, message)
        return entry

    def pending(self, message: str) -> WorkflowLogEntry:
        return self.append(message, LogStatus.PENDING)

    def resolve(self, entry_id: str, status: LogStatus) -> WorkflowLogEntry:
        """Move a pending entry to its final status.

        Raises
        ------
        KeyError
            If no entry has this id.
        ValueError
            If *status* is ``PENDING`` or the entry is no longer pending.
        """
        entry = self._by_id[entry_id]
        if status is LogStatus.PENDING:
            raise ValueError("An entry can only be resolved to success or error")
        if not entry.is_pending:
            raise ValueError(
                f"Log entry {entry_id} is already {entry.status.value}"
            )
        entry.status = status
        return entry

    def succeed(self, entry_id: str) -> WorkflowLogEntry:
        return self.resolve(entry_id, LogStatus.SUCCESS)

    def fail(self, entry_id: str) -> WorkflowLogEntry:
        return self.resolve(entry_id, LogStatus.ERROR)

    def fail_pending(self) -> None:
        """Mark every still-pending entry as ``error`` (used when a run aborts)."""
        for entry in self._entries:
            if entry.is_pending:
                entry.status = LogStatus.ERROR

    def get(self, entry_id: str) -> WorkflowLogEntry:
        return self._by_id[entry_id]

    @property
    def entries(self) -> list[WorkflowLogEntry]:
        """All entries (read-only view)."""
        return list(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self):
        return iter(list(self._entries))

    def to_list(self) -> list[dict[str, Any]]:
        """Serialize to a list of dicts."""
        return [entry.to_dict() for entry in self._entries]
