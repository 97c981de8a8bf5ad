"""Single-use handoff of diagnostics computed ahead of the analysis pass."""

from __future__ import annotations

import os
import threading
from typing import Dict, Optional, Tuple

from ..logging import get_logger
from ..models import ResolvedDiagnostic

PendingKey = Tuple[str, str, str]

_LOGGER = get_logger("state.pending")


class PendingDiagnostics:
    """Holds at most one diagnostic per (sponsorable, product, project path).

    Entries are consumed on read: ``pop`` removes what it returns, so when
    several passes race on the same project only one of them gets it.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._entries: Dict[PendingKey, ResolvedDiagnostic] = {}

    def push(
        self,
        sponsorable: str,
        product: str,
        project_path: str | os.PathLike[str],
        diagnostic: ResolvedDiagnostic,
    ) -> None:
        """Queue ``diagnostic`` for the project, replacing any earlier entry."""

        key = _key(sponsorable, product, project_path)
        with self._lock:
            replaced = key in self._entries
            self._entries[key] = diagnostic

        if replaced:
            _LOGGER.debug("Replaced pending %s for %s", diagnostic.id, key[2])

    def pop(
        self,
        sponsorable: str,
        product: str,
        project_path: str | os.PathLike[str],
    ) -> Optional[ResolvedDiagnostic]:
        """Remove and return the queued diagnostic for the project, if any."""

        key = _key(sponsorable, product, project_path)
        with self._lock:
            return self._entries.pop(key, None)

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)


def _key(sponsorable: str, product: str, project_path: str | os.PathLike[str]) -> PendingKey:
    return (sponsorable, product, os.fspath(project_path))


__all__ = ["PendingDiagnostics", "PendingKey"]
