"""Session-wide record of diagnostics already forwarded to the host."""

from __future__ import annotations

import threading
from typing import Optional, Set, Tuple

ReportedKey = Tuple[str, str]


class ReportedSet:
    """Append-only set of (diagnostic id, project path) pairs."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._keys: Set[ReportedKey] = set()

    def add(self, diagnostic_id: str, project_path: Optional[str]) -> bool:
        """Record the pair, returning ``True`` only for the first caller."""

        key = (diagnostic_id, project_path or "")
        with self._lock:
            if key in self._keys:
                return False
            self._keys.add(key)
            return True

    def __contains__(self, key: object) -> bool:
        with self._lock:
            return key in self._keys

    def __len__(self) -> int:
        with self._lock:
            return len(self._keys)


__all__ = ["ReportedKey", "ReportedSet"]
