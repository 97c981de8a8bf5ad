"""Model for severity/text override files written by the SponsorLink generator."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional


@dataclass(frozen=True, slots=True)
class OverrideFile:
    """An ``<id>.<severity>.<extension>`` file found in a product state directory."""

    path: Path
    diagnostic_id: str
    severity_token: str

    @classmethod
    def parse(cls, path: Path) -> Optional["OverrideFile"]:
        """Return the override described by ``path`` or ``None`` for unrelated files."""

        parts = path.stem.split(".")
        if len(parts) < 2:
            return None

        diagnostic_id, severity_token = parts[0].strip(), parts[1].strip()
        if not diagnostic_id or not severity_token:
            return None

        return cls(path=path, diagnostic_id=diagnostic_id, severity_token=severity_token)

    def read_message(self) -> str:
        """Read the file body as the diagnostic message, trimmed."""

        return self.path.read_text(encoding="utf-8-sig").strip()
