"""Lifetime scope for the shared pending and reported state."""

from __future__ import annotations

from dataclasses import dataclass, field

from .pending import PendingDiagnostics
from .reported import ReportedSet


@dataclass(slots=True)
class AnalysisSession:
    """State shared by every analyzer taking part in one build session."""

    pending: PendingDiagnostics = field(default_factory=PendingDiagnostics)
    reported: ReportedSet = field(default_factory=ReportedSet)


__all__ = ["AnalysisSession"]
