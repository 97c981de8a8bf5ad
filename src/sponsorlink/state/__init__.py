"""Concurrent state shared between analysis passes."""

from .pending import PendingDiagnostics, PendingKey
from .reported import ReportedKey, ReportedSet
from .session import AnalysisSession

__all__ = [
    "AnalysisSession",
    "PendingDiagnostics",
    "PendingKey",
    "ReportedKey",
    "ReportedSet",
]
