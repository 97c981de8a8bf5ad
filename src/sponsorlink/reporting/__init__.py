"""Deduplicated reporting of sponsor diagnostics."""

from .deduplicating_reporter import DeduplicatingReporter, ReportingContext

__all__ = [
    "DeduplicatingReporter",
    "ReportingContext",
]
