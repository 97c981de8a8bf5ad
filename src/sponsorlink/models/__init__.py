"""Data models for sponsor diagnostics and their on-disk overrides."""

from .diagnostic import (
    SEVERITY_RANK,
    DiagnosticDescriptor,
    DiagnosticSeverity,
    ResolvedDiagnostic,
)
from .override import OverrideFile

__all__ = [
    "DiagnosticDescriptor",
    "DiagnosticSeverity",
    "OverrideFile",
    "ResolvedDiagnostic",
    "SEVERITY_RANK",
]
