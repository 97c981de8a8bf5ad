"""Resolve and report SponsorLink sponsor reminder diagnostics."""

from .analyzer import PROJECT_PATH_OPTION, CompilationContext, SponsorLinkAnalyzer
from .models import DiagnosticDescriptor, DiagnosticSeverity, ResolvedDiagnostic
from .state import AnalysisSession

__all__ = [
    "AnalysisSession",
    "CompilationContext",
    "DiagnosticDescriptor",
    "DiagnosticSeverity",
    "PROJECT_PATH_OPTION",
    "ResolvedDiagnostic",
    "SponsorLinkAnalyzer",
]
