"""Command-line interface package for SponsorLink diagnostics."""

from .app import build_parser, build_report, main, render_table, run

__all__ = [
    "build_parser",
    "build_report",
    "main",
    "render_table",
    "run",
]
