"""Adapter layer for reading SponsorLink state left on disk."""

from .override_scanner import OVERRIDE_EXTENSION, OverrideScanner, state_directory

__all__ = [
    "OVERRIDE_EXTENSION",
    "OverrideScanner",
    "state_directory",
]
