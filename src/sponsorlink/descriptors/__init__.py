"""Descriptor registry for SponsorLink diagnostics."""

from .registry import CATEGORY, DescriptorRegistryError, get_descriptors

__all__ = [
    "CATEGORY",
    "DescriptorRegistryError",
    "get_descriptors",
]
