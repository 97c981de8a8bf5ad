"""Product manifest configuration."""

from .product_manifest import ProductConfig, ProductManifestError, ProductManifestLoader

__all__ = [
    "ProductConfig",
    "ProductManifestError",
    "ProductManifestLoader",
]
