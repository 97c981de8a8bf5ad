"""Utilities for loading and merging SponsorLink product manifest files."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Mapping, MutableMapping, Sequence, Tuple

import yaml

from ..logging import get_logger

_LOGGER = get_logger("config")


class ProductManifestError(RuntimeError):
    """Raised when product manifests cannot be loaded or parsed."""


@dataclass(slots=True)
class ProductConfig:
    """A sponsorable/product pair whose diagnostics should be resolved."""

    sponsorable: str
    product: str
    id_prefix: str = ""
    enabled: bool = True

    @property
    def key(self) -> Tuple[str, str]:
        return (self.sponsorable, self.product)


class ProductManifestLoader:
    """Load product manifests and expose the enabled products."""

    def __init__(self, default_manifests: Sequence[Path | str] | None = None) -> None:
        self._default_manifests = [Path(path) for path in default_manifests or []]

    # ------------------------------------------------------------------
    def load(self, manifests: Sequence[Path | str] | None = None) -> List[ProductConfig]:
        """Return all products defined by the default and provided manifests."""

        manifest_paths = list(self._default_manifests)
        if manifests:
            manifest_paths.extend(Path(path) for path in manifests)

        products: MutableMapping[Tuple[str, str], ProductConfig] = {}
        for manifest_path in manifest_paths:
            data = self._load_manifest(manifest_path)
            entries = data.get("products") or []
            if not isinstance(entries, list):
                raise ProductManifestError(f"'products' must be a list: {manifest_path}")

            for entry in entries:
                if not isinstance(entry, Mapping):
                    continue

                sponsorable = str(entry.get("sponsorable") or "").strip()
                product = str(entry.get("product") or "").strip()
                if not sponsorable or not product:
                    _LOGGER.debug("Ignoring incomplete product entry in %s", manifest_path)
                    continue

                config = products.get((sponsorable, product))
                if config is None:
                    config = ProductConfig(sponsorable=sponsorable, product=product)
                if "enabled" in entry:
                    enabled = entry["enabled"]
                    if not isinstance(enabled, bool):
                        raise ProductManifestError(
                            f"'enabled' must be true or false for {sponsorable}/{product}: "
                            f"{manifest_path}"
                        )
                    config.enabled = enabled
                if entry.get("id_prefix") is not None:
                    config.id_prefix = str(entry["id_prefix"]).strip()

                products[config.key] = config

        return list(products.values())

    # ------------------------------------------------------------------
    def enabled_products(self, manifests: Sequence[Path | str] | None = None) -> List[ProductConfig]:
        """Return only the products that are enabled after merging manifests."""

        return [product for product in self.load(manifests) if product.enabled]

    # ------------------------------------------------------------------
    def _load_manifest(self, path: Path) -> Dict[str, Any]:
        if not path.exists():
            raise ProductManifestError(f"Product manifest not found: {path}")

        try:
            content = path.read_text(encoding="utf-8")
        except OSError as exc:  # pragma: no cover - filesystem errors surfaced to caller
            raise ProductManifestError(f"Failed to read product manifest {path}") from exc

        try:
            data = yaml.safe_load(content) or {}
        except yaml.YAMLError as exc:
            raise ProductManifestError(f"Invalid YAML in product manifest {path}") from exc

        if not isinstance(data, Mapping):
            raise ProductManifestError(f"Product manifest must be a mapping: {path}")

        return dict(data)


__all__ = ["ProductConfig", "ProductManifestError", "ProductManifestLoader"]
