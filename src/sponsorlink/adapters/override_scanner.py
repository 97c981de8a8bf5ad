"""Read severity/text overrides left in a product state directory."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Dict, Iterator, List, Sequence

from ..logging import get_logger
from ..models import DiagnosticDescriptor, DiagnosticSeverity, OverrideFile, ResolvedDiagnostic

OVERRIDE_EXTENSION = ".txt"

_LOGGER = get_logger("adapters.override_scanner")


def state_directory(
    project_path: str | os.PathLike[str],
    sponsorable: str,
    product: str,
) -> Path:
    """Return ``<project dir>/obj/SponsorLink/<sponsorable>/<product>``."""

    return Path(project_path).parent / "obj" / "SponsorLink" / sponsorable / product


class OverrideScanner:
    """Turn override files into diagnostics using a fixed descriptor set."""

    def __init__(
        self,
        descriptors: Sequence[DiagnosticDescriptor],
        *,
        extension: str = OVERRIDE_EXTENSION,
    ) -> None:
        self._descriptors: Dict[str, DiagnosticDescriptor] = {}
        for descriptor in descriptors:
            self._descriptors.setdefault(descriptor.id, descriptor)
        self.extension = extension.lower()

    # ------------------------------------------------------------------
    def scan(self, state_dir: str | os.PathLike[str]) -> Iterator[ResolvedDiagnostic]:
        """Yield a diagnostic for every recognised override file, in listing order."""

        directory = Path(state_dir)
        if not directory.is_dir():
            return

        try:
            entries: List[Path] = list(directory.iterdir())
        except OSError as exc:
            _LOGGER.debug("Unable to list %s: %s", directory, exc)
            return

        for entry in entries:
            diagnostic = self._resolve(entry)
            if diagnostic is not None:
                yield diagnostic

    # ------------------------------------------------------------------
    def _resolve(self, path: Path) -> ResolvedDiagnostic | None:
        if path.suffix.lower() != self.extension or not path.is_file():
            return None

        override = OverrideFile.parse(path)
        if override is None:
            _LOGGER.debug("Skipping %s: expected <id>.<severity>%s", path.name, self.extension)
            return None

        descriptor = self._descriptors.get(override.diagnostic_id)
        if descriptor is None:
            _LOGGER.debug("Skipping %s: unknown diagnostic %s", path.name, override.diagnostic_id)
            return None

        try:
            message = override.read_message()
        except (OSError, UnicodeDecodeError) as exc:
            _LOGGER.debug("Skipping %s: %s", path.name, exc)
            return None

        requested = DiagnosticSeverity.parse(override.severity_token)
        if requested is not descriptor.default_severity:
            _LOGGER.debug(
                "%s requests severity %r; reporting with descriptor default %s",
                path.name,
                override.severity_token,
                descriptor.default_severity.value,
            )

        return ResolvedDiagnostic.create(descriptor.with_message(message))


__all__ = ["OVERRIDE_EXTENSION", "OverrideScanner", "state_directory"]
