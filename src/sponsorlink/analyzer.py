"""Per-project resolution of SponsorLink diagnostics."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Iterator, Mapping, Optional, Tuple

from .adapters import OverrideScanner, state_directory
from .descriptors import get_descriptors
from .logging import get_logger
from .models import DiagnosticDescriptor, ResolvedDiagnostic
from .reporting import DeduplicatingReporter
from .state import AnalysisSession

PROJECT_PATH_OPTION = "build_property.MSBuildProjectFullPath"

_LOGGER = get_logger("analyzer")


@dataclass(slots=True)
class CompilationContext:
    """Host view of a single analysis pass: its global options and report callback."""

    options: Mapping[str, str]
    report: Callable[[ResolvedDiagnostic], None]

    @property
    def project_path(self) -> Optional[str]:
        value = self.options.get(PROJECT_PATH_OPTION)
        if value is None or not str(value).strip():
            return None
        return str(value)

    def report_diagnostic(self, diagnostic: ResolvedDiagnostic) -> None:
        self.report(diagnostic)


class SponsorLinkAnalyzer:
    """Resolve and report sponsor diagnostics for one sponsorable and product.

    Descriptors are built once at construction; a misconfigured registry
    raises :class:`~sponsorlink.descriptors.DescriptorRegistryError` here
    rather than on every pass.
    """

    def __init__(
        self,
        sponsorable: str,
        product: str,
        id_prefix: str = "",
        *,
        session: AnalysisSession | None = None,
    ) -> None:
        self.sponsorable = sponsorable
        self.product = product
        self.id_prefix = id_prefix
        self.session = session or AnalysisSession()
        self._descriptors = get_descriptors(sponsorable, id_prefix)
        self._scanner = OverrideScanner(self._descriptors)
        self._reporter = DeduplicatingReporter(self.session.reported)

    @property
    def supported_diagnostics(self) -> Tuple[DiagnosticDescriptor, ...]:
        return self._descriptors

    def state_directory(self, project_path: str) -> Path:
        return state_directory(project_path, self.sponsorable, self.product)

    # ------------------------------------------------------------------
    def resolve(self, context: CompilationContext) -> Iterator[ResolvedDiagnostic]:
        """Yield the diagnostics that apply to the context's project.

        A pending diagnostic, when present, is the only result and the state
        directory is left untouched.
        """

        project_path = context.project_path
        if project_path is None:
            return

        pending = self.session.pending.pop(self.sponsorable, self.product, project_path)
        if pending is not None:
            yield pending
            return

        yield from self._scanner.scan(self.state_directory(project_path))

    def analyze(self, context: CompilationContext) -> int:
        """Run one analysis pass, returning how many diagnostics reached the host."""

        reported = 0
        for diagnostic in self.resolve(context):
            if self._reporter.report_once(context, diagnostic, self.sponsorable, self.product):
                reported += 1

        if context.project_path is not None:
            _LOGGER.debug(
                "%s/%s reported %d diagnostic(s) for %s",
                self.sponsorable,
                self.product,
                reported,
                context.project_path,
            )
        return reported


__all__ = ["CompilationContext", "PROJECT_PATH_OPTION", "SponsorLinkAnalyzer"]
