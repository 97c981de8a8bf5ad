"""Orchestration layer used by the CLI to check projects for sponsor diagnostics."""

from __future__ import annotations

import os
import threading
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Any, Callable, List, Mapping, MutableMapping, Sequence

from .analyzer import PROJECT_PATH_OPTION, CompilationContext, SponsorLinkAnalyzer
from .config import ProductConfig
from .logging import get_logger
from .models import SEVERITY_RANK, DiagnosticSeverity, ResolvedDiagnostic
from .state import AnalysisSession

_LOGGER = get_logger("service")


@dataclass(frozen=True, slots=True)
class ReportedDiagnostic:
    """A diagnostic as the host received it, with the project and product it belongs to."""

    project_path: str
    sponsorable: str
    product: str
    diagnostic: ResolvedDiagnostic

    def to_dict(self) -> dict[str, Any]:
        payload = self.diagnostic.to_dict()
        payload.update(
            {
                "project_path": self.project_path,
                "sponsorable": self.sponsorable,
                "product": self.product,
            }
        )
        return payload


@dataclass(slots=True)
class CheckResult:
    """Result returned by :class:`SponsorLinkService` runs."""

    diagnostics: list[ReportedDiagnostic]
    metadata: Mapping[str, Any]

    @property
    def highest_severity(self) -> DiagnosticSeverity | None:
        if not self.diagnostics:
            return None
        return max(
            (reported.diagnostic.severity for reported in self.diagnostics),
            key=lambda severity: SEVERITY_RANK[severity],
        )

    def counts_by_severity(self) -> dict[str, int]:
        counts: MutableMapping[DiagnosticSeverity, int] = {
            severity: 0 for severity in DiagnosticSeverity
        }
        for reported in self.diagnostics:
            counts[reported.diagnostic.severity] += 1
        return {severity.value: count for severity, count in counts.items()}


AnalyzerFactory = Callable[..., SponsorLinkAnalyzer]


class SponsorLinkService:
    """Run every configured product analyzer against a set of projects.

    All analyzers share one :class:`AnalysisSession`, so repeated checks of
    the same project through one service only report new diagnostics.
    """

    def __init__(
        self,
        products: Sequence[ProductConfig],
        *,
        session: AnalysisSession | None = None,
        analyzer_factory: AnalyzerFactory | None = None,
    ) -> None:
        if not products:
            raise ValueError("At least one sponsorable product must be configured")
        _check_distinct_prefixes(products)

        self.session = session or AnalysisSession()
        factory = analyzer_factory or SponsorLinkAnalyzer
        self.analyzers: List[SponsorLinkAnalyzer] = [
            factory(
                product.sponsorable,
                product.product,
                product.id_prefix,
                session=self.session,
            )
            for product in products
        ]

    # ------------------------------------------------------------------
    def check(
        self,
        project_paths: Sequence[str | os.PathLike[str]],
        *,
        jobs: int = 1,
        options: Mapping[str, str] | None = None,
    ) -> CheckResult:
        """Analyze each project with every analyzer and collect what was reported."""

        collected: list[ReportedDiagnostic] = []
        lock = threading.Lock()
        projects = [os.fspath(path) for path in project_paths]

        def run_project(project_path: str) -> None:
            project_options = dict(options or {})
            project_options[PROJECT_PATH_OPTION] = project_path
            for analyzer in self.analyzers:
                analyzer.analyze(
                    CompilationContext(
                        options=project_options,
                        report=self._collector(analyzer, project_path, collected, lock),
                    )
                )

        if jobs > 1 and len(projects) > 1:
            with ThreadPoolExecutor(max_workers=jobs) as executor:
                list(executor.map(run_project, projects))
        else:
            for project_path in projects:
                run_project(project_path)

        # Threads finish in any order; keep output stable for the same input.
        order = {path: index for index, path in enumerate(projects)}
        collected.sort(key=lambda reported: order[reported.project_path])

        _LOGGER.debug("Checked %d project(s), %d diagnostic(s)", len(projects), len(collected))
        metadata: dict[str, Any] = {
            "project_count": len(projects),
            "products": [f"{analyzer.sponsorable}/{analyzer.product}" for analyzer in self.analyzers],
        }
        return CheckResult(diagnostics=collected, metadata=metadata)

    # ------------------------------------------------------------------
    @staticmethod
    def _collector(
        analyzer: SponsorLinkAnalyzer,
        project_path: str,
        sink: list[ReportedDiagnostic],
        lock: threading.Lock,
    ) -> Callable[[ResolvedDiagnostic], None]:
        def report(diagnostic: ResolvedDiagnostic) -> None:
            with lock:
                sink.append(
                    ReportedDiagnostic(
                        project_path=project_path,
                        sponsorable=analyzer.sponsorable,
                        product=analyzer.product,
                        diagnostic=diagnostic,
                    )
                )

        return report


def _check_distinct_prefixes(products: Sequence[ProductConfig]) -> None:
    # The shared session keys reports by (id, project); ids only differ across
    # products when their prefixes do.
    owners: dict[str, ProductConfig] = {}
    for product in products:
        owner = owners.setdefault(product.id_prefix, product)
        if owner is not product and owner.key != product.key:
            raise ValueError(
                f"Products {owner.sponsorable}/{owner.product} and "
                f"{product.sponsorable}/{product.product} share the diagnostic id prefix "
                f"{product.id_prefix!r}; give each product its own id_prefix"
            )


__all__ = ["CheckResult", "ReportedDiagnostic", "SponsorLinkService"]
