"""Forward diagnostics to the host at most once per project and session."""

from __future__ import annotations

from typing import Optional, Protocol

from ..logging import get_logger
from ..models import ResolvedDiagnostic
from ..state import ReportedSet

_LOGGER = get_logger("reporting")


class ReportingContext(Protocol):
    """What the reporter needs from a host analysis context."""

    @property
    def project_path(self) -> Optional[str]: ...

    def report_diagnostic(self, diagnostic: ResolvedDiagnostic) -> None: ...


class DeduplicatingReporter:
    """Report each (diagnostic id, project) pair once for the lifetime of ``reported``."""

    def __init__(self, reported: ReportedSet) -> None:
        self.reported = reported

    def report_once(
        self,
        context: ReportingContext,
        diagnostic: ResolvedDiagnostic,
        sponsorable: str,
        product: str,
    ) -> bool:
        """Forward ``diagnostic`` unless it was already reported for the project."""

        project_path = context.project_path
        if not self.reported.add(diagnostic.id, project_path):
            _LOGGER.debug(
                "%s already reported for %s (%s/%s)", diagnostic.id, project_path, sponsorable, product
            )
            return False

        _LOGGER.debug("Reporting %s for %s (%s/%s)", diagnostic.id, project_path, sponsorable, product)
        context.report_diagnostic(diagnostic)
        return True


__all__ = ["DeduplicatingReporter", "ReportingContext"]
