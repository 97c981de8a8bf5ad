"""Descriptor and diagnostic models shared across the scanner and reporters."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Dict, Optional, Tuple


class DiagnosticSeverity(str, Enum):
    """Severity levels a sponsor diagnostic can be reported with."""

    HIDDEN = "hidden"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"

    @classmethod
    def parse(cls, token: object) -> Optional["DiagnosticSeverity"]:
        """Return the severity named by ``token`` or ``None`` when unrecognised."""

        if isinstance(token, DiagnosticSeverity):
            return token
        if not isinstance(token, str):
            return None
        return _SEVERITY_ALIASES.get(token.strip().lower())


_SEVERITY_ALIASES = {
    "hidden": DiagnosticSeverity.HIDDEN,
    "info": DiagnosticSeverity.INFO,
    "information": DiagnosticSeverity.INFO,
    "informational": DiagnosticSeverity.INFO,
    "warning": DiagnosticSeverity.WARNING,
    "warn": DiagnosticSeverity.WARNING,
    "error": DiagnosticSeverity.ERROR,
}

SEVERITY_RANK = {
    DiagnosticSeverity.HIDDEN: 0,
    DiagnosticSeverity.INFO: 1,
    DiagnosticSeverity.WARNING: 2,
    DiagnosticSeverity.ERROR: 3,
}


@dataclass(frozen=True, slots=True)
class DiagnosticDescriptor:
    """Immutable template describing the static metadata of a diagnostic."""

    id: str
    title: str
    message_format: str
    category: str
    default_severity: DiagnosticSeverity
    is_enabled_by_default: bool = True
    description: str = ""
    help_link: Optional[str] = None
    custom_tags: Tuple[str, ...] = field(default_factory=tuple)

    def with_message(self, message_format: str) -> "DiagnosticDescriptor":
        """Return a copy of the descriptor that only differs in its message format."""

        return replace(self, message_format=message_format)


@dataclass(frozen=True, slots=True)
class ResolvedDiagnostic:
    """A descriptor combined with a concrete message, ready to be reported.

    ``location`` is always ``None``: hosts render sponsor reminders as
    project-level entries, and attaching a source location hid them in at
    least one IDE.
    """

    descriptor: DiagnosticDescriptor
    message: str
    severity: DiagnosticSeverity
    location: None = None

    @classmethod
    def create(cls, descriptor: DiagnosticDescriptor, *args: object) -> "ResolvedDiagnostic":
        """Build a diagnostic from ``descriptor``, formatting its message with ``args``."""

        message = descriptor.message_format.format(*args) if args else descriptor.message_format
        return cls(descriptor=descriptor, message=message, severity=descriptor.default_severity)

    @property
    def id(self) -> str:
        return self.descriptor.id

    @property
    def title(self) -> str:
        return self.descriptor.title

    @property
    def category(self) -> str:
        return self.descriptor.category

    @property
    def help_link(self) -> Optional[str]:
        return self.descriptor.help_link

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "message": self.message,
            "category": self.category,
            "severity": self.severity.value,
            "enabled": self.descriptor.is_enabled_by_default,
            "description": self.descriptor.description,
            "help_link": self.help_link,
            "custom_tags": list(self.descriptor.custom_tags),
            "location": None,
        }
