"""The fixed set of SponsorLink diagnostic descriptors."""

from __future__ import annotations

from typing import List, Tuple

from ..models import DiagnosticDescriptor, DiagnosticSeverity

CATEGORY = "SponsorLink"
APP_INSTALL_LINK = "https://github.com/apps/sponsorlink"
_CUSTOM_TAGS = ("DoesNotSupportF1Help",)


class DescriptorRegistryError(RuntimeError):
    """Raised when the descriptor set for a sponsorable cannot be built."""


def get_descriptors(sponsorable: str, id_prefix: str = "") -> Tuple[DiagnosticDescriptor, ...]:
    """Return the descriptors reported on behalf of ``sponsorable``.

    Ids are always ``{id_prefix}SL{nn}`` so that override files written by an
    earlier build step keep matching across runs. Passing ``"DL"`` as the
    prefix turns ``SL03`` into ``DLSL03``.
    """

    sponsorable = (sponsorable or "").strip()
    if not sponsorable:
        raise DescriptorRegistryError("A sponsorable account is required to build descriptors")

    id_prefix = id_prefix or ""
    if "." in id_prefix or any(char.isspace() for char in id_prefix):
        raise DescriptorRegistryError(
            f"Diagnostic id prefix must not contain dots or whitespace: {id_prefix!r}"
        )

    sponsors_link = f"https://github.com/sponsors/{sponsorable}"
    descriptors = (
        DiagnosticDescriptor(
            id=f"{id_prefix}SL01",
            title="SponsorLink GitHub app not installed",
            message_format=(
                f"{sponsorable} uses SponsorLink to attribute your sponsorship. "
                "Install the SponsorLink GitHub app to link it to this build."
            ),
            category=CATEGORY,
            default_severity=DiagnosticSeverity.WARNING,
            description="Sponsorship status cannot be determined until the SponsorLink app is installed.",
            help_link=APP_INSTALL_LINK,
            custom_tags=_CUSTOM_TAGS,
        ),
        DiagnosticDescriptor(
            id=f"{id_prefix}SL02",
            title="Not sponsoring",
            message_format=(
                f"Please consider supporting {sponsorable} by sponsoring them on GitHub."
            ),
            category=CATEGORY,
            default_severity=DiagnosticSeverity.WARNING,
            description=f"No active sponsorship of {sponsorable} was found for the current user.",
            help_link=sponsors_link,
            custom_tags=_CUSTOM_TAGS,
        ),
        DiagnosticDescriptor(
            id=f"{id_prefix}SL03",
            title="Thanks for sponsoring",
            message_format=f"Thank you for sponsoring {sponsorable}!",
            category=CATEGORY,
            default_severity=DiagnosticSeverity.INFO,
            description=f"An active sponsorship of {sponsorable} was found.",
            help_link=sponsors_link,
            custom_tags=_CUSTOM_TAGS,
        ),
        DiagnosticDescriptor(
            id=f"{id_prefix}SL04",
            title="Sponsorship expired",
            message_format=(
                f"Your sponsorship of {sponsorable} has expired. Renew it to keep "
                "supporting their work."
            ),
            category=CATEGORY,
            default_severity=DiagnosticSeverity.WARNING,
            description=f"A previous sponsorship of {sponsorable} is no longer active.",
            help_link=sponsors_link,
            custom_tags=_CUSTOM_TAGS,
        ),
    )

    _validate(descriptors)
    return descriptors


def _validate(descriptors: Tuple[DiagnosticDescriptor, ...]) -> None:
    if not descriptors:
        raise DescriptorRegistryError("Descriptor registry produced no descriptors")

    seen: List[str] = []
    for descriptor in descriptors:
        if not descriptor.id:
            raise DescriptorRegistryError("Descriptor registry produced an empty diagnostic id")
        if descriptor.id in seen:
            raise DescriptorRegistryError(f"Duplicate diagnostic id: {descriptor.id}")
        seen.append(descriptor.id)


__all__ = ["CATEGORY", "DescriptorRegistryError", "get_descriptors"]
