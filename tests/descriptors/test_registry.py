import pytest

from sponsorlink.descriptors import CATEGORY, DescriptorRegistryError, get_descriptors
from sponsorlink.models import DiagnosticSeverity


def test_descriptors_are_deterministic():
    first = get_descriptors("devlooped")
    second = get_descriptors("devlooped")

    assert first == second
    assert [descriptor.id for descriptor in first] == ["SL01", "SL02", "SL03", "SL04"]
    assert all(descriptor.category == CATEGORY for descriptor in first)


def test_prefix_is_prepended_to_ids():
    ids = [descriptor.id for descriptor in get_descriptors("devlooped", "DL")]

    assert ids == ["DLSL01", "DLSL02", "DLSL03", "DLSL04"]


def test_descriptors_mention_sponsorable():
    descriptors = {descriptor.id: descriptor for descriptor in get_descriptors("kzu")}

    assert "kzu" in descriptors["SL02"].message_format
    assert descriptors["SL02"].help_link == "https://github.com/sponsors/kzu"
    assert descriptors["SL03"].default_severity is DiagnosticSeverity.INFO
    assert descriptors["SL02"].is_enabled_by_default is True


@pytest.mark.parametrize(
    ("sponsorable", "prefix"),
    [("", ""), ("   ", ""), ("devlooped", "D.L"), ("devlooped", "D L")],
)
def test_misconfiguration_raises(sponsorable, prefix):
    with pytest.raises(DescriptorRegistryError):
        get_descriptors(sponsorable, prefix)
