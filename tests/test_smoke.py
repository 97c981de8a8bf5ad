"""Minimal smoke tests for the sponsorlink package."""


def test_package_importable() -> None:
    """Ensure the top-level package exposes the expected namespace."""
    import sponsorlink  # noqa: F401  # Imported for side effects

    assert sponsorlink.PROJECT_PATH_OPTION == "build_property.MSBuildProjectFullPath"
